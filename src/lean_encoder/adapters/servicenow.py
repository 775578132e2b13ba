"""Adapter for ServiceNow REST Table API responses.

Reference fields arrive as ``{"link": url, "value": sys_id}``; the link half
is dropped and the value kept.
"""

from typing import Any

from .base import LeanAdapter
from .generic import GenericAdapter

SKIPPED_LEAVES = frozenset({"sys_class_name", "sys_domain", "sys_domain_path"})


class ServiceNowAdapter(LeanAdapter):
    name = "servicenow"

    def __init__(self, strip_html: bool = True):
        self._base = GenericAdapter(strip_html=strip_html)
        self.skip_patterns = []

    def find_root(self, payload: Any) -> tuple[str, list[Any]]:
        if isinstance(payload, dict) and isinstance(payload.get("result"), list):
            return "incident", payload["result"]
        return self._base.find_root(payload)

    def should_skip_key(self, key_path: str, value: Any) -> bool:
        leaf = key_path.rsplit(".", 1)[-1]
        if leaf == "link" and isinstance(value, str) and value.startswith("http"):
            return True
        return leaf in SKIPPED_LEAVES

    def should_dictionary_encode(self, value: str) -> bool:
        return self._base.should_dictionary_encode(value)

    def normalize_value(self, value: Any) -> Any:
        return self._base.normalize_value(value)
