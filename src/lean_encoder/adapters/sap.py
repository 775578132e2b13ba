"""Adapter for SAP OData v2/v4 responses.

- OData v2: root at ``d.results``
- OData v4: root at ``value``
- ``__metadata`` and ``__deferred`` are infrastructure noise
- ``/Date(ms)/`` literals become ISO-8601 via the generic normalizer
"""

import re
from typing import Any

from .base import LeanAdapter
from .generic import GenericAdapter


class SAPAdapter(LeanAdapter):
    name = "sap"

    def __init__(self, strip_html: bool = True):
        self._base = GenericAdapter(strip_html=strip_html)
        self.skip_patterns = [re.compile(r"^__metadata"), re.compile(r"^__deferred")]

    def find_root(self, payload: Any) -> tuple[str, list[Any]]:
        if isinstance(payload, dict):
            envelope = payload.get("d")
            if isinstance(envelope, dict) and isinstance(envelope.get("results"), list):
                return "entity", envelope["results"]
            if isinstance(payload.get("value"), list):
                return "entity", payload["value"]
        return self._base.find_root(payload)

    def should_skip_key(self, key_path: str, value: Any) -> bool:
        return "__metadata" in key_path or "__deferred" in key_path

    def should_dictionary_encode(self, value: str) -> bool:
        return self._base.should_dictionary_encode(value)

    def normalize_value(self, value: Any) -> Any:
        return self._base.normalize_value(value)
