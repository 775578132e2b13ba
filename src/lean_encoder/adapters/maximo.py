"""Adapter for IBM Maximo OSLC/REST collection responses.

- Root from ``member``, ``rdfs:member`` or a working-set ``{key: {member: [...]}}``
- Table name derived from the collection href (``/oslc/os/mxwo`` -> ``mxwo``)
- OSLC pagination, rowstamps and RDF identifiers are suppressed
- ``spi:``/``rdf:``/``oslc:``/``dcterms:``/``rdfs:`` prefixes are stripped from paths
- ``href`` is kept: it is the record self-link agents use for follow-up calls
"""

import re
from typing import Any

from .base import LeanAdapter
from .generic import GenericAdapter, is_guarded_value

MAXIMO_SKIP_PATTERNS = [
    re.compile(r"_collectionref$", re.IGNORECASE),
    re.compile(r"^localref$", re.IGNORECASE),
    re.compile(r"^_rowstamp$", re.IGNORECASE),
    re.compile(r"^about$", re.IGNORECASE),
    re.compile(r"^rdf:about$", re.IGNORECASE),
    re.compile(r"^rdf:type$", re.IGNORECASE),
    re.compile(r"^rdf:resource$", re.IGNORECASE),
]

NAMESPACE_PREFIX_RE = re.compile(r"^(?:spi|rdf|oslc|dcterms|rdfs):")
OBJECT_STRUCTURE_RE = re.compile(r"/oslc/os/([a-z0-9_]+)", re.IGNORECASE)


def strip_namespace(segment: str) -> str:
    return NAMESPACE_PREFIX_RE.sub("", segment)


class MaximoAdapter(LeanAdapter):
    """Maximo adapter with namespace stripping and OSLC noise suppression."""

    name = "maximo"

    def __init__(self, strip_html: bool = True):
        self._base = GenericAdapter(strip_html=strip_html)
        self.skip_patterns = list(MAXIMO_SKIP_PATTERNS)

    def find_root(self, payload: Any) -> tuple[str, list[Any]]:
        if not isinstance(payload, dict):
            return self._base.find_root(payload)

        def derive_name(fallback: str) -> str:
            href = payload.get("href")
            match = OBJECT_STRUCTURE_RE.search(href) if isinstance(href, str) else None
            return match.group(1).lower() if match else fallback

        if isinstance(payload.get("member"), list):
            return derive_name("member"), payload["member"]

        if isinstance(payload.get("rdfs:member"), list):
            return derive_name("member"), payload["rdfs:member"]

        # Working-set shape: top-level key whose child holds the member array
        for key, value in payload.items():
            if isinstance(value, dict) and isinstance(value.get("member"), list):
                return derive_name(key), value["member"]

        return self._base.find_root(payload)

    def should_skip_key(self, key_path: str, value: Any) -> bool:
        leaf = strip_namespace(key_path.rsplit(".", 1)[-1])
        return leaf in ("localref", "about")

    def normalize_path(self, key_path: str) -> str:
        return ".".join(strip_namespace(segment) for segment in key_path.split("."))

    def should_dictionary_encode(self, value: str) -> bool:
        if not value or len(value) < 4:
            return False
        return not is_guarded_value(value)

    def normalize_value(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        # Enumeration values sometimes carry a namespace prefix too
        return self._base.normalize_value(strip_namespace(value))
