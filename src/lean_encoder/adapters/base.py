"""Capability contract for vendor-specific payload handling.

Every root-detection, field-suppression, normalization and dictionary
eligibility decision is injected through a LeanAdapter. The core pipeline
never inspects which adapter it was given.
"""

import re
from abc import ABC, abstractmethod
from typing import Any


class LeanAdapter(ABC):
    """Abstract base class for payload adapters."""

    # Human-readable adapter name, e.g. "maximo", "servicenow", "generic"
    name: str = "base"

    # Regexes searched against the leaf segment and the full key path;
    # a hit drops the field in addition to should_skip_key().
    skip_patterns: tuple[re.Pattern, ...] = ()

    @abstractmethod
    def find_root(self, payload: Any) -> tuple[str, list[Any]]:
        """
        Locate the primary record array within the raw payload.

        Returns:
            (table_name, records) tuple
        """

    @abstractmethod
    def should_skip_key(self, key_path: str, value: Any) -> bool:
        """
        Check if a field should be omitted entirely.

        Args:
            key_path: Dot-separated full path, e.g. "member._collectionref"
            value: The raw value at that path
        """

    @abstractmethod
    def should_dictionary_encode(self, value: str) -> bool:
        """
        Check if a string is a dictionary candidate.

        Implementations MUST return False for URLs, path-like strings and
        ISO-8601 dates so those values always stay inline.
        """

    @abstractmethod
    def normalize_value(self, value: Any) -> Any:
        """Transform a raw value before any encoding decision."""

    def normalize_path(self, key_path: str) -> str:
        """Rewrite a key path before it is registered in the schema."""
        return key_path

    def get_metadata(self) -> dict[str, Any]:
        """Return adapter metadata for log context."""
        return {"adapter": self.name, "skip_patterns": len(self.skip_patterns)}
