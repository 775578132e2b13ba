"""Generic adapter that works with any JSON payload.

Root detection strategy:
1. List payload -> "records"
2. Object with list properties -> the list with the most items
3. Object with no lists -> the whole object as a single "record"
4. Anything else -> a single-element "records" table
"""

import re
from datetime import datetime, timezone
from typing import Any

from .base import LeanAdapter

# Values that MUST bypass dictionary encoding so agents can use them
# directly as follow-up tool call arguments.
URL_RE = re.compile(r"^https?://", re.IGNORECASE)
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
ODATA_DATE_RE = re.compile(r"^/Date\((\d+)\)/$")
PATH_LIKE_RE = re.compile(r"[/\\]")

HTML_TAG_RE = re.compile(r"</?[^>]+(?:>|$)")
WHITESPACE_COLLAPSE_RE = re.compile(r"\s+")

MIN_CANDIDATE_LENGTH = 4


def strip_html_tags(value: str) -> str:
    """Remove HTML tags, collapse runs of whitespace and trim."""
    without_tags = HTML_TAG_RE.sub("", value)
    return WHITESPACE_COLLAPSE_RE.sub(" ", without_tags).strip()


def odata_to_iso(value: str) -> str | None:
    """
    Convert an OData v2 ``/Date(ms)/`` literal to ISO-8601 UTC.

    Returns:
        e.g. "2024-01-15T08:00:00.000Z", or None when value is not an OData date
    """
    match = ODATA_DATE_RE.match(value)
    if not match:
        return None
    millis = int(match.group(1))
    moment = datetime.fromtimestamp(millis // 1000, tz=timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{millis % 1000:03d}Z"


def is_guarded_value(value: str) -> bool:
    """True for URLs, path-like strings, ISO dates and OData dates."""
    return bool(
        URL_RE.search(value)
        or PATH_LIKE_RE.search(value)
        or ISO_DATE_RE.search(value)
        or ODATA_DATE_RE.search(value)
    )


class GenericAdapter(LeanAdapter):
    """Default adapter: suppresses nothing, strips HTML, guards URLs and dates."""

    name = "generic"

    def __init__(self, strip_html: bool = True):
        self.strip_html = strip_html
        self.skip_patterns: list[re.Pattern] = []

    def find_root(self, payload: Any) -> tuple[str, list[Any]]:
        if isinstance(payload, list):
            return "records", payload

        if isinstance(payload, dict):
            candidates = [(key, value) for key, value in payload.items() if isinstance(value, list)]
            if not candidates:
                return "record", [payload]
            # Largest array is most likely the primary data set; first wins ties
            return max(candidates, key=lambda item: len(item[1]))

        return "records", [payload]

    def should_skip_key(self, key_path: str, value: Any) -> bool:
        return False

    def should_dictionary_encode(self, value: str) -> bool:
        if not value or len(value) < MIN_CANDIDATE_LENGTH:
            return False
        return not is_guarded_value(value)

    def normalize_value(self, value: Any) -> Any:
        """
        Applied to every value before encoding.

        1. OData /Date(ms)/ -> ISO-8601 string
        2. When strip_html is on: strip tags, collapse whitespace, trim
        """
        if not isinstance(value, str):
            return value

        converted = odata_to_iso(value)
        if converted is not None:
            return converted

        if self.strip_html:
            return strip_html_tags(value)
        return value
