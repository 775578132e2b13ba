"""Data models for the flattening pipeline and encode results."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class PendingValue:
    """
    Dictionary candidate awaiting slot resolution.

    Holds the raw string registered during pass 1. Pass 2 replaces it with
    the escaped pointer token or the escaped literal.
    """

    raw: str


FieldValue = Union[str, PendingValue]


@dataclass
class Row:
    """
    One flattened record inside a table.

    Invariants:
    - id is unique and sequential from 0 within the owning table
    - parent_id is set for every child-table row, never for root rows
    - fields keeps first-encoded order
    """

    id: int
    parent_id: Optional[int] = None
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def tokens(self) -> list[str]:
        """Render the row as wire tokens (``_id``, optional ``_p``, then fields)."""
        parts = [f"_id:{self.id}"]
        if self.parent_id is not None:
            parts.append(f"_p:{self.parent_id}")
        for key, value in self.fields.items():
            if isinstance(value, PendingValue):
                raise ValueError(f"Row {self.id} field '{key}' is unresolved")
            parts.append(f"{key}:{value}")
        return parts


@dataclass
class Table:
    """Named, ordered collection of rows."""

    name: str
    rows: list[Row] = field(default_factory=list)

    def new_row(self, parent_id: Optional[int] = None) -> Row:
        """Append a row with the next sequential id."""
        row = Row(id=len(self.rows), parent_id=parent_id)
        self.rows.append(row)
        return row


@dataclass
class EncodeResult:
    """Outcome of a single encode call."""

    encoded: str  # LEAN document, or raw JSON when compressed is False
    compressed: bool
    original_size: int  # UTF-8 bytes of the canonical JSON
    encoded_size: int
    ratio: float  # encoded_size / original_size, < 1 means smaller

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "encoded": self.encoded,
            "compressed": self.compressed,
            "original_size": self.original_size,
            "encoded_size": self.encoded_size,
            "ratio": self.ratio,
        }
