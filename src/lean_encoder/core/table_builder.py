"""Flattens nested JSON records into relational tables.

Rules:
- Keys are visited in lexicographic order so schema keys do not depend on
  source field order
- Nested plain objects are flattened inline under a dotted path
- Non-empty arrays of objects become child tables linked via ``_p``
- Non-empty arrays of scalars are joined with ``|``
- Empty arrays are dropped, empty strings too when skip_empty_strings is set

Every content decision (skipping, value and path normalization, dictionary
eligibility) is delegated to the adapter.

Two-pass encoding:
  Pass 1   - build_root: flatten, register dictionary candidates as PendingValue
  Pass 1.5 - Dictionary.build_slots (driven by the encoder)
  Pass 2   - resolve_dictionary: PendingValue -> escaped pointer or literal
"""

import json
import math
import re
from typing import Any, Iterable, Optional

from ..adapters.base import LeanAdapter
from .dictionary import Dictionary
from .models import FieldValue, PendingValue, Row, Table
from .schema import SchemaRegistry

VALUE_PATH = "_value"
ARRAY_JOINER = "|"

_WHITESPACE_RE = re.compile(r"\s")


def escape_value(text: str) -> str:
    """
    Quote a value that would otherwise be ambiguous on the wire.

    Values containing whitespace (field separator), a colon (key/value
    separator) or starting with ``*`` (pointer token) are wrapped in double
    quotes with backslashes and quotes escaped.
    """
    if _WHITESPACE_RE.search(text) or ":" in text or text.startswith("*"):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def scalar_text(value: Any) -> str:
    """Textual form of a scalar, matching its JSON rendering for non-strings."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class TableBuilder:
    """Depth-first flattener owning every table built during one encode call."""

    def __init__(
        self,
        schema: SchemaRegistry,
        dictionary: Dictionary,
        adapter: LeanAdapter,
        skip_empty_strings: bool = True,
    ):
        self.schema = schema
        self.dictionary = dictionary
        self.adapter = adapter
        self.skip_empty_strings = skip_empty_strings
        self._tables: dict[str, Table] = {}

    @property
    def tables(self) -> dict[str, Table]:
        """Tables in emission order: root first, then children as first referenced."""
        return self._tables

    def build_root(self, table_name: str, records: Iterable[Any]) -> None:
        """Flatten every record as a row of the root table (pass 1)."""
        for record in records:
            self._flatten_record(table_name, record, parent_id=None, prefix="")

    def resolve_dictionary(self) -> None:
        """Replace every PendingValue with its final escaped text (pass 2)."""
        for table in self._tables.values():
            for row in table.rows:
                for key, value in row.fields.items():
                    if isinstance(value, PendingValue):
                        row.fields[key] = escape_value(self.dictionary.resolve(value.raw))

    # ------------------------------------------------------------------
    # Pass 1 internals
    # ------------------------------------------------------------------

    def _table(self, name: str) -> Table:
        table = self._tables.get(name)
        if table is None:
            table = Table(name=name)
            self._tables[name] = table
        return table

    def _flatten_record(
        self, table_name: str, record: Any, parent_id: Optional[int], prefix: str
    ) -> Row:
        row = self._table(table_name).new_row(parent_id)

        if isinstance(record, dict) and record:
            self._flatten_fields(table_name, row, record, prefix)
        elif record is None or record == {} or record == []:
            row.fields[self.schema.key(VALUE_PATH)] = "null"
        elif isinstance(record, list):
            joined = ARRAY_JOINER.join(scalar_text(item) for item in record)
            row.fields[self.schema.key(VALUE_PATH)] = self._encode_scalar(joined)
        else:
            row.fields[self.schema.key(VALUE_PATH)] = self._encode_scalar(record)

        return row

    def _flatten_fields(
        self, table_name: str, row: Row, obj: dict[str, Any], prefix: str
    ) -> None:
        for key in sorted(obj, key=str):
            raw_value = obj[key]
            full_path = f"{prefix}.{key}" if prefix else str(key)

            if self._should_skip(full_path, raw_value):
                continue

            value = self.adapter.normalize_value(raw_value)

            if isinstance(value, list):
                if not value:
                    continue
                if isinstance(value[0], dict):
                    child_table = f"{table_name}.{key}"
                    for item in value:
                        self._flatten_record(child_table, item, parent_id=row.id, prefix=str(key))
                    continue
                value = ARRAY_JOINER.join(scalar_text(item) for item in value)
            elif isinstance(value, dict):
                self._flatten_fields(table_name, row, value, full_path)
                continue

            if self.skip_empty_strings and value == "":
                continue

            schema_key = self.schema.key(self.adapter.normalize_path(full_path))
            row.fields[schema_key] = self._encode_scalar(value)

    def _should_skip(self, key_path: str, value: Any) -> bool:
        if self.adapter.should_skip_key(key_path, value):
            return True

        patterns = self.adapter.skip_patterns
        if not patterns:
            return False

        leaf = key_path.rsplit(".", 1)[-1]
        return any(p.search(leaf) or p.search(key_path) for p in patterns)

    def _encode_scalar(self, value: Any) -> FieldValue:
        if value is None or isinstance(value, (bool, int, float)):
            return scalar_text(value)

        text = scalar_text(value)
        if self.adapter.should_dictionary_encode(text):
            self.dictionary.register(text)
            return PendingValue(text)
        return escape_value(text)
