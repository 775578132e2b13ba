"""LEAN encoder: the pipeline orchestrator.

Encoding pipeline:

  1. adapter.find_root             -> locate the primary record array
  2. TableBuilder.build_root       -> pass 1: flatten, collect dictionary candidates
  3. Dictionary.build_slots        -> pass 1.5: assign *N slots
  4. TableBuilder.resolve_dictionary -> pass 2: finalize pending values
  5. assemble                      -> header + DICT + SCHEMA + DATA blocks
  6. CircuitBreaker                -> fall back to raw JSON when not beneficial

Dictionary, SchemaRegistry and TableBuilder are created per call, so one
LeanEncoder can be shared freely.
"""

import json
from typing import Any, Optional

from loguru import logger

from ..adapters import LeanAdapter, get_adapter
from ..config import EncoderConfig
from ..errors import CapabilityContractError, EmptyRootError, LeanError, SerializationError
from .circuit_breaker import CircuitBreaker
from .dictionary import Dictionary
from .models import EncodeResult, Table
from .schema import SchemaRegistry
from .table_builder import TableBuilder

LEAN_HEADER = "### LEAN FORMAT v1"
DICT_HEADER = "### DICT"
SCHEMA_HEADER = "### SCHEMA"
DATA_HEADER = "### DATA: {name}"


def canonical_json(payload: Any) -> str:
    """
    Render payload as compact JSON, the form sizes are measured against.

    Non-finite floats are rejected since NaN and Infinity are not JSON, and
    so are lone surrogates since they have no UTF-8 encoding.

    Raises:
        SerializationError: If payload is not JSON-serializable
    """
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"Payload is not JSON-serializable: {e}") from e
    return text


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def assemble_document(
    dictionary: Dictionary, schema: SchemaRegistry, tables: dict[str, Table]
) -> str:
    """Join the DICT, SCHEMA and DATA sections into the wire document."""
    lines = [LEAN_HEADER, ""]

    dict_lines = dictionary.emit_block()
    if dict_lines:
        lines.append(DICT_HEADER)
        lines.extend(dict_lines)
        lines.append("")

    schema_lines = schema.emit_block()
    if schema_lines:
        lines.append(SCHEMA_HEADER)
        lines.extend(schema_lines)
        lines.append("")

    for table in tables.values():
        if not table.rows:
            continue
        lines.append(DATA_HEADER.format(name=table.name))
        lines.extend(" ".join(row.tokens()) for row in table.rows)
        lines.append("")

    return "\n".join(lines).rstrip()


class LeanEncoder:
    """
    Converts JSON payloads to the LEAN wire format.

    The adapter is fixed at construction: either passed explicitly or built
    from config.adapter by name.
    """

    def __init__(
        self,
        config: Optional[EncoderConfig] = None,
        adapter: Optional[LeanAdapter] = None,
    ):
        self.config = config or EncoderConfig()
        self.config.validate()
        self.adapter = adapter or get_adapter(
            self.config.adapter, strip_html=self.config.strip_html
        )
        self._breaker = CircuitBreaker()
        logger.debug(
            f"LeanEncoder configured: {self.config.to_dict()} {self.adapter.get_metadata()}"
        )

    def encode(self, payload: Any) -> EncodeResult:
        """
        Encode a payload, falling back to raw JSON when LEAN does not help.

        Args:
            payload: Any JSON-serializable value

        Returns:
            EncodeResult; compressed is False when raw JSON was returned

        Raises:
            SerializationError: If payload cannot be rendered as JSON
            EmptyRootError: If the root array is empty and fallback_on_fail is off
            CapabilityContractError: If an adapter hook fails and fallback_on_fail is off
        """
        raw_json = canonical_json(payload)
        original_size = byte_length(raw_json)

        try:
            encoded = self._run_pipeline(payload)
        except LeanError as e:
            if not self.config.fallback_on_fail:
                raise
            logger.warning(f"LEAN encoding failed, returning raw JSON: {e}")
            return self._fallback_result(raw_json, original_size)

        encoded_size = byte_length(encoded)
        if self._breaker.should_fallback(encoded_size, original_size):
            logger.info(
                f"Circuit breaker fired: encoded {encoded_size}B >= raw {original_size}B"
            )
            return self._fallback_result(raw_json, original_size)

        ratio = round(self._breaker.ratio(encoded_size, original_size), 3)
        logger.debug(f"LEAN encoded {original_size}B -> {encoded_size}B (ratio {ratio})")
        return EncodeResult(
            encoded=encoded,
            compressed=True,
            original_size=original_size,
            encoded_size=encoded_size,
            ratio=ratio,
        )

    def encode_to_string(self, payload: Any) -> str:
        """Encode and return only the text (LEAN document or raw JSON)."""
        return self.encode(payload).encoded

    def _run_pipeline(self, payload: Any) -> str:
        try:
            table_name, records = self.adapter.find_root(payload)
        except Exception as e:
            raise CapabilityContractError(self.adapter.name, e) from e

        if not records:
            raise EmptyRootError(table_name)

        dictionary = Dictionary(self.config.dict_min_length, self.config.dict_min_frequency)
        schema = SchemaRegistry()
        builder = TableBuilder(
            schema, dictionary, self.adapter, skip_empty_strings=self.config.skip_empty_strings
        )

        try:
            builder.build_root(table_name, records)
        except Exception as e:
            raise CapabilityContractError(self.adapter.name, e) from e

        dictionary.build_slots()
        builder.resolve_dictionary()

        logger.debug(
            f"Flattened {len(records)} records from '{table_name}' into "
            f"{len(builder.tables)} tables ({schema.size} schema keys, "
            f"{dictionary.size} dictionary slots, {self.adapter.get_metadata()})"
        )

        return assemble_document(dictionary, schema, builder.tables)

    @staticmethod
    def _fallback_result(raw_json: str, original_size: int) -> EncodeResult:
        return EncodeResult(
            encoded=raw_json,
            compressed=False,
            original_size=original_size,
            encoded_size=original_size,
            ratio=1.0,
        )
