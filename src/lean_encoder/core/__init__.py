"""Core LEAN encoding pipeline."""

from .circuit_breaker import CircuitBreaker
from .dictionary import Dictionary
from .encoder import LEAN_HEADER, LeanEncoder
from .models import EncodeResult, PendingValue, Row, Table
from .schema import SchemaRegistry
from .table_builder import TableBuilder, escape_value

__all__ = [
    "CircuitBreaker",
    "Dictionary",
    "EncodeResult",
    "LEAN_HEADER",
    "LeanEncoder",
    "PendingValue",
    "Row",
    "SchemaRegistry",
    "Table",
    "TableBuilder",
    "escape_value",
]
