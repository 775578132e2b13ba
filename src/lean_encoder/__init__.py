"""LEAN encoder - compact line-oriented wire format for JSON API payloads."""

__version__ = "0.1.0"

from .adapters import (
    GenericAdapter,
    LeanAdapter,
    MaximoAdapter,
    SAPAdapter,
    ServiceNowAdapter,
    get_adapter,
)
from .config import EncoderConfig
from .core import EncodeResult, LeanEncoder
from .errors import CapabilityContractError, EmptyRootError, LeanError, SerializationError

__all__ = [
    "CapabilityContractError",
    "EmptyRootError",
    "EncodeResult",
    "EncoderConfig",
    "GenericAdapter",
    "LeanAdapter",
    "LeanEncoder",
    "LeanError",
    "MaximoAdapter",
    "SAPAdapter",
    "SerializationError",
    "ServiceNowAdapter",
    "__version__",
    "get_adapter",
]
