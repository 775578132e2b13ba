"""Built-in payload adapters and name-based lookup."""

from .base import LeanAdapter
from .generic import GenericAdapter
from .maximo import MaximoAdapter
from .sap import SAPAdapter
from .servicenow import ServiceNowAdapter

ADAPTERS: dict[str, type[LeanAdapter]] = {
    GenericAdapter.name: GenericAdapter,
    MaximoAdapter.name: MaximoAdapter,
    ServiceNowAdapter.name: ServiceNowAdapter,
    SAPAdapter.name: SAPAdapter,
}


def available_adapters() -> list[str]:
    """Registered adapter names, sorted."""
    return sorted(ADAPTERS)


def get_adapter(name: str, **kwargs) -> LeanAdapter:
    """
    Instantiate a built-in adapter by name.

    Args:
        name: Registered adapter name (case-insensitive)
        **kwargs: Passed to the adapter constructor (e.g. strip_html)

    Raises:
        ValueError: If no adapter is registered under name
    """
    adapter_cls = ADAPTERS.get(name.lower())
    if adapter_cls is None:
        raise ValueError(
            f"Unknown adapter '{name}', expected one of: {', '.join(available_adapters())}"
        )
    return adapter_cls(**kwargs)


__all__ = [
    "ADAPTERS",
    "GenericAdapter",
    "LeanAdapter",
    "MaximoAdapter",
    "SAPAdapter",
    "ServiceNowAdapter",
    "available_adapters",
    "get_adapter",
]
