"""Exception taxonomy for the LEAN encoder."""


class LeanError(Exception):
    """Base class for all encoder errors."""

    pass


class EmptyRootError(LeanError):
    """Raised when the resolved root record collection is empty."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Empty root array '{table_name}' - nothing to encode.")


class CapabilityContractError(LeanError):
    """Raised when an adapter hook fails during encoding.

    The original exception is always chained as ``__cause__``.
    """

    def __init__(self, adapter_name: str, original: BaseException):
        self.adapter_name = adapter_name
        self.original = original
        super().__init__(
            f"Adapter '{adapter_name}' failed: {type(original).__name__}: {original}"
        )


class SerializationError(LeanError):
    """Raised when a payload cannot be rendered to canonical JSON.

    Never converted to a fallback result: there is no raw form to fall back to.
    """

    pass
