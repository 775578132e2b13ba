"""Size gate deciding whether the LEAN form is worth using.

When the encoded document is not strictly smaller than the raw JSON,
the raw JSON is returned instead so an LLM context never gets worse.
"""


class CircuitBreaker:
    """Stateless compact-vs-raw comparator."""

    @staticmethod
    def should_fallback(encoded_size: int, original_size: int) -> bool:
        # Ties fall back to the simpler raw form.
        return encoded_size >= original_size

    @staticmethod
    def ratio(encoded_size: int, original_size: int) -> float:
        if original_size == 0:
            return 1.0
        return encoded_size / original_size
