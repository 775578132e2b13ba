"""Field-path shortening for the SCHEMA section.

Each distinct normalized dotted path gets a short base-36 key
(0..9, a..z, 10, 11, ...) the first time it is seen.
"""

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(number: int) -> str:
    """Render a non-negative integer in lower-case base 36."""
    if number < 0:
        raise ValueError(f"number must be >= 0, got {number}")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class SchemaRegistry:
    """Maps full dot-notation paths to short keys in first-seen order."""

    def __init__(self):
        self._path_to_key: dict[str, str] = {}
        self._counter = 0

    def key(self, path: str) -> str:
        """Return the short key for path, allocating one if path is new."""
        existing = self._path_to_key.get(path)
        if existing is not None:
            return existing
        new_key = to_base36(self._counter)
        self._path_to_key[path] = new_key
        self._counter += 1
        return new_key

    def emit_block(self) -> list[str]:
        """SCHEMA section lines ordered by numeric key value."""
        ordered = sorted(self._path_to_key.items(), key=lambda item: int(item[1], 36))
        return [f"{key}={path}" for path, key in ordered]

    @property
    def size(self) -> int:
        return len(self._path_to_key)

    def __len__(self) -> int:
        return len(self._path_to_key)
