"""String interning table for the DICT section.

Two frequency modes, selected by ``min_frequency``:

- ``min_frequency <= 1``: every registered string gets a slot, numbered
  in first-seen order.
- ``min_frequency >= 2``: only strings seen at least that many times get
  a slot, numbered in lexicographic order so the output does not depend
  on field iteration order.
"""

from loguru import logger


class Dictionary:
    """Deduplicates string values and hands out ``*N`` pointer tokens."""

    def __init__(self, min_length: int = 6, min_frequency: int = 1):
        self.min_length = min_length
        self.min_frequency = min_frequency
        self._freq: dict[str, int] = {}  # insertion order == first-seen order
        self._slots: dict[str, int] = {}
        self._built = False

    def register(self, value: str) -> None:
        """Count one occurrence of a candidate string (pass 1)."""
        if self._built:
            logger.warning("Dictionary.register() called after build_slots(), ignoring")
            return
        if len(value) < self.min_length:
            return
        self._freq[value] = self._freq.get(value, 0) + 1

    def build_slots(self) -> None:
        """
        Assign slot indices to eligible strings.

        Must run once, after every register() call and before resolve().
        Later calls leave the slots untouched.
        """
        if self._built:
            logger.warning("Dictionary.build_slots() called twice, keeping existing slots")
            return

        if self.min_frequency <= 1:
            eligible = list(self._freq)
        else:
            eligible = sorted(
                value for value, count in self._freq.items() if count >= self.min_frequency
            )

        self._slots = {value: index for index, value in enumerate(eligible)}
        self._built = True
        logger.debug(
            f"Dictionary built: {len(self._slots)} slots from {len(self._freq)} candidates"
        )

    def resolve(self, value: str) -> str:
        """Return ``*N`` when value has a slot, otherwise value unchanged."""
        index = self._slots.get(value)
        return value if index is None else f"*{index}"

    def has(self, value: str) -> bool:
        return value in self._slots

    def emit_block(self) -> list[str]:
        """DICT section lines in slot order; empty when no slots exist."""
        ordered = sorted(self._slots.items(), key=lambda item: item[1])
        return [f"*{index}={value}" for value, index in ordered]

    @property
    def built(self) -> bool:
        return self._built

    @property
    def size(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return len(self._slots)
