"""Centralized configuration for the LEAN encoder."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    """Parse a boolean environment variable."""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid {name} environment variable: expected boolean, got '{raw}'")


def _parse_int(name: str, raw: str) -> int:
    """Parse an integer environment variable."""
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {name} environment variable: {e}")


@dataclass
class EncoderConfig:
    """
    Encoder options with environment variable and YAML overrides.

    Defaults favour dictionary-encoding every qualifying string once,
    HTML stripping, and silent fallback to raw JSON on internal errors.
    """

    # ========================================================================
    # Adapter Selection
    # ========================================================================
    adapter: str = "generic"

    # ========================================================================
    # Dictionary Encoding
    # ========================================================================
    dict_min_length: int = 6
    dict_min_frequency: int = 1  # 1 = every qualifying string, 2+ = repeats only

    # ========================================================================
    # Value Handling
    # ========================================================================
    strip_html: bool = True
    skip_empty_strings: bool = True

    # ========================================================================
    # Failure Policy
    # ========================================================================
    fallback_on_fail: bool = True

    @classmethod
    def from_env(cls) -> "EncoderConfig":
        """
        Build a config from ``LEAN_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable cannot be parsed
        """
        config = cls()

        adapter = os.getenv("LEAN_ADAPTER")
        if adapter:
            config.adapter = adapter.strip().lower()

        min_length = os.getenv("LEAN_DICT_MIN_LENGTH")
        if min_length is not None:
            config.dict_min_length = _parse_int("LEAN_DICT_MIN_LENGTH", min_length)

        min_frequency = os.getenv("LEAN_DICT_MIN_FREQUENCY")
        if min_frequency is not None:
            config.dict_min_frequency = _parse_int("LEAN_DICT_MIN_FREQUENCY", min_frequency)

        for attr, env_name in (
            ("strip_html", "LEAN_STRIP_HTML"),
            ("skip_empty_strings", "LEAN_SKIP_EMPTY_STRINGS"),
            ("fallback_on_fail", "LEAN_FALLBACK_ON_FAIL"),
        ):
            raw = os.getenv(env_name)
            if raw is not None:
                setattr(config, attr, _parse_bool(env_name, raw))

        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "EncoderConfig":
        """
        Load config from a YAML mapping.

        Args:
            yaml_path: Path to the YAML file

        Returns:
            EncoderConfig with the file's values applied over defaults

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If YAML is malformed
            ValueError: If the document is not a mapping or has unknown keys
        """
        yaml_file = Path(yaml_path)
        if not yaml_file.exists():
            raise FileNotFoundError(f"Encoder config YAML not found: {yaml_path}")

        with open(yaml_file) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown encoder config keys: {', '.join(unknown)}")

        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def validate(self) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - dict_min_length is >= 0
        - dict_min_frequency is >= 1
        - adapter names a registered adapter

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        from .adapters import available_adapters

        errors = []

        if not isinstance(self.dict_min_length, int) or self.dict_min_length < 0:
            errors.append(f"dict_min_length must be >= 0, got {self.dict_min_length}")

        if not isinstance(self.dict_min_frequency, int) or self.dict_min_frequency < 1:
            errors.append(f"dict_min_frequency must be >= 1, got {self.dict_min_frequency}")

        if str(self.adapter).lower() not in available_adapters():
            errors.append(
                f"adapter must be one of [{', '.join(available_adapters())}], "
                f"got '{self.adapter}'"
            )

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
