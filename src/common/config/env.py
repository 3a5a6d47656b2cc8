"""Typed environment variable parsing.

Unset variables fall back to the given default; set-but-unparseable values
raise ``ValueError`` naming the variable, so a bad deployment fails on the
first operation instead of silently running with defaults.
"""

import os
from typing import Optional

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off", ""})


def _lookup(name: str, required: bool) -> Optional[str]:
    value = os.getenv(name)
    if value is None and required:
        raise KeyError(f"Environment variable '{name}' is required but not set.")
    return value


def get_env_str(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get an environment variable as a string."""
    value = _lookup(name, required)
    return default if value is None else value


def get_env_float(
    name: str, default: Optional[float] = None, required: bool = False, positive: bool = False
) -> Optional[float]:
    """Get an environment variable as a float.

    With ``positive`` set, zero and negative values are rejected too.
    """
    value = _lookup(name, required)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be a number, got '{value}'.")
    if positive and not parsed > 0:
        raise ValueError(f"Environment variable '{name}' must be a positive number, got '{value}'.")
    return parsed


def get_env_bool(
    name: str, default: Optional[bool] = None, required: bool = False
) -> Optional[bool]:
    """Get an environment variable as a boolean.

    Truthy: true, 1, yes, on
    Falsey: false, 0, no, off, (empty string)
    """
    value = _lookup(name, required)
    if value is None:
        return default

    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Environment variable '{name}' must be a boolean, got '{value}'.")
