"""Strict type checks and numeric string conversion."""

from __future__ import annotations

import logging
from typing import Any

log = logging.getLogger(__name__)


def _wrong_type(val: Any) -> TypeError:
    return TypeError(f"wrong data type for {val} type {type(val).__name__}")


def cast_string(val: Any) -> str:
    """Return the value if it is a string, else raise TypeError."""
    if isinstance(val, str):
        return val
    raise _wrong_type(val)


def cast_int(val: Any) -> int:
    """Return the value if it is an integer, else raise TypeError."""
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    raise _wrong_type(val)


def cast_int64(val: Any) -> int:
    """Return the value if it is an integer, else raise TypeError."""
    return cast_int(val)


def cast_float(val: Any) -> float:
    """Return the value if it is a float, else raise TypeError."""
    if isinstance(val, float):
        return val
    raise _wrong_type(val)


def convert_float(val: str) -> str:
    """Turn a scientific-notation number string into an integer string."""
    if "e+" not in val and "E+" not in val:
        return val
    try:
        number = float(val)
    except ValueError as exc:
        log.warning("unable to convert %s to float, error %s", val, exc)
        return val
    return f"{number:f}".split(".")[0]