"""Lenient conversions for numeric fields that the exchange sends as strings."""

from __future__ import annotations

import re

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _require_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def float_from_str(value: str) -> float:
    """Parse a float from a string; the empty string stands for 0.0."""
    text = _require_str(value)
    if text == "":
        return 0.0
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


def int_from_str(value: str) -> int:
    """Parse a signed 64-bit integer from a string; blank strings stand for 0."""
    text = _require_str(value)
    if not text.strip():
        return 0
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    number = int(text)
    if not I64_MIN <= number <= I64_MAX:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return number