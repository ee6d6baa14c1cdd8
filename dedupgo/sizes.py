"""Parsing and formatting of human-readable file sizes."""

from __future__ import annotations

import math
import re

_UNITS = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
    ("B", 1),
)
_PREFIXES = "KMGTPE"
_STEP = 1024

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+"
)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_number(text: str, original: str) -> float:
    if _DECIMAL.fullmatch(text):
        return float(text)
    if _HEX.fullmatch(text):
        return float.fromhex(text)
    raise ValueError(f"invalid size value: {original}")


def _to_bytes(value: float, original: str) -> int:
    if not math.isfinite(value):
        raise ValueError(f"invalid size value: {original}")
    result = int(value)
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise ValueError(f"size value out of range: {original}")
    return result


def parse_size(size: str) -> int:
    """Parse a size such as ``"10MB"`` or ``"1.5 kb"`` into a byte count.

    A value without a unit is taken as bytes. Raises ``ValueError`` when the
    number cannot be parsed.
    """
    text = size.upper().strip()
    if text in ("", "0"):
        return 0
    for suffix, multiplier in _UNITS:
        if text.endswith(suffix):
            number = text[: -len(suffix)]
            return _to_bytes(_parse_number(number, text) * multiplier, text)
    return _to_bytes(_parse_number(text, text), text)


def format_size(num_bytes: int) -> str:
    """Format a byte count as a short human-readable string, e.g. ``"1.5 KB"``."""
    if num_bytes < _STEP:
        return f"{num_bytes} B"
    divisor, exponent = _STEP, 0
    remaining = num_bytes // _STEP
    while remaining >= _STEP and exponent < len(_PREFIXES) - 1:
        divisor *= _STEP
        exponent += 1
        remaining //= _STEP
    return f"{num_bytes / divisor:.1f} {_PREFIXES[exponent]}B"