"""Byte-count formatting helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_UNITS = ("B", "KB", "MB", "GB")
_STEP = 1024


def format_file_size(size: float) -> str:
    """Format a byte count as a human readable string (e.g. ``"1.23 MB"``)."""
    if size == 0:
        return "0 B"

    negative = size < 0
    magnitude = abs(size)

    index = 0
    while magnitude >= _STEP and index < len(_UNITS) - 1:
        magnitude /= _STEP
        index += 1

    if index == 0 or magnitude >= 100:
        formatted = f"{_fixed(magnitude, 0)} {_UNITS[index]}"
    elif magnitude >= 10:
        formatted = f"{_fixed(magnitude, 1)} {_UNITS[index]}"
    else:
        formatted = f"{_fixed(magnitude, 2)} {_UNITS[index]}"

    return f"-{formatted}" if negative else formatted


def calculate_percentage_change(current: float, previous: float) -> str:
    """Return the change from ``previous`` to ``current`` as ``"+12.5%"``."""
    if previous == 0:
        return "0%" if current == 0 else "+∞%"

    change = (current - previous) / previous * 100
    sign = "+" if change >= 0 else ""
    return f"{sign}{_fixed(change, 1)}%"


def format_size_diff(diff: float) -> str:
    """Format a byte delta with a trend indicator."""
    formatted = format_file_size(abs(diff))
    if diff > 0:
        return f"📈 +{formatted}"
    if diff < 0:
        return f"📉 -{formatted}"
    return f"→ {formatted}"


def _fixed(value: float, places: int) -> str:
    # Half-up on the exact binary value, like Number.prototype.toFixed.
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


__all__ = ["calculate_percentage_change", "format_file_size", "format_size_diff"]
