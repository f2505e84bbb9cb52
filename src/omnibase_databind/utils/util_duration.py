# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Duration text parsing and formatting.

Durations travel through generic data either as a text literal or as an
integer count of nanoseconds. The text form is a signed sequence of decimal
numbers, each with an optional fraction and a mandatory unit::

    "300ms"  "-1.5h"  "2h45m"  "1m30.5s"  "0"

Valid units are ``ns``, ``us`` (or ``µs`` / ``μs``), ``ms``, ``s``, ``m`` and
``h``. A bare ``0`` is the only literal allowed without a unit.

Formatting produces the canonical form, with the largest unit first and
trailing zero fractions dropped::

    0 -> "0s"      1.5 ms -> "1.5ms"      90 s -> "1m30s"      1 h -> "1h0m0s"

``timedelta`` stores microseconds, so nanosecond amounts are truncated toward
zero when converted.
"""

from __future__ import annotations

import re
from datetime import timedelta

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# number with optional fraction, followed by the longest run of unit letters
_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")


def parse_duration_ns(text: str) -> int:
    """Parse a duration literal into nanoseconds.

    Args:
        text: Duration literal such as ``"1h30m"`` or ``"-250ms"``.

    Returns:
        The signed amount in nanoseconds.

    Raises:
        ValueError: If the literal is empty, lacks a unit or uses an unknown
            unit.
    """
    original = text
    remaining = text
    negative = False
    if remaining[:1] in ("+", "-"):
        negative = remaining[0] == "-"
        remaining = remaining[1:]
    if remaining == "0":
        return 0
    if not remaining:
        raise ValueError(f"invalid duration {original!r}")

    total = 0
    while remaining:
        match = _COMPONENT.match(remaining)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {original!r}")
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        total += int(whole or "0") * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        remaining = remaining[match.end() :]

    return -total if negative else total


def _join_frac(whole: int, frac: int, precision: int) -> str:
    if not frac:
        return str(whole)
    digits = str(frac).rjust(precision, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration_ns(nanos: int) -> str:
    """Format nanoseconds in canonical duration form.

    Example:
        >>> format_duration_ns(90 * SECOND)
        '1m30s'
        >>> format_duration_ns(1_500_000)
        '1.5ms'
    """
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    amount = abs(nanos)

    if amount < SECOND:
        if amount < MICROSECOND:
            return f"{sign}{amount}ns"
        if amount < MILLISECOND:
            whole, frac = divmod(amount, MICROSECOND)
            return f"{sign}{_join_frac(whole, frac, 3)}µs"
        whole, frac = divmod(amount, MILLISECOND)
        return f"{sign}{_join_frac(whole, frac, 6)}ms"

    seconds, frac = divmod(amount, SECOND)
    text = f"{_join_frac(seconds % 60, frac, 9)}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return f"{sign}{text}"


def nanos_to_timedelta(nanos: int) -> timedelta:
    """Convert nanoseconds to a timedelta, truncating toward zero."""
    micros = abs(nanos) // MICROSECOND
    return timedelta(microseconds=-micros if nanos < 0 else micros)


def timedelta_to_nanos(value: timedelta) -> int:
    """Convert a timedelta to whole nanoseconds."""
    return (value.days * 86_400 + value.seconds) * SECOND + value.microseconds * MICROSECOND


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal into a timedelta."""
    return nanos_to_timedelta(parse_duration_ns(text))


def format_duration(value: timedelta) -> str:
    """Format a timedelta in canonical duration form."""
    return format_duration_ns(timedelta_to_nanos(value))


__all__ = [
    "HOUR",
    "MICROSECOND",
    "MILLISECOND",
    "MINUTE",
    "NANOSECOND",
    "SECOND",
    "format_duration",
    "format_duration_ns",
    "nanos_to_timedelta",
    "parse_duration",
    "parse_duration_ns",
    "timedelta_to_nanos",
]
