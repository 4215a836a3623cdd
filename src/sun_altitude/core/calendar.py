"""
calendar.py
===========
Gregorian calendar <-> Julian Day conversion.

The forward conversion follows Meeus, *Astronomical Algorithms*, eq. (7.1)
using integer arithmetic wherever the book writes ``INT()``, so large or
negative years do not pick up floating-point rounding in the calendar terms.
The calendar is always the proleptic Gregorian one (no Julian switch before
1582), matching what :class:`datetime.datetime` represents.

Instants
--------
Functions taking an *instant* accept a :class:`datetime.datetime` or an ISO
8601 string. Any timezone offset is **discarded**, not converted: the wall
clock fields are read as if they were already UTC.
"""

from __future__ import annotations

import math
import operator
from datetime import datetime, timedelta
from typing import Tuple, Union

Instant = Union[datetime, str]

# JD of the J2000.0 epoch, 2000-01-01T12:00:00 UTC.
J2000_JD = 2451545.0

_DAY_US = 86_400 * 1_000_000


def floor_div(x: int, y: int) -> int:
    """
    Return the integer floor of the fractional value ``x / y``.

    Integer math only. As with built-in integer division,
    ``ZeroDivisionError`` is raised when ``y == 0``.

    Raises
    ------
    TypeError
        If either operand is not an integer (floats are rejected rather than
        silently truncated).
    """
    # Python's // on ints already floors and is unbounded.
    return operator.index(x) // operator.index(y)


def calendar_gregorian_to_jd(year: int, month: int, day: float) -> float:
    """
    Convert a Gregorian year, month and fractional day of month to Julian Day.

    Negative years are valid back to JD 0; the result is not valid for
    earlier dates. No calendar validation is done: ``month=13`` silently
    rolls into January of the following year.
    """
    y = operator.index(year)
    m = operator.index(month)
    if m in (1, 2):
        y -= 1
        m += 12
    a = floor_div(y, 100)
    b = 2 - a + floor_div(a, 4)
    # (7.1) p. 61
    return (
        float(floor_div(36525 * (y + 4716), 100))
        + float(floor_div(306 * (m + 1), 10) + b)
        + day
        - 1524.5
    )


def parse_instant(instant: Instant) -> datetime:
    """
    Return ``instant`` as a naive datetime holding its wall-clock fields.

    Accepts ISO 8601 strings with a trailing ``Z``. Aware datetimes lose
    their ``tzinfo`` without conversion.

    Raises
    ------
    ValueError
        If a string cannot be parsed.
    TypeError
        For anything that is neither a string nor a datetime.
    """
    if isinstance(instant, str):
        s = instant.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            instant = datetime.fromisoformat(s)
        except ValueError:
            raise ValueError(f"Unparsable ISO 8601 instant: {instant!r}") from None
    if not isinstance(instant, datetime):
        raise TypeError(
            f"Expected datetime or ISO 8601 string, got {type(instant).__name__}"
        )
    return instant.replace(tzinfo=None)


def time_to_jd(instant: Instant) -> float:
    """Julian Day of ``instant``, its wall-clock fields taken as UTC."""
    dt = parse_instant(instant)
    since_midnight = dt - dt.replace(hour=0, minute=0, second=0, microsecond=0)
    frac = (since_midnight // timedelta(microseconds=1)) / _DAY_US
    return calendar_gregorian_to_jd(dt.year, dt.month, dt.day + frac)


def get_jdn(jd: float) -> float:
    """Days elapsed since J2000.0 (noon UTC, 2000-01-01)."""
    return jd - J2000_JD


def jd_to_calendar_gregorian(jd: float) -> Tuple[int, int, float]:
    """
    Convert a Julian Day to ``(year, month, fractional_day)``.

    Meeus eq. (7.2) with the Gregorian correction applied unconditionally,
    i.e. the inverse of :func:`calendar_gregorian_to_jd`. Not valid for
    ``jd < 0``.
    """
    if not math.isfinite(jd) or jd < 0:
        raise ValueError(f"Julian Day out of range: {jd}")
    z = math.floor(jd + 0.5)
    f = jd + 0.5 - z
    alpha = math.floor((z - 1867216.25) / 36524.25)
    a = z + 1 + alpha - math.floor(alpha / 4)
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)
    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return year, month, day


def jd_to_datetime(jd: float) -> datetime:
    """Naive UTC datetime for ``jd``, rounded to the nearest microsecond."""
    year, month, day = jd_to_calendar_gregorian(jd)
    whole = math.floor(day)
    us = round((day - whole) * _DAY_US)
    return datetime(year, month, 1) + timedelta(days=whole - 1, microseconds=us)


__all__ = [
    "Instant",
    "J2000_JD",
    "floor_div",
    "calendar_gregorian_to_jd",
    "parse_instant",
    "time_to_jd",
    "get_jdn",
    "jd_to_calendar_gregorian",
    "jd_to_datetime",
]
