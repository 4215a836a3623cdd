from __future__ import annotations

"""
series.py
=========
Sampling helpers: evaluate the altitude on a regular time grid.

This is a plain sampler. It reports how often the sampled altitude changes
sign but does not locate sunrise or sunset.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

import numpy as np

from .altitude import altitude
from .calendar import Instant, parse_instant


def time_grid(start: Instant, end: Instant, step_s: float) -> List[datetime]:
    """
    Naive UTC datetimes from ``start`` to ``end`` inclusive every ``step_s``.

    Raises
    ------
    ValueError
        If ``step_s`` is not a finite positive number, rounds to less than one
        microsecond, or ``end`` precedes ``start``.
    """
    if not (math.isfinite(step_s) and step_s > 0):
        raise ValueError(f"step_s must be finite and > 0, got {step_s}")
    t0 = parse_instant(start)
    t1 = parse_instant(end)
    if t1 < t0:
        raise ValueError(f"end {t1.isoformat()} precedes start {t0.isoformat()}")
    try:
        step = timedelta(seconds=step_s)
    except OverflowError:
        raise ValueError(f"step_s {step_s} is out of range") from None
    if step <= timedelta(0):
        raise ValueError(f"step_s {step_s} is below the 1 us resolution")
    n = int((t1 - t0) / step)
    return [t0 + i * step for i in range(n + 1)]


def altitude_series(
    times: Iterable[Instant], latitude: float, longitude: float
) -> np.ndarray:
    """Altitude (deg) at each instant, as a float64 array."""
    return np.array([altitude(t, latitude, longitude) for t in times], dtype=float)


def count_sign_changes(values: Sequence[float]) -> int:
    """
    Number of sign flips between consecutive samples.

    Non-finite samples and exact zeros are dropped first, so a sample sitting
    exactly on the horizon does not count twice.
    """
    arr = np.asarray(values, dtype=float)
    signs = np.sign(arr[np.isfinite(arr)])
    signs = signs[signs != 0]
    if signs.size < 2:
        return 0
    return int(np.count_nonzero(np.diff(signs)))


__all__ = [
    "time_grid",
    "altitude_series",
    "count_sign_changes",
]
