from __future__ import annotations

"""
angles.py
=========
Degree-domain trigonometry and cyclic range normalisation.

Every helper here takes and returns angles in **degrees**. The inverse
functions never raise on out-of-domain input: ``asin_deg(1.0000001)`` returns
NaN so that numeric edge cases near the poles propagate silently to the
caller instead of aborting a whole batch.
"""

import math
from typing import Union


def to_radians(angle: float) -> float:
    return angle * math.pi / 180.0


def to_angle(rad: float) -> float:
    return rad * 180.0 / math.pi


def _nan_if_inf(x: float) -> float:
    # math.sin(inf) raises instead of returning NaN
    return math.nan if math.isinf(x) else x


def sin_deg(x: float) -> float:
    return math.sin(to_radians(_nan_if_inf(x)))


def cos_deg(x: float) -> float:
    return math.cos(to_radians(_nan_if_inf(x)))


def tan_deg(x: float) -> float:
    return math.tan(to_radians(_nan_if_inf(x)))


def atan_deg(x: float) -> float:
    return to_angle(math.atan(x))


def asin_deg(x: float) -> float:
    """Inverse sine in degrees; NaN when ``|x| > 1`` or ``x`` is NaN."""
    if not -1.0 <= x <= 1.0:
        return math.nan
    return to_angle(math.asin(x))


def wrap_into(min_val: float, max_val: float, val: float) -> float:
    """
    Reduce ``val`` into the half-open cycle ``[min_val, max_val)``.

    Parameters
    ----------
    min_val, max_val : float
        Interval bounds; ``max_val - min_val`` is the size of one cycle.
    val : float
        Value to reduce.

    Returns
    -------
    float
        The reduced value, or NaN when ``val`` is NaN or infinite.

    Raises
    ------
    ValueError
        If ``max_val <= min_val``.
    """
    if not max_val > min_val:
        raise ValueError(f"empty interval [{min_val}, {max_val})")
    if not math.isfinite(val):
        return math.nan
    # float % floors like val - floor(val/span)*span, but exactly
    out = min_val + (val - min_val) % (max_val - min_val)
    # tiny negative inputs round up to exactly max_val
    if out >= max_val:
        return min_val
    return out


def wrap_degrees(val: float) -> float:
    return wrap_into(0.0, 360.0, val)


def wrap_hours(val: float) -> float:
    return wrap_into(0.0, 24.0, val)


def angle_to_quadrant(angle: float) -> Union[int, float]:
    """
    Quadrant 1..4 (int) of ``angle`` after wrapping to [0, 360).

    NaN or infinite input gives NaN (float).
    """
    a = wrap_degrees(angle)
    if math.isnan(a):
        return math.nan
    if a < 90.0:
        return 1
    if a < 180.0:
        return 2
    if a < 270.0:
        return 3
    return 4


__all__ = [
    "to_radians",
    "to_angle",
    "sin_deg",
    "cos_deg",
    "tan_deg",
    "atan_deg",
    "asin_deg",
    "wrap_into",
    "wrap_degrees",
    "wrap_hours",
    "angle_to_quadrant",
]
