from __future__ import annotations

"""
coordinates.py
==============
Ecliptic and equatorial coordinates of the Sun.

Low-precision solar model (Astronomical Almanac, "Low precision formulas for
the Sun"): mean longitude and mean anomaly linear in days since J2000.0, the
equation of centre truncated at 2G, and a fixed obliquity. Good to roughly
0.01 deg in declination between 1950 and 2050.

Longitudes are *not* wrapped: for dates far from J2000.0 they run to many
thousands of degrees. Trigonometry does not care, and the quadrant matching
below wraps internally.
"""

import math
from typing import Tuple

from .angles import angle_to_quadrant, asin_deg, atan_deg, cos_deg, sin_deg, tan_deg
from .angles import wrap_degrees

# Obliquity of the ecliptic (deg), held fixed.
AXIAL_TILT_DEG = 23.439

# Three steps suffice away from exact quadrant boundaries; rounding on a
# boundary can cost one more lap.
MAX_QUADRANT_STEPS = 8


class QuadrantCorrectionError(ArithmeticError):
    """Raised when right ascension cannot be moved into the ecliptic quadrant."""


def mean_longitude(jdn: float) -> float:
    return wrap_degrees(280.460) + 0.9856474 * jdn


def mean_anomaly(jdn: float) -> float:
    return wrap_degrees(357.528) + 0.9856003 * jdn


def ecliptic_longitude(mean_long: float, mean_anom: float) -> float:
    return mean_long + 1.915 * sin_deg(mean_anom) + 0.02 * sin_deg(2.0 * mean_anom)


def raw_right_ascension(ecliptic_long: float) -> float:
    """``atan(cos(eps) * tan(lambda))``; only defined up to a multiple of 180."""
    return atan_deg(cos_deg(AXIAL_TILT_DEG) * tan_deg(ecliptic_long))


def correct_quadrant(right_ascension: float, ecliptic_long: float) -> Tuple[float, int]:
    """
    Step ``right_ascension`` by 90 deg until it shares the quadrant of
    ``ecliptic_long``.

    Returns
    -------
    (float, int)
        Corrected right ascension and number of 90 deg steps applied.

    Raises
    ------
    QuadrantCorrectionError
        If more than ``MAX_QUADRANT_STEPS`` steps would be needed.
    """
    if not (math.isfinite(right_ascension) and math.isfinite(ecliptic_long)):
        return math.nan, 0
    target = angle_to_quadrant(ecliptic_long)
    steps = 0
    while angle_to_quadrant(right_ascension) != target:
        if steps == MAX_QUADRANT_STEPS:
            raise QuadrantCorrectionError(
                f"right ascension {right_ascension} did not reach quadrant {target} "
                f"of ecliptic longitude {ecliptic_long} in {steps} steps"
            )
        if right_ascension < ecliptic_long:
            right_ascension += 90.0
        else:
            right_ascension -= 90.0
        steps += 1
    return right_ascension, steps


def right_ascension_with_steps(ecliptic_long: float) -> Tuple[float, int]:
    return correct_quadrant(raw_right_ascension(ecliptic_long), ecliptic_long)


def right_ascension(ecliptic_long: float) -> float:
    """Right ascension (deg) in the same quadrant as ``ecliptic_long``."""
    return right_ascension_with_steps(ecliptic_long)[0]


def declination(ecliptic_long: float) -> float:
    return asin_deg(sin_deg(AXIAL_TILT_DEG) * sin_deg(ecliptic_long))


__all__ = [
    "AXIAL_TILT_DEG",
    "MAX_QUADRANT_STEPS",
    "QuadrantCorrectionError",
    "mean_longitude",
    "mean_anomaly",
    "ecliptic_longitude",
    "raw_right_ascension",
    "correct_quadrant",
    "right_ascension_with_steps",
    "right_ascension",
    "declination",
]
