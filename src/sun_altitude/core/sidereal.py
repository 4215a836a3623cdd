from __future__ import annotations

"""
sidereal.py
===========
Greenwich mean sidereal time from a Julian Day.

USNO approximation (https://aa.usno.navy.mil/faq/GAST): the polynomial in
days since J2000.0 at the preceding 0h UT plus the UT hours elapsed since.
The T^2 term is omitted; the error it introduces is far below the ~0.1 deg
accuracy of the solar position model.
"""

import math

from .angles import wrap_hours
from .calendar import get_jdn


def get_last_jd_midnight(jd: float) -> float:
    """Julian Day of the most recent 0h UT at or before ``jd``."""
    if not math.isfinite(jd):
        return math.nan
    # JD midnights sit on the .5 boundaries
    if jd >= math.floor(jd) + 0.5:
        return math.floor(jd) + 0.5
    return math.floor(jd) - 0.5


def get_ut_hours(jd: float, last_jd_midnight: float) -> float:
    return 24.0 * (jd - last_jd_midnight)


def get_gst_hours(jdn_midnight: float, ut_hours: float) -> float:
    gmst = 6.697374558 + 0.06570982441908 * jdn_midnight + 1.00273790935 * ut_hours
    return wrap_hours(gmst)


def get_gst(jd: float) -> float:
    """
    Greenwich mean sidereal time for ``jd``, in **degrees** [0, 360).

    Local sidereal time follows by adding the east-positive longitude.
    """
    jdm = get_last_jd_midnight(jd)
    return 15.0 * get_gst_hours(get_jdn(jdm), get_ut_hours(jd, jdm))


__all__ = [
    "get_last_jd_midnight",
    "get_ut_hours",
    "get_gst_hours",
    "get_gst",
]
