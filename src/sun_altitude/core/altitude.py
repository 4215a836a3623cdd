from __future__ import annotations

"""
altitude.py
===========
Altitude of the Sun above (+) or below (-) the horizon.

Steps:
  1. ecliptic coordinates of the Sun from days since J2000.0,
  2. equatorial coordinates (right ascension, declination),
  3. hour angle from Greenwich sidereal time and the observer longitude,
  4. altitude from the spherical triangle pole-zenith-Sun.

Typical accuracy is about 0.1 deg. No refraction and no parallax are
applied. Any timezone offset on the instant is ignored: the wall-clock
fields are taken as UTC.
"""

from .angles import asin_deg, cos_deg, sin_deg, wrap_degrees
from .calendar import Instant, get_jdn, time_to_jd
from .coordinates import (
    declination,
    ecliptic_longitude,
    mean_anomaly,
    mean_longitude,
    right_ascension,
)
from .model import Site, SolarPosition
from .sidereal import get_gst


def hour_angle(jd: float, longitude: float, right_ascension_deg: float) -> float:
    """Local hour angle (deg); ``longitude`` positive east."""
    return wrap_degrees(get_gst(jd)) + longitude - right_ascension_deg


def altitude_from_equatorial(
    latitude: float, declination_deg: float, hour_angle_deg: float
) -> float:
    return asin_deg(
        sin_deg(latitude) * sin_deg(declination_deg)
        + cos_deg(latitude) * cos_deg(declination_deg) * cos_deg(hour_angle_deg)
    )


def solar_position(instant: Instant, latitude: float, longitude: float) -> SolarPosition:
    """
    Run the full pipeline for one instant and keep every intermediate.

    Parameters
    ----------
    instant : datetime or str
        Time of observation; offset discarded, fields read as UTC.
    latitude, longitude : float
        Observer position in decimal degrees, longitude positive east.
    """
    jd = time_to_jd(instant)
    jdn = get_jdn(jd)

    mean_long = mean_longitude(jdn)
    mean_anom = mean_anomaly(jdn)
    ec_long = ecliptic_longitude(mean_long, mean_anom)
    r_asc = right_ascension(ec_long)
    dec = declination(ec_long)

    gst = wrap_degrees(get_gst(jd))
    ha = hour_angle(jd, longitude, r_asc)
    return SolarPosition(
        jd=jd,
        jdn=jdn,
        mean_longitude_deg=mean_long,
        mean_anomaly_deg=mean_anom,
        ecliptic_longitude_deg=ec_long,
        right_ascension_deg=r_asc,
        declination_deg=dec,
        gst_deg=gst,
        hour_angle_deg=ha,
        altitude_deg=altitude_from_equatorial(latitude, dec, ha),
    )


def altitude(instant: Instant, latitude: float, longitude: float) -> float:
    """
    Altitude of the Sun in degrees for ``instant`` at (latitude, longitude).

    Positive above the horizon, negative below. The result is not clamped
    and NaN inputs yield NaN.
    """
    return solar_position(instant, latitude, longitude).altitude_deg


def site_altitude(instant: Instant, site: Site) -> float:
    return altitude(instant, site.latitude_deg, site.longitude_deg)


__all__ = [
    "hour_angle",
    "altitude_from_equatorial",
    "solar_position",
    "altitude",
    "site_altitude",
]
