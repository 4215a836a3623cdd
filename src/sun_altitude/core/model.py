from __future__ import annotations

"""
model.py
========
Value types shared by the altitude pipeline, the TSV writer and the CLI.

No range validation is done here: a latitude of 120 deg or a longitude of
-500 deg is carried through and produces a mathematically extrapolated
result.
"""

from dataclasses import dataclass


# An observer position on Earth.
@dataclass(frozen=True)
class Site:
    # Human readable site name.
    name: str
    # Latitude in decimal degrees (south negative).
    latitude_deg: float
    # Longitude in decimal degrees (east positive).
    longitude_deg: float
    # Elevation above mean sea level in meters (informational, no parallax).
    elevation_m: float = 0.0


# Every intermediate of one altitude evaluation, all angles in degrees.
@dataclass(frozen=True)
class SolarPosition:
    jd: float
    # Days since J2000.0.
    jdn: float
    mean_longitude_deg: float
    mean_anomaly_deg: float
    ecliptic_longitude_deg: float
    right_ascension_deg: float
    declination_deg: float
    # Greenwich mean sidereal time, [0, 360).
    gst_deg: float
    # Local hour angle, not wrapped.
    hour_angle_deg: float
    # Positive above the horizon.
    altitude_deg: float


__all__ = [
    "Site",
    "SolarPosition",
]
