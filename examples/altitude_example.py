"""
altitude_example.py
===================

Purpose
-------
Minimal example showing how to use `sun_altitude.core.altitude` to get the
altitude of the Sun for a site, with the intermediate coordinates.

What this example does
----------------------
1) Computes the solar altitude at one instant for Mario Zucchelli Station.
2) Prints declination, right ascension and hour angle behind it.
3) Samples the altitude every hour over one day.

Usage
-----
    python examples/altitude_example.py

All angles are in **degrees**; longitude is positive east. The instant is
read as UTC whatever offset it carries.
"""

from sun_altitude.core.altitude import solar_position
from sun_altitude.core.model import Site
from sun_altitude.core.series import altitude_series, count_sign_changes, time_grid

site = Site(name="MZS", latitude_deg=-74.6950, longitude_deg=164.1000)

# 1) One instant.
pos = solar_position("2025-01-03T00:02:35Z", site.latitude_deg, site.longitude_deg)
print(f"Altitude:        {pos.altitude_deg:.4f} deg")

# 2) What it is made of.
print(f"Declination:     {pos.declination_deg:.4f} deg")
print(f"Right ascension: {pos.right_ascension_deg:.4f} deg")
print(f"Hour angle:      {pos.hour_angle_deg:.4f} deg")

# 3) A day sampled hourly. In January the Sun never sets at MZS.
times = time_grid("2025-01-03T00:00:00Z", "2025-01-04T00:00:00Z", 3600)
alts = altitude_series(times, site.latitude_deg, site.longitude_deg)
for t, a in zip(times, alts):
    print(t.strftime("%Y-%m-%dT%H:%MZ"), f"{a:8.4f}")
print("Horizon crossings:", count_sign_changes(alts))
