"""
Altitude TSV writer.

The output is a text file with:
  1) A *commented* metadata block (lines starting with '#').
  2) A single *header* line with the column names.
  3) One data line per sample.

Header (tab-separated)::

  timestamp\tjd\tdeclination\tright_ascension\thour_angle\taltitude

Units and conventions
---------------------
- timestamp: UTC, ``YYYY-MM-DDTHH:MM:SSZ`` (sub-second part dropped)
- jd: Julian Day, six decimals
- declination, right_ascension, hour_angle, altitude: degrees, four decimals
- non-finite values are written as ``NaN``

Append mode
-----------
When appending, the on-disk header must match the expected one exactly,
otherwise a SchemaMismatchError is raised. Overwrites go through a temporary
file and ``os.replace``.

Quickstart
----------
>>> md = Metadata(site="MZS", latitude_deg=-74.695, longitude_deg=164.1)
>>> rows = [AltitudeRow.from_position(ts, solar_position(ts, -74.695, 164.1))]
>>> write_altitude_tsv("altitude.tsv", md, rows, append=False)
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, TextIO

from sun_altitude.core.calendar import Instant, parse_instant
from sun_altitude.core.model import SolarPosition


__all__ = [
    "Metadata",
    "AltitudeRow",
    "SchemaMismatchError",
    "write_altitude_tsv",
    "expected_columns",
]


class SchemaMismatchError(RuntimeError):
    """Raised when the on-disk header does not match the expected schema."""


@dataclass(frozen=True)
class Metadata:
    """
    File-level metadata written as commented header lines.

    Attributes
    ----------
    site : str
        Free-form site name.
    latitude_deg : float
        Observer latitude in degrees, must lie in [-90, 90].
    longitude_deg : float
        Observer longitude in degrees, east positive.
    software_version : str, default "dev"
    created_at_iso : Optional[str], default None
        Creation instant; current UTC time when None.
    """

    site: str
    latitude_deg: float
    longitude_deg: float
    software_version: str = "dev"
    created_at_iso: Optional[str] = None

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude_deg <= 90.0):
            raise ValueError("latitude_deg must be in [-90, 90]")
        if not math.isfinite(self.longitude_deg):
            raise ValueError("longitude_deg must be finite")


@dataclass(frozen=True)
class AltitudeRow:
    """One sampled altitude row; angles in degrees."""

    timestamp: datetime
    jd: float
    declination_deg: float
    right_ascension_deg: float
    hour_angle_deg: float
    altitude_deg: float

    @classmethod
    def from_position(cls, instant: Instant, pos: SolarPosition) -> "AltitudeRow":
        return cls(
            timestamp=parse_instant(instant),
            jd=pos.jd,
            declination_deg=pos.declination_deg,
            right_ascension_deg=pos.right_ascension_deg,
            hour_angle_deg=pos.hour_angle_deg,
            altitude_deg=pos.altitude_deg,
        )


def write_altitude_tsv(
    path: str,
    metadata: Metadata,
    rows: Iterable[AltitudeRow],
    append: bool = True,
) -> None:
    """
    Write (or append) an altitude TSV file.

    Raises
    ------
    SchemaMismatchError
        When appending to an existing file whose header does not match.
    ValueError
        If an existing file appears to contain no header line.
    """
    if not append:
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", newline="", encoding="utf-8") as f:
            _write_metadata_block(f, metadata)
            _write_column_header(f)
            for r in rows:
                f.write(_row_to_tsv(r))
        os.replace(tmp_path, path)
        return

    creating_new = not os.path.exists(path)
    if not creating_new:
        _check_header_or_raise(path)
    with open(path, "w" if creating_new else "a", newline="", encoding="utf-8") as f:
        if creating_new:
            _write_metadata_block(f, metadata)
            _write_column_header(f)
        for r in rows:
            f.write(_row_to_tsv(r))


def expected_columns() -> list[str]:
    return [
        "timestamp",
        "jd",
        "declination",
        "right_ascension",
        "hour_angle",
        "altitude",
    ]


def _write_metadata_block(f: TextIO, md: Metadata) -> None:
    created = md.created_at_iso or datetime.now(timezone.utc).strftime(
        "%Y-%m-%dT%H:%M:%SZ"
    )
    f.write(f"# Site: {md.site}\n")
    f.write(f"# Latitude: {md.latitude_deg} deg\n")
    f.write(f"# Longitude: {md.longitude_deg} deg (east positive)\n")

    f.write("# timestamp: ISO 8601, UTC\n")
    f.write("# jd: Julian Day\n")
    f.write("# declination: apparent solar declination, deg\n")
    f.write("# right_ascension: solar right ascension, deg\n")
    f.write("# hour_angle: local hour angle, deg\n")
    f.write("# altitude: solar altitude above the horizon, deg (no refraction)\n")

    f.write(f"# Generated with software version: {md.software_version}\n")
    f.write(f"# Created at: {created}\n")
    f.write("\n")


def _write_column_header(f: TextIO) -> None:
    f.write("\t".join(expected_columns()) + "\n")


def _fmt_or_nan(x: Optional[float], decimals: int) -> str:
    if x is None or not math.isfinite(x):
        return "NaN"
    return f"{x:.{decimals}f}"


def _row_to_tsv(r: AltitudeRow) -> str:
    fields = [
        r.timestamp.strftime("%Y-%m-%dT%H:%M:%SZ"),
        _fmt_or_nan(r.jd, 6),
        _fmt_or_nan(r.declination_deg, 4),
        _fmt_or_nan(r.right_ascension_deg, 4),
        _fmt_or_nan(r.hour_angle_deg, 4),
        _fmt_or_nan(r.altitude_deg, 4),
    ]
    return "\t".join(fields) + "\n"


def _check_header_or_raise(path: str) -> None:
    """
    Ensure the existing file at ``path`` has the expected column schema.

    Comment lines and blank lines are skipped; the first remaining line is
    the header.
    """
    expected_cols = expected_columns()

    header_line: Optional[str] = None
    with open(path, "r", newline="", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            header_line = line
            break

    if header_line is None:
        raise ValueError(f"File '{path}' appears to contain no column header")

    if header_line.split("\t") != expected_cols:
        raise SchemaMismatchError(
            "Existing file schema does not match expected header.\n"
            f"Path:     {path}\n"
            f"Expected: {chr(9).join(expected_cols)}\n"
            f"Found:    {header_line}\n"
            "Hint: If you intend to replace the file, "
            "call write_altitude_tsv(..., append=False)."
        )
