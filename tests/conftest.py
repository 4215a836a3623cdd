from __future__ import annotations
import re
from datetime import datetime

import pytest

from sun_altitude.altitude_io.tsv import AltitudeRow, Metadata
from sun_altitude.core.model import Site

# ---------- Shared fixtures ----------


@pytest.fixture
def md() -> Metadata:
    """Provide a fixed Metadata object for reproducible tests."""
    return Metadata(
        site="MZS, Antarctica",
        latitude_deg=-74.695,
        longitude_deg=164.1,
        software_version="2025.08.05",
        created_at_iso="2025-08-05T11:00:00Z",
    )


@pytest.fixture
def sample_row() -> AltitudeRow:
    """Provide a representative AltitudeRow."""
    return AltitudeRow(
        timestamp=datetime(2025, 8, 1, 10, 0, 0),
        jd=2460888.916667,
        declination_deg=17.9212,
        right_ascension_deg=131.4471,
        hour_angle_deg=-12.3456,
        altitude_deg=-33.2011,
    )


@pytest.fixture
def rome() -> Site:
    return Site(name="Rome", latitude_deg=41.9, longitude_deg=12.5, elevation_m=21.0)


@pytest.fixture
def ANGLE_4DEC_RE():
    """Regex for floats with exactly 4 decimals."""
    return re.compile(r"^-?\d+\.\d{4}$")


@pytest.fixture
def parse_noncomment_header_and_rows():
    """Return first non-comment header and data rows from TSV text."""

    def _parser(text: str) -> tuple[str, list[str]]:
        lines = [ln.rstrip("\r\n") for ln in text.splitlines()]
        header = None
        rows: list[str] = []
        for ln in lines:
            stripped = ln.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if header is None:
                header = stripped
            else:
                rows.append(stripped)
        if header is None:
            raise AssertionError("no header found in provided text")
        return header, rows

    return _parser

