# tests/scripts/test_sun_altitude_cli.py
"""
End-to-end tests for `scripts/sun_altitude_cli.py`.

Each test builds a throwaway project root (config/ tree) in a temporary
directory and runs the script there as a subprocess with `src/` on
PYTHONPATH.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[2]


def _script_path() -> Path:
    return _REPO_ROOT / "scripts" / "sun_altitude_cli.py"


def _write_config(root: Path, latitude: float = 41.9) -> None:
    (root / "config" / "sites").mkdir(parents=True, exist_ok=True)
    (root / "config" / "runs").mkdir(parents=True, exist_ok=True)
    (root / "config" / "sites" / "rome.toml").write_text(
        "[site]\n"
        'name = "Roma (ROM)"\n'
        f"latitude_deg = {latitude}\n"
        "longitude_deg = 12.5\n",
        encoding="utf-8",
    )
    (root / "config" / "runs" / "day.toml").write_text(
        'include_site = "config/sites/rome.toml"\n'
        "[window]\n"
        'start = "2024-06-01T00:00:00Z"\n'
        'end = "2024-06-01T23:50:00Z"\n'
        "step_s = 600\n",
        encoding="utf-8",
    )


def _run(cwd: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(_REPO_ROOT / "src"), env.get("PYTHONPATH", "")])
    )
    env["MPLBACKEND"] = "Agg"
    return subprocess.run(
        [sys.executable, str(_script_path()), *args],
        cwd=str(cwd),
        env=env,
        capture_output=True,
        text=True,
    )


def test_run_writes_tsv_and_log(tmp_path):
    _write_config(tmp_path)
    proc = _run(tmp_path, "--run", "day", "--out", "out/alt.tsv")
    assert proc.returncode == 0, proc.stderr + proc.stdout

    out = tmp_path / "out" / "alt.tsv"
    assert out.exists()
    lines = [
        ln
        for ln in out.read_text(encoding="utf-8").splitlines()
        if ln and not ln.startswith("#")
    ]
    assert lines[0].startswith("timestamp\tjd\t")
    assert len(lines) == 1 + 144
    assert lines[1].startswith("2024-06-01T00:00:00Z\t")

    assert "2 horizon crossings" in proc.stdout
    logs = list((tmp_path / "logs").glob("run_*.log"))
    assert len(logs) == 1
    log_text = logs[0].read_text(encoding="utf-8")
    assert "Run config: config/runs/day.toml".replace("/", os.sep) in log_text
    assert "Done." in log_text


def test_default_output_name_uses_site_slug(tmp_path):
    _write_config(tmp_path)
    proc = _run(tmp_path, "--run", "day", "--set", "window.step_s=3600")
    assert proc.returncode == 0, proc.stderr
    produced = list((tmp_path / "output").glob("altitude_rom_*.tsv"))
    assert len(produced) == 1


def test_dump_effective_config_exits_early(tmp_path):
    _write_config(tmp_path)
    proc = _run(tmp_path, "--run", "day", "--dump-effective-config")
    assert proc.returncode == 0
    assert "[window]" in proc.stdout
    assert not (tmp_path / "logs").exists()


def test_plot_option_saves_png(tmp_path):
    _write_config(tmp_path)
    proc = _run(
        tmp_path, "--run", "day", "--set", "window.step_s=3600",
        "--out", "alt.tsv", "--plot",
    )
    assert proc.returncode == 0, proc.stderr
    assert (tmp_path / "alt.png").exists()


def test_missing_run_is_a_config_error(tmp_path):
    proc = _run(tmp_path, "--run", "missing")
    assert proc.returncode == 2
    assert "ERROR" in proc.stdout


def test_invalid_latitude_is_rejected(tmp_path):
    _write_config(tmp_path, latitude=95.0)
    proc = _run(tmp_path, "--run", "day")
    assert proc.returncode == 2
    assert "latitude_deg" in proc.stdout


def test_reversed_window_is_rejected(tmp_path):
    _write_config(tmp_path)
    proc = _run(
        tmp_path, "--run", "day", "--set", "window.end=2024-05-31T00:00:00Z"
    )
    assert proc.returncode == 2
    assert "Invalid [window]" in proc.stdout


def test_sub_microsecond_step_is_rejected(tmp_path):
    _write_config(tmp_path)
    proc = _run(tmp_path, "--run", "day", "--set", "window.step_s=1e-7")
    assert proc.returncode == 2
    assert "Invalid [window]" in proc.stdout
