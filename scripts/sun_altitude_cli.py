from __future__ import annotations

"""
sun_altitude_cli.py
===================
Sample the solar altitude for one site over a time window and write a TSV.

Usage
-----
    python scripts/sun_altitude_cli.py --run mzs_jan
    python scripts/sun_altitude_cli.py --run-config config/runs/mzs_jan.toml \
        --set window.step_s=300 --plot

The run configuration is described in ``sun_altitude.core.config_loader``.
Every run appends to ``<log-dir>/run_<UTC stamp>.log``.

Exit codes: 0 on success, 2 on configuration or window errors.
"""

import argparse
import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple

from sun_altitude.altitude_io.tsv import AltitudeRow, Metadata, write_altitude_tsv
from sun_altitude.core.altitude import solar_position
from sun_altitude.core.config_loader import (
    dump_effective_config,
    load_run_config,
    site_from_config,
)
from sun_altitude.core.model import Site
from sun_altitude.core.series import count_sign_changes, time_grid


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sun_altitude_cli",
        description="Sample the solar altitude over a time window.",
    )
    p.add_argument("--run", help="Run name, resolves to config/runs/<name>.toml")
    p.add_argument("--run-config", help="Explicit run file path (TOML)")
    p.add_argument(
        "--set",
        action="append",
        default=[],
        help="Override config key=value (repeatable).",
    )
    p.add_argument(
        "--dump-effective-config",
        action="store_true",
        help="Print final merged config and exit.",
    )
    p.add_argument(
        "--log-dir",
        default="logs",
        help="Directory where the run log will be created.",
    )
    p.add_argument("--out", help="Output TSV path (overrides output.out_tsv).")
    p.add_argument(
        "--plot",
        action="store_true",
        help="Also save a PNG of altitude vs. time next to the TSV.",
    )
    return p


def _init_logger(project_root: str, log_dir: str) -> Tuple[str, Callable[[str], None]]:
    os.makedirs(os.path.join(project_root, log_dir), exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%SZ")
    path = os.path.join(project_root, log_dir, f"run_{stamp}.log")

    def _log(msg: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(msg.rstrip() + "\n")

    return path, _log


def _log_header(log, project_root: str, paths: Dict[str, Any], cfg: Dict[str, Any]):
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    log(f"[{now}] Run started")
    log(f"Project root: {project_root}")
    for key, label in (("run_path", "Run config"), ("site_path", "Site config")):
        if paths.get(key):
            log(f"{label}: {os.path.relpath(paths[key], project_root)}")
    log("")
    log("----- Effective configuration -----")
    log(dump_effective_config(cfg).rstrip())
    log("-----------------------------------")
    log("")


def _site_slug(site: Site) -> str:
    import re
    name = site.name.strip()
    m = re.search(r"\(([^)]+)\)", name)
    if m:
        tok = re.sub(r"[^A-Za-z0-9]+", "", m.group(1)).lower()
        if tok:
            return tok
    tok = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").lower()
    return tok or "site"


def _output_path(cfg: Dict[str, Any], args, project_root: str, site: Site) -> str:
    out_cfg = cfg.get("output", {})
    out_path = args.out or out_cfg.get("out_tsv", "")
    if not out_path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%SZ")
        template = out_cfg.get("filename_template", "altitude_{site}_{stamp}.tsv")
        base = template.format(site=_site_slug(site), stamp=stamp)
        out_path = os.path.join(out_cfg.get("out_dir", "output"), base)
    if not os.path.isabs(out_path):
        out_path = os.path.join(project_root, out_path)
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    return out_path


def _save_plot(png_path: str, rows: List[AltitudeRow], site: Site) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot([r.timestamp for r in rows], [r.altitude_deg for r in rows], lw=1.2)
    ax.axhline(0.0, color="0.5", lw=0.8, ls="--")
    ax.set_xlabel("UTC")
    ax.set_ylabel("altitude [deg]")
    ax.set_title(
        f"{site.name} ({site.latitude_deg:.4f}, {site.longitude_deg:.4f})", fontsize=9
    )
    fig.autofmt_xdate()
    fig.savefig(png_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    project_root = os.getcwd()
    try:
        cfg, paths = load_run_config(
            project_root=project_root,
            run_name=args.run,
            run_path=args.run_config,
            set_overrides=args.set,
        )
        site = site_from_config(cfg)
        md = Metadata(
            site=site.name,
            latitude_deg=site.latitude_deg,
            longitude_deg=site.longitude_deg,
            software_version=str(cfg["output"].get("software_version", "dev")),
        )
    except (ValueError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        return 2

    print("----- Effective configuration -----")
    print(dump_effective_config(cfg).rstrip())
    print("-----------------------------------")

    if args.dump_effective_config:
        return 0

    log_path, log = _init_logger(project_root, args.log_dir)
    _log_header(log, project_root, paths, cfg)
    print(f"Log file: {os.path.relpath(log_path, project_root)}")

    win = cfg.get("window", {})
    try:
        times = time_grid(win["start"], win["end"], float(win.get("step_s", 600)))
    except (KeyError, TypeError, ValueError) as e:
        msg = f"Invalid [window]: {e}"
        print(f"ERROR: {msg}"); log(f"ERROR: {msg}")
        return 2

    out_path = _output_path(cfg, args, project_root, site)
    print(f"Output TSV: {os.path.relpath(out_path, project_root)}")
    log(f"Output TSV: {out_path}")

    rows = [
        AltitudeRow.from_position(
            t, solar_position(t, site.latitude_deg, site.longitude_deg)
        )
        for t in times
    ]
    write_altitude_tsv(out_path, md, rows, append=False)

    alts = [r.altitude_deg for r in rows]
    msg = (
        f"Sampled {len(rows)} instants: min={min(alts):.2f}, max={max(alts):.2f} deg, "
        f"{count_sign_changes(alts)} horizon crossings between samples"
    )
    print(msg); log(msg)

    if args.plot:
        png_path = os.path.splitext(out_path)[0] + ".png"
        _save_plot(png_path, rows, site)
        print(f"Saved plot: {os.path.relpath(png_path, project_root)}")
        log(f"Saved plot: {png_path}")

    print("Done.")
    log("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
