from __future__ import annotations

"""
config_loader.py
================
TOML configuration for batch altitude runs.

A run file may pull in a site file through ``include_site``; the merge
order is site -> run -> ``--set`` overrides. Example run file::

    include_site = "config/sites/mzs.toml"

    [window]
    start = "2025-01-03T00:00:00Z"
    end = "2025-01-04T00:00:00Z"
    step_s = 600

    [output]
    out_tsv = "output/altitude_mzs.tsv"

and the site file::

    [site]
    name = "Mario Zucchelli Station (MZS)"
    latitude_deg = -74.6950
    longitude_deg = 164.1000
    elevation_m = 30.0
"""

import os
import sys
from typing import Any, Dict, Iterable, Tuple

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib as toml
else:
    import tomli as toml

from .model import Site


def load_toml(path: str) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return toml.load(f)


def merge_dicts(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_dicts(out[k], v)
        else:
            out[k] = v
    return out


def apply_sets(cfg: Dict[str, Any], sets: Iterable[str]) -> Dict[str, Any]:
    for item in sets:
        if "=" not in item:
            raise ValueError(f"--set requires key=value, got: {item}")
        key, val = item.split("=", 1)
        path = key.strip().split(".")
        cursor = cfg
        for p in path[:-1]:
            if p not in cursor or not isinstance(cursor[p], dict):
                cursor[p] = {}
            cursor = cursor[p]
        cursor[path[-1]] = parse_scalar(val.strip())
    return cfg


def parse_scalar(s: str):
    sl = s.lower()
    if sl in ("true", "false"):
        return sl == "true"
    try:
        if "." in s or "e" in sl:
            return float(s)
        return int(s)
    except ValueError:
        return s


def _resolve(project_root: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(project_root, path))


def load_run_config(
    project_root: str,
    run_name: str | None,
    run_path: str | None,
    set_overrides: Iterable[str] = (),
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Compose site and run configuration, then apply ``--set`` overrides.

    Returns ``(effective_cfg, summary_paths)``; ``summary_paths`` holds the
    keys ``run_path`` and ``site_path``.
    """
    summary: Dict[str, Any] = {"run_path": None, "site_path": None}

    if run_name and run_path:
        raise ValueError("Use either --run or --run-config, not both.")

    if run_name:
        run_path = os.path.join(project_root, "config", "runs", f"{run_name}.toml")

    if not run_path:
        raise ValueError("Missing --run or --run-config")

    run_path = _resolve(project_root, run_path)
    if not os.path.exists(run_path):
        raise FileNotFoundError(
            f"Run file not found: {run_path}. Expected in config/runs for --run."
        )
    run_cfg = load_toml(run_path)
    summary["run_path"] = run_path

    site_cfg: Dict[str, Any] = {}
    site_ref = run_cfg.pop("include_site", None)
    if site_ref:
        site_path = _resolve(project_root, site_ref)
        if not os.path.exists(site_path):
            raise FileNotFoundError(f"Site file not found: {site_path}")
        site_cfg = load_toml(site_path)
        summary["site_path"] = site_path

    cfg = merge_dicts(site_cfg, run_cfg)
    cfg = apply_sets(cfg, set_overrides)

    cfg.setdefault("site", {})
    cfg.setdefault("window", {})
    cfg.setdefault("output", {})

    return cfg, summary


def site_from_config(cfg: Dict[str, Any]) -> Site:
    """Build a :class:`Site` from the ``[site]`` table.

    Raises
    ------
    ValueError
        If latitude or longitude is missing or not numeric.
    """
    site = cfg.get("site", {})
    missing = [k for k in ("latitude_deg", "longitude_deg") if k not in site]
    if missing:
        raise ValueError(f"[site] is missing: {', '.join(missing)}")
    try:
        return Site(
            name=str(site.get("name", "Unknown")),
            latitude_deg=float(site["latitude_deg"]),
            longitude_deg=float(site["longitude_deg"]),
            elevation_m=float(site.get("elevation_m", 0.0)),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid [site] values: {e}") from e


def dump_effective_config(cfg: Dict[str, Any]) -> str:
    return tomli_w.dumps(cfg)


__all__ = [
    "load_toml",
    "merge_dicts",
    "apply_sets",
    "parse_scalar",
    "load_run_config",
    "site_from_config",
    "dump_effective_config",
]
