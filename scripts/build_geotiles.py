#!/usr/bin/env python3
"""
Split a table of geolocated points into per-geotile Arrow files.

Reads a CSV (or Arrow/feather file) with `latitude` and `longitude` columns,
groups the rows by the geotile that contains them and writes one file per tile:

    <root>/<geotile id><suffix>      e.g. data/geotiles/lat[+60+62]lon[-146-144].arrow

Existing tile files are overwritten (one writer per tile is assumed).

Examples:
  python scripts/build_geotiles.py --input points.csv
  python scripts/build_geotiles.py --input points.csv --width 0.5 --utm
  python scripts/build_geotiles.py --input points.csv --bbox -150,58,-140,64 --strict
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
import pyarrow.feather as feather

# Allow running as a plain script from the repo root
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.logging_setup import get_logger, setup_logging
from common.utils import timer_ms
from geotiles.assign import group
from geotiles.catalog import save
from geotiles.config import load_config
from geotiles.errors import GeoTilesError
from geotiles.extent import Extent
from geotiles.grid import define
from geotiles.table import project


log = get_logger("geotiles.build")


def parse_bbox(text: str) -> Extent:
    """'lon_min,lat_min,lon_max,lat_max' -> Extent"""
    parts = [float(v) for v in text.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError("bbox must be lon_min,lat_min,lon_max,lat_max")
    lon_min, lat_min, lon_max, lat_max = parts
    try:
        return Extent(xmin=lon_min, xmax=lon_max, ymin=lat_min, ymax=lat_max)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def load_points(path: str) -> pd.DataFrame:
    p = Path(path)
    if p.suffix.lower() in (".arrow", ".feather"):
        return feather.read_table(str(p)).to_pandas()
    return pd.read_csv(p)


@timer_ms
def _group(frame: pd.DataFrame, width: float, bbox: Optional[Extent], strict: bool):
    if bbox is None and len(frame):
        lon = frame["longitude"]
        lat = frame["latitude"]
        bbox = Extent(xmin=lon.min(), xmax=lon.max(), ymin=lat.min(), ymax=lat.max())
    return group(frame, define(width, extent=bbox, geometry=False), strict=strict)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Group point records into geotile files")
    ap.add_argument("--config", default="config/geotiles.yaml")
    ap.add_argument("--input", required=True, help="CSV or Arrow file with latitude/longitude columns")
    ap.add_argument("--width", type=float, default=None, help="Override tile width (deg)")
    ap.add_argument("--root", default=None, help="Override output directory")
    ap.add_argument("--suffix", default=None, help="Override file suffix")
    ap.add_argument("--bbox", type=parse_bbox, default=None, help="Only tiles intersecting lon_min,lat_min,lon_max,lat_max")
    ap.add_argument("--utm", action="store_true", help="Add X/Y columns in each tile's local projection")
    ap.add_argument("--strict", action="store_true", help="Fail if any record falls outside the tiles")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    setup_logging(cfg.logging.level, force=True)

    width = args.width if args.width is not None else cfg.tiles.width
    root = args.root or cfg.tiles.root
    suffix = args.suffix or cfg.tiles.suffix

    frame = load_points(args.input)
    try:
        result, dt_ms = _group(frame, width, args.bbox, args.strict)
    except GeoTilesError as e:
        log.error("Grouping failed", extra={"extra": {"error": str(e)}})
        return 2

    Path(root).mkdir(parents=True, exist_ok=True)
    for gt in result.tiles:
        if args.utm:
            gt = project(gt)
        save(root, suffix, gt, filetype=cfg.tiles.filetype)

    log.info(
        "Geotiles written",
        extra={
            "extra": {
                "root": root,
                "width": width,
                "records": len(frame),
                "geotiles": len(result.tiles),
                "unassigned": result.unassigned,
                "group_ms": round(dt_ms, 1),
            }
        },
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
