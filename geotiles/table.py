from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from rasterio.warp import transform

from common.logging_setup import get_logger
from geotiles.extent import Extent
from geotiles.tile_id import decode
from geotiles.zones import epsg_crs, utm_epsg_extent


log = get_logger("geotiles.table")

LATITUDE = "latitude"
LONGITUDE = "longitude"

# keys used when the metadata is written next to the table (Arrow schema metadata)
META_ID_KEY = "geotile_id"
META_EPSG_KEY = "XY_epsg"


@dataclass(frozen=True, slots=True)
class GeoTileMeta:
    """
    Metadata that travels with a per-tile table.

    Attributes:
        geotile_id: ID of the tile the rows belong to.
        xy_epsg: EPSG code of the X/Y columns once the table has been projected.
    """
    geotile_id: str
    xy_epsg: Optional[int] = None

    def to_dict(self) -> Dict[str, str]:
        d = {META_ID_KEY: self.geotile_id}
        if self.xy_epsg is not None:
            d[META_EPSG_KEY] = str(self.xy_epsg)
        return d

    @classmethod
    def from_dict(cls, d: Dict[Any, Any]) -> "GeoTileMeta":
        def _s(v: Any) -> str:
            return v.decode() if isinstance(v, bytes) else str(v)

        norm = {_s(k): _s(v) for k, v in d.items()}
        epsg = norm.get(META_EPSG_KEY)
        return cls(geotile_id=norm.get(META_ID_KEY, ""), xy_epsg=int(epsg) if epsg else None)


@dataclass
class GeoTile:
    """
    Records of one tile: a DataFrame with latitude/longitude columns plus metadata.
    """
    frame: pd.DataFrame
    meta: GeoTileMeta = field(default_factory=lambda: GeoTileMeta(geotile_id=""))

    @property
    def id(self) -> str:
        return self.meta.geotile_id

    @property
    def extent(self) -> Extent:
        return decode(self.meta.geotile_id)

    def __len__(self) -> int:
        return len(self.frame)


def is_geotile(gt: GeoTile) -> bool:
    """
    Check if a GeoTile is compliant: latitude and longitude columns and a geotile_id.
    """
    cols = set(gt.frame.columns)
    return LATITUDE in cols and LONGITUDE in cols and bool(gt.meta.geotile_id)


def within(lon: np.ndarray, lat: np.ndarray, extent: Extent) -> np.ndarray:
    """Vectorised contains(): min < c <= max on both axes."""
    return (lat > extent.ymin) & (lat <= extent.ymax) & (lon > extent.xmin) & (lon <= extent.xmax)


def within_mask(frame: pd.DataFrame, extent: Extent) -> np.ndarray:
    """Boolean mask of rows inside extent."""
    return within(
        frame[LONGITUDE].to_numpy(dtype=float),
        frame[LATITUDE].to_numpy(dtype=float),
        extent,
    )


def crop(gt: GeoTile, extent: Extent) -> GeoTile:
    """Returns a GeoTile with only the rows that fall within extent."""
    keep = within_mask(gt.frame, extent)
    return GeoTile(frame=gt.frame.loc[keep].reset_index(drop=True), meta=gt.meta)


def project(gt: GeoTile) -> GeoTile:
    """
    Add X and Y columns in the tile's local UTM / polar stereographic projection.

    The zone is taken from the tile's extent (not from the rows), so every row of
    a tile shares one CRS, recorded as meta.xy_epsg.
    """
    epsg = utm_epsg_extent(gt.extent)
    frame = gt.frame.copy()

    if frame.empty:
        frame["X"] = pd.Series([], dtype=float)
        frame["Y"] = pd.Series([], dtype=float)
    else:
        xs, ys = transform(
            "EPSG:4326",
            epsg_crs(epsg),
            frame[LONGITUDE].to_numpy(dtype=float).tolist(),
            frame[LATITUDE].to_numpy(dtype=float).tolist(),
        )
        frame["X"] = np.asarray(xs, dtype=float)
        frame["Y"] = np.asarray(ys, dtype=float)

    log.debug("Projected geotile", extra={"extra": {"id": gt.id, "epsg": epsg, "rows": len(frame)}})
    return GeoTile(frame=frame, meta=replace(gt.meta, xy_epsg=epsg))
