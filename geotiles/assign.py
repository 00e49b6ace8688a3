from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from common.logging_setup import get_logger
from geotiles.errors import UnassignedRecords
from geotiles.extent import contains
from geotiles.grid import Tile
from geotiles.table import LATITUDE, LONGITUDE, GeoTile, GeoTileMeta, within


log = get_logger("geotiles.assign")


def assign_tile(a: float, b: float, tiles: Sequence[Tile], always_xy: bool = True) -> Optional[str]:
    """
    ID of the first tile whose extent contains the point, or None if no tile does.

    (a, b) is (lon, lat); pass always_xy=False for (lat, lon).
    """
    for t in tiles:
        if contains(t.extent, a, b, always_xy=always_xy):
            return t.id
    return None


@dataclass
class GroupResult:
    """
    Output of group().

    Attributes:
        tiles: one GeoTile per tile that received at least one record, in tile order.
        unassigned: number of records not contained by any tile.
        unassigned_index: index labels (of the input frame) of those records.
    """
    tiles: List[GeoTile]
    unassigned: int = 0
    unassigned_index: pd.Index = field(default_factory=lambda: pd.Index([]))

    @property
    def assigned(self) -> int:
        return sum(len(gt) for gt in self.tiles)

    def check(self) -> "GroupResult":
        """Raise UnassignedRecords if any record was left out."""
        if self.unassigned:
            raise UnassignedRecords(self.unassigned, total=self.assigned + self.unassigned)
        return self


def group(frame: pd.DataFrame, tiles: Sequence[Tile], strict: bool = False) -> GroupResult:
    """
    Split records into one GeoTile per containing tile.

    Each record goes to the first tile (in `tiles` order) that contains it.
    Records outside every tile are never silently dropped: their count is
    returned and logged, and with strict=True UnassignedRecords is raised.
    """
    n = len(frame)
    lat = frame[LATITUDE].to_numpy(dtype=float)
    lon = frame[LONGITUDE].to_numpy(dtype=float)

    # -1 == not yet assigned
    owner = np.full(n, -1, dtype=np.int64)
    if n:
        lat_lo, lat_hi = np.nanmin(lat), np.nanmax(lat)
        lon_lo, lon_hi = np.nanmin(lon), np.nanmax(lon)
        for i, t in enumerate(tiles):
            e = t.extent
            # skip tiles that cannot hold any of the points
            if e.ymax < lat_lo or e.ymin >= lat_hi or e.xmax < lon_lo or e.xmin >= lon_hi:
                continue
            free = owner < 0
            if not free.any():
                break
            hit = free & within(lon, lat, e)
            owner[hit] = i

    groups: List[GeoTile] = []
    for i in np.unique(owner[owner >= 0]):
        rows = frame.loc[owner == i].reset_index(drop=True)
        groups.append(GeoTile(frame=rows, meta=GeoTileMeta(geotile_id=tiles[int(i)].id)))

    missing = owner < 0
    result = GroupResult(
        tiles=groups,
        unassigned=int(missing.sum()),
        unassigned_index=frame.index[missing],
    )

    if result.unassigned:
        log.warning(
            "not all data contained within provided geotiles",
            extra={"extra": {"unassigned": result.unassigned, "records": n}},
        )
        if strict:
            result.check()
    log.debug("Grouped records", extra={"extra": {"records": n, "geotiles": len(groups)}})
    return result
