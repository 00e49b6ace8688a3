from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from shapely.geometry import Polygon

from common.logging_setup import get_logger
from common.utils import is_finite, shortest_decimal
from geotiles.errors import InvalidWidth
from geotiles.extent import WORLD, Extent, intersects
from geotiles.tile_id import encode


log = get_logger("geotiles.grid")


@dataclass(frozen=True, slots=True)
class Tile:
    """One cell of the global tessellation."""
    id: str
    extent: Extent
    geometry: Optional[Polygon] = field(default=None, repr=False, compare=False)


def check_width(width: float) -> Decimal:
    if isinstance(width, bool) or not isinstance(width, Real) or not is_finite(width) or width <= 0:
        raise InvalidWidth(f"a geotile width must be a positive number, got {width!r}")
    w = shortest_decimal(width)
    if Decimal(180) % w != 0:
        raise InvalidWidth(f"a geotile width of {width} does not divide evenly into 180")
    return w


def _edges(lo: float, hi: float, w: Decimal, keep: Tuple[float, float]) -> List[Tuple[float, float]]:
    """
    (min, max) of every cell along one axis, restricted to cells touching `keep`.

    Cells are built from centres lo + w/2, lo + 3w/2, ... offset by half a width,
    all in decimal arithmetic, so each edge is the float nearest to its exact
    decimal value and survives the ID round trip.
    """
    hw = w / 2
    start = Decimal(int(lo)) + hw
    count = int((Decimal(int(hi)) - Decimal(int(lo))) / w)
    out = []
    for k in range(count):
        c = start + k * w
        cmin, cmax = float(c - hw), float(c + hw)
        if cmin <= keep[1] and keep[0] <= cmax:
            out.append((cmin, cmax))
    return out


def define(width: float, extent: Optional[Extent] = None, geometry: bool = True) -> List[Tile]:
    """
    Returns the geotiles of a given width.

    The grid is always laid over the whole world (lat -90..90, lon -180..180) so
    tiles of one width are identical no matter which region is requested; passing
    `extent` keeps the tiles that intersect it, partial overlap included.

    Order is latitude-major, west to east within each latitude row:

    >>> [t.id for t in define(2)][:2]
    ['lat[-90-88]lon[-180-178]', 'lat[-90-88]lon[-178-176]']

    Raises InvalidWidth unless 180 is a whole multiple of `width`.
    """
    w = check_width(width)
    region = WORLD if extent is None else extent

    lats = _edges(WORLD.ymin, WORLD.ymax, w, region.Y)
    lons = _edges(WORLD.xmin, WORLD.xmax, w, region.X)

    tiles: List[Tile] = []
    for ymin, ymax in lats:
        for xmin, xmax in lons:
            ext = Extent(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)
            tiles.append(Tile(id=encode(ext), extent=ext, geometry=ext.to_polygon() if geometry else None))

    log.debug(
        "Defined geotiles",
        extra={"extra": {"width": float(width), "tiles": len(tiles), "restricted": extent is not None}},
    )
    return tiles


def subset(tiles: Iterable[Tile], extent: Extent) -> List[Tile]:
    """Returns the subset of geotiles that intersect extent."""
    return [t for t in tiles if intersects(extent, t.extent)]


def tiles_frame(tiles: Sequence[Tile]) -> pd.DataFrame:
    """Tiles as a DataFrame with id, extent and geometry columns."""
    return pd.DataFrame(
        {
            "id": [t.id for t in tiles],
            "extent": [t.extent for t in tiles],
            "geometry": [t.geometry for t in tiles],
        }
    )
