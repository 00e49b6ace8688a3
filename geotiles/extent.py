from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shapely.geometry import Polygon, box


@dataclass(frozen=True, slots=True)
class Extent:
    """
    Axis-aligned rectangle in degrees.

    X is longitude and Y is latitude. This is the only axis order used inside
    the package; functions taking a raw (a, b) pair expose `always_xy` instead
    of guessing.
    """
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def __post_init__(self) -> None:
        for name in ("xmin", "xmax", "ymin", "ymax"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.xmin > self.xmax:
            raise ValueError(f"xmin ({self.xmin}) > xmax ({self.xmax})")
        if self.ymin > self.ymax:
            raise ValueError(f"ymin ({self.ymin}) > ymax ({self.ymax})")

    @property
    def X(self) -> Tuple[float, float]:
        return (self.xmin, self.xmax)

    @property
    def Y(self) -> Tuple[float, float]:
        return (self.ymin, self.ymax)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def to_bbox(self) -> Tuple[float, float, float, float]:
        # [lon_min, lat_min, lon_max, lat_max]
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def to_polygon(self) -> Polygon:
        return box(self.xmin, self.ymin, self.xmax, self.ymax)


WORLD = Extent(xmin=-180.0, xmax=180.0, ymin=-90.0, ymax=90.0)


def _xy(a: float, b: float, always_xy: bool) -> Tuple[float, float]:
    return (a, b) if always_xy else (b, a)


def intersects(a: Extent, b: Extent) -> bool:
    """Closed test: extents that only share an edge or corner intersect."""
    return (
        a.xmin <= b.xmax
        and b.xmin <= a.xmax
        and a.ymin <= b.ymax
        and b.ymin <= a.ymax
    )


def contains(extent: Extent, a: float, b: float, always_xy: bool = True) -> bool:
    """
    True if the point falls within extent.

    Half-open on both axes (min < c <= max) so adjacent tiles never both claim a
    point on their shared edge. (a, b) is (x, y); pass always_xy=False for (lat, lon).
    """
    x, y = _xy(a, b, always_xy)
    return (extent.ymin < y <= extent.ymax) and (extent.xmin < x <= extent.xmax)


def center(extent: Extent) -> Tuple[float, float]:
    """(x, y) midpoint of an extent."""
    return ((extent.xmin + extent.xmax) / 2, (extent.ymin + extent.ymax) / 2)


def extent_from_center(a: float, b: float, width: float, always_xy: bool = True) -> Extent:
    """
    Square extent of side `width` centred on (a, b).

    >>> extent_from_center(80, 80, 2)
    Extent(xmin=79.0, xmax=81.0, ymin=79.0, ymax=81.0)
    """
    x, y = _xy(a, b, always_xy)
    hw = width / 2
    return Extent(xmin=x - hw, xmax=x + hw, ymin=y - hw, ymax=y + hw)
