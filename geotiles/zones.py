"""
Local projection for a point or tile.

Returns the EPSG code of the UTM zone containing a point, or of the polar
stereographic projection beyond UTM's latitude limits (84N / 80S). The
irregular zones over Norway and Svalbard follow the fixed rules of the UTM
standard (as implemented in Geodesy.jl, src/utm.jl).
"""
from __future__ import annotations

import math

from common.utils import clamp, is_finite
from geotiles.errors import InvalidCoordinate
from geotiles.extent import Extent, center


EPSG_NORTH_POLAR = 3413  # NSIDC Sea Ice Polar Stereographic North
EPSG_SOUTH_POLAR = 3031  # Antarctic Polar Stereographic
EPSG_UTM_NORTH = 32600
EPSG_UTM_SOUTH = 32700

UTM_MAX_LAT = 84.0
UTM_MIN_LAT = -80.0


def epsg_crs(code: int) -> str:
    return f"EPSG:{int(code)}"


def utm_epsg(a: float, b: float, always_xy: bool = True) -> int:
    """
    EPSG code of the UTM zone (or polar stereographic projection) for a point.

    (a, b) is (lon, lat); pass always_xy=False for (lat, lon).

    >>> utm_epsg(5, 61)     # Norway exception
    32632
    >>> utm_epsg(10, 85)
    3413
    """
    if not is_finite(a, b):
        raise InvalidCoordinate(f"non-finite coordinate ({a!r}, {b!r})")
    lon, lat = (float(a), float(b)) if always_xy else (float(b), float(a))

    if lat > UTM_MAX_LAT:
        return EPSG_NORTH_POLAR
    if lat < UTM_MIN_LAT:
        return EPSG_SOUTH_POLAR

    # [-180, 180)
    lon = lon - math.floor((lon + 180) / 360) * 360

    ilat = math.floor(lat)
    ilon = math.floor(lon)

    band = clamp((ilat + 80) // 8 - 10, -10, 9)
    zone = (ilon + 186) // 6

    if band == 7 and zone == 31 and ilon >= 3:  # Norway
        zone = 32
    elif band == 9 and 0 <= ilon < 42:  # Svalbard
        zone = 2 * ((ilon + 183) // 12) + 1

    return (EPSG_UTM_NORTH if lat >= 0 else EPSG_UTM_SOUTH) + zone


def utm_epsg_extent(extent: Extent) -> int:
    """EPSG code for the centre of an extent."""
    x, y = center(extent)
    return utm_epsg(x, y)
