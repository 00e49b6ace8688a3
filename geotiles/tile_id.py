"""
Tile ID codec.

A tile ID is the tile's extent written out in a fixed grammar,

    lat[<lat_min><lat_max>]lon[<lon_min><lon_max>]

e.g. ``lat[+60+62]lon[-146-144]``. Every number carries an explicit sign and is
printed like C printf ``%+03.nf`` (latitude) or ``%+04.nf`` (longitude), so a
whole-degree field is zero-padded to 2 or 3 digits and a fractional one is not
(``+4.50``). The number of
decimals is the smallest that writes the tile's half-width exactly, so integer
tilings get short IDs and fractional ones stay lossless:

    width 2    -> lat[+60+62]lon[-146-144]
    width 0.5  -> lat[+60.00+60.50]lon[-146.00-145.50]

The ID doubles as the file name prefix of every per-tile file, which is what
lets a directory listing act as a spatial index.
"""
from __future__ import annotations

import os
import re
from decimal import Decimal
from typing import Union

from common.utils import fraction_digits, shortest_decimal
from geotiles.errors import InvalidTileFilename, MalformedTileID
from geotiles.extent import Extent


PathLike = Union[str, "os.PathLike[str]"]

ID_PREFIX = "lat["

_NUM = r"([+-]\d+(?:\.\d+)?)"
_ID_RE = re.compile(rf"lat\[{_NUM}{_NUM}\]lon\[{_NUM}{_NUM}\]")


def id_precision(extent: Extent) -> int:
    """Decimals needed to write the extent's half-width exactly."""
    # difference of the shortest reprs, so 0.1-degree tiles stored as floats
    # (e.g. 60.1 and 60.2) still give 0.05 and not 0.04999999999999716
    span = shortest_decimal(extent.ymax) - shortest_decimal(extent.ymin)
    return fraction_digits(float(span / Decimal(2)))


def _field(v: float, int_digits: int, n: int) -> str:
    # printf %+0{1+int_digits}.{n}f: the width is the whole field, so with
    # decimals a short integer part is not padded (+4.50, not +004.50)
    # + 0.0 folds -0.0 into 0.0 so the sign never reads "-00"
    return f"{v + 0.0:+0{1 + int_digits}.{n}f}"


def encode(extent: Extent) -> str:
    """
    Returns the geotile id of an extent.

    >>> encode(Extent(xmin=-146, xmax=-144, ymin=60, ymax=62))
    'lat[+60+62]lon[-146-144]'
    """
    n = id_precision(extent)
    return (
        f"lat[{_field(extent.ymin, 2, n)}{_field(extent.ymax, 2, n)}]"
        f"lon[{_field(extent.xmin, 3, n)}{_field(extent.xmax, 3, n)}]"
    )


def decode(tile_id: str) -> Extent:
    """
    Returns the extent encoded in a geotile id.

    Raises MalformedTileID unless the whole string matches the grammar.
    """
    if not isinstance(tile_id, str):
        raise MalformedTileID(f"geotile id must be a string, got {type(tile_id).__name__}")
    m = _ID_RE.fullmatch(tile_id)
    if m is None:
        raise MalformedTileID(f"{tile_id!r} is not a valid geotile id")
    ymin, ymax, xmin, xmax = (float(g) for g in m.groups())
    try:
        return Extent(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)
    except ValueError as e:
        raise MalformedTileID(f"{tile_id!r}: {e}") from e


def id_from_filename(filename: PathLike) -> str:
    """
    Returns the geotile id given a file name or file path.

    >>> id_from_filename("/data/height_change/lat[+60+62]lon[-146-144].cop30_v2")
    'lat[+60+62]lon[-146-144]'
    """
    fn = os.path.basename(os.fspath(filename))
    first = fn.find("]")
    second = fn.find("]", first + 1) if first >= 0 else -1
    if second < 0:
        raise InvalidTileFilename(f"{os.fspath(filename)} is not a valid geotile file name")
    return fn[: second + 1]


def extent_from_filename(filename: PathLike) -> Extent:
    """Returns the geotile extent given a file name or file path."""
    return decode(id_from_filename(filename))
