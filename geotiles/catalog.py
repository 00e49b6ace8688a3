"""
A directory of <geotile id><suffix> files used as a spatial index.

There is no catalog file: every query lists the directory, decodes each file
name back into an extent and filters on that. A "layer" is the set of files
sharing one suffix (e.g. ".cop30_v2", ".arrow"), and several layers can be
joined on the tiles present in all of them.
"""
from __future__ import annotations

import os
from typing import List, Optional, Sequence

import pandas as pd

from common.logging_setup import get_logger
from geotiles.errors import InvalidSuffix
from geotiles.extent import Extent, intersects
from geotiles.store import FileSystemTileStore, TileStore
from geotiles.table import GeoTile
from geotiles.tile_id import ID_PREFIX, decode, id_from_filename


log = get_logger("geotiles.catalog")

CATALOG_COLUMNS = ["id", "extent", "path2file"]


def _store(store: Optional[TileStore]) -> TileStore:
    return FileSystemTileStore() if store is None else store


def suffix_check(suffix: Optional[str]) -> Optional[str]:
    """
    Standardized file suffix with a leading period.

    None passes through (no suffix filter). Idempotent:
    suffix_check("arrow") == suffix_check(".arrow") == ".arrow".
    """
    if suffix is None:
        return None
    suffix = str(suffix)
    if not suffix:
        raise InvalidSuffix("file suffix must not be empty")
    return suffix if suffix.startswith(".") else "." + suffix


def path2tile(folder: str, tile_id: str, suffix: str) -> str:
    suffix = suffix_check(suffix)
    return os.path.join(os.fspath(folder), tile_id + suffix)


def list_tiles(
    path2dir: str,
    suffix: Optional[str] = None,
    extent: Optional[Extent] = None,
    store: Optional[TileStore] = None,
    recursive: bool = False,
) -> pd.DataFrame:
    """
    DataFrame of tile ids, extents and file paths found in path2dir.

    If suffix is provided only files with that suffix are listed. If extent is
    provided only tiles that intersect it are listed. A file that starts like a
    geotile but does not decode raises MalformedTileID.
    """
    suffix = suffix_check(suffix)
    fns = _store(store).list_entries(path2dir, recursive=recursive, startswith=ID_PREFIX, endswith=suffix)

    rows = []
    for fn in fns:
        tile_id = id_from_filename(fn)
        ext = decode(tile_id)
        if extent is not None and not intersects(extent, ext):
            continue
        rows.append((tile_id, ext, fn))

    log.debug(
        "Listed geotiles",
        extra={"extra": {"dir": os.fspath(path2dir), "suffix": suffix, "files": len(fns), "kept": len(rows)}},
    )
    return pd.DataFrame(rows, columns=CATALOG_COLUMNS)


def list_tiles_intersecting(
    path2dir: str,
    suffixes: Sequence[str],
    extent: Optional[Extent] = None,
    store: Optional[TileStore] = None,
) -> pd.DataFrame:
    """
    Tile ids, extents and one path column per suffix, for tiles that have a file
    for EVERY suffix.

    A tile missing from any layer is dropped entirely (inner join). Path columns
    are named by the suffixes as given.
    """
    if isinstance(suffixes, str):
        suffixes = [suffixes]
    if len(suffixes) == 0:
        raise InvalidSuffix("at least one suffix is required")

    layers = [list_tiles(path2dir, suffix=s, extent=extent, store=store) for s in suffixes]

    common = set(layers[0]["id"])
    for layer in layers[1:]:
        common &= set(layer["id"])

    base = layers[0].loc[layers[0]["id"].isin(common), ["id", "extent"]].reset_index(drop=True)
    for s, layer in zip(suffixes, layers):
        paths = layer.drop_duplicates("id").set_index("id")["path2file"]
        base[s] = base["id"].map(paths).to_numpy()

    log.debug(
        "Joined geotile layers",
        extra={"extra": {"suffixes": list(suffixes), "per_layer": [len(l) for l in layers], "common": len(base)}},
    )
    return base


def read_all(
    path2dir: str,
    suffix: Optional[str] = None,
    extent: Optional[Extent] = None,
    filetype: str = "arrow",
    store: Optional[TileStore] = None,
) -> List[GeoTile]:
    """Load every geotile in path2dir that matches suffix and intersects extent."""
    st = _store(store)
    df = list_tiles(path2dir, suffix=suffix, extent=extent, store=st)
    return [st.read(fn, filetype=filetype) for fn in df["path2file"]]


def save(
    folder: str,
    suffix: str,
    gt: GeoTile,
    filetype: str = "arrow",
    store: Optional[TileStore] = None,
) -> str:
    """
    Save a geotile to folder/<geotile id><suffix>; returns the path.

    One writer per tile file: concurrent saves of the same tile are not guarded.
    """
    decode(gt.meta.geotile_id)
    st = _store(store)
    path = path2tile(folder, gt.meta.geotile_id, suffix)
    st.write(path, gt, filetype=filetype)
    return path
