from __future__ import annotations

import os
from typing import Union

import pyarrow as pa
import pyarrow.feather as feather

from common.logging_setup import get_logger
from geotiles.errors import UnsupportedFileType
from geotiles.table import GeoTile, GeoTileMeta
from geotiles.tile_id import id_from_filename


log = get_logger("geotiles.io")

PathLike = Union[str, "os.PathLike[str]"]

SUPPORTED_FILETYPES = ("arrow",)


def check_filetype(filetype: str) -> str:
    if filetype not in SUPPORTED_FILETYPES:
        raise UnsupportedFileType(f"{filetype} is not a supported file type")
    return filetype


def read_table(path: PathLike, filetype: str = "arrow") -> GeoTile:
    """
    Read an Arrow IPC file as a GeoTile.

    geotile_id always comes from the file name (the name is the index); XY_epsg
    is picked up from the schema metadata when the tile was saved projected.
    """
    check_filetype(filetype)
    table = feather.read_table(os.fspath(path))
    stored = GeoTileMeta.from_dict(table.schema.metadata or {})
    meta = GeoTileMeta(geotile_id=id_from_filename(path), xy_epsg=stored.xy_epsg)
    return GeoTile(frame=table.to_pandas(), meta=meta)


def write_table(path: PathLike, gt: GeoTile, filetype: str = "arrow") -> None:
    """Write a GeoTile to an uncompressed Arrow IPC (feather v2) file."""
    check_filetype(filetype)
    table = pa.Table.from_pandas(gt.frame, preserve_index=False)
    metadata = dict(table.schema.metadata or {})
    metadata.update({k.encode(): v.encode() for k, v in gt.meta.to_dict().items()})
    table = table.replace_schema_metadata(metadata)
    feather.write_feather(table, os.fspath(path), compression="uncompressed")
    log.debug("Wrote geotile", extra={"extra": {"path": os.fspath(path), "rows": table.num_rows}})
