"""
GeoTiles: fixed global tiling of the Earth's surface.

- Fixed grid of lat/lon tiles whose IDs encode their extent: lat[+60+62]lon[-146-144]
- Records (rows with latitude/longitude) are grouped into per-tile tables
- Local projection per tile: UTM zone, or polar stereographic near the poles
- A directory of <id><suffix> files is the spatial index; no catalog database
"""
from geotiles.errors import (
    GeoTilesError,
    InvalidConfig,
    InvalidCoordinate,
    InvalidSuffix,
    InvalidTileFilename,
    InvalidWidth,
    MalformedTileID,
    UnassignedRecords,
    UnsupportedFileType,
)
from geotiles.extent import WORLD, Extent, center, contains, extent_from_center, intersects
from geotiles.tile_id import decode, encode, extent_from_filename, id_from_filename
from geotiles.grid import Tile, define, subset, tiles_frame
from geotiles.zones import utm_epsg, utm_epsg_extent
from geotiles.table import GeoTile, GeoTileMeta, crop, is_geotile, project
from geotiles.assign import GroupResult, assign_tile, group
from geotiles.store import FileSystemTileStore, MemoryTileStore, TileStore
from geotiles.catalog import (
    list_tiles,
    list_tiles_intersecting,
    path2tile,
    read_all,
    save,
    suffix_check,
)

__all__ = [
    "GeoTilesError",
    "InvalidConfig",
    "InvalidCoordinate",
    "InvalidSuffix",
    "InvalidTileFilename",
    "InvalidWidth",
    "MalformedTileID",
    "UnassignedRecords",
    "UnsupportedFileType",
    "WORLD",
    "Extent",
    "center",
    "contains",
    "extent_from_center",
    "intersects",
    "decode",
    "encode",
    "extent_from_filename",
    "id_from_filename",
    "Tile",
    "define",
    "subset",
    "tiles_frame",
    "utm_epsg",
    "utm_epsg_extent",
    "GeoTile",
    "GeoTileMeta",
    "crop",
    "is_geotile",
    "project",
    "GroupResult",
    "assign_tile",
    "group",
    "FileSystemTileStore",
    "MemoryTileStore",
    "TileStore",
    "list_tiles",
    "list_tiles_intersecting",
    "path2tile",
    "read_all",
    "save",
    "suffix_check",
]
