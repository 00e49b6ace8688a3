"""
Where per-tile files live.

The catalog only needs three things from storage: list file names under a
directory, read one tile, write one tile. TileStore captures that; the
filesystem variant is what production code uses, the in-memory variant lets
the catalog be exercised without touching disk.
"""
from __future__ import annotations

import os
import posixpath
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Union

from geotiles.io import check_filetype, read_table, write_table
from geotiles.table import GeoTile, GeoTileMeta
from geotiles.tile_id import id_from_filename


Pattern = Optional[Union[str, Sequence[str]]]


def _as_tuple(p: Pattern) -> Optional[tuple]:
    if p is None:
        return None
    return (p,) if isinstance(p, str) else tuple(p)


def name_matches(
    name: str,
    startswith: Pattern = None,
    endswith: Pattern = None,
    contains: Pattern = None,
    and_or: Callable[[Iterable[bool]], bool] = all,
) -> bool:
    """
    Filter a file name by prefix / suffix / substring.

    Each pattern may be a string or a sequence of strings (any of them matches);
    an unset pattern always matches. `and_or` combines the three tests: `all`
    keeps a name only if every test passes, `any` if at least one does.
    """
    starts = _as_tuple(startswith)
    ends = _as_tuple(endswith)
    subs = _as_tuple(contains)
    return and_or(
        (
            starts is None or name.startswith(starts),
            ends is None or name.endswith(ends),
            subs is None or any(s in name for s in subs),
        )
    )


class TileStore(Protocol):
    def list_entries(
        self,
        root: str,
        recursive: bool = False,
        startswith: Pattern = None,
        endswith: Pattern = None,
        contains: Pattern = None,
        and_or: Callable[[Iterable[bool]], bool] = all,
    ) -> List[str]: ...

    def read(self, path: str, filetype: str = "arrow") -> GeoTile: ...

    def write(self, path: str, gt: GeoTile, filetype: str = "arrow") -> None: ...


class FileSystemTileStore:
    """
    Per-tile files on local disk.

    Listing uses os.scandir for a single directory (much faster than a walk) and
    os.walk when subfolders are requested. OSErrors are not caught.
    """

    def __init__(self, follow_symlinks: bool = False):
        self.follow_symlinks = follow_symlinks

    def list_entries(
        self,
        root: str,
        recursive: bool = False,
        startswith: Pattern = None,
        endswith: Pattern = None,
        contains: Pattern = None,
        and_or: Callable[[Iterable[bool]], bool] = all,
    ) -> List[str]:
        root = os.fspath(root)
        out: List[str] = []
        if not recursive:
            with os.scandir(root) as it:
                for entry in it:
                    if entry.is_file(follow_symlinks=True) and name_matches(
                        entry.name, startswith, endswith, contains, and_or
                    ):
                        out.append(os.path.join(root, entry.name))
        else:
            def _raise(err: OSError) -> None:
                raise err

            for dirpath, _, files in os.walk(root, followlinks=self.follow_symlinks, onerror=_raise):
                for name in files:
                    if name_matches(name, startswith, endswith, contains, and_or):
                        out.append(os.path.join(dirpath, name))
        return sorted(out)

    def read(self, path: str, filetype: str = "arrow") -> GeoTile:
        return read_table(path, filetype=filetype)

    def write(self, path: str, gt: GeoTile, filetype: str = "arrow") -> None:
        os.makedirs(os.path.dirname(os.fspath(path)) or ".", exist_ok=True)
        write_table(path, gt, filetype=filetype)


def _key(path) -> str:
    return posixpath.normpath(os.fspath(path))


class MemoryTileStore:
    """
    Tiles kept in a dict keyed by "/"-joined path. Nothing touches disk.

    Reads return what was written, with geotile_id re-derived from the file name
    the same way reading a file does.
    """

    def __init__(self, files: Optional[Dict[str, GeoTile]] = None):
        self.files: Dict[str, GeoTile] = {_key(p): gt for p, gt in (files or {}).items()}

    def list_entries(
        self,
        root: str,
        recursive: bool = False,
        startswith: Pattern = None,
        endswith: Pattern = None,
        contains: Pattern = None,
        and_or: Callable[[Iterable[bool]], bool] = all,
    ) -> List[str]:
        root = _key(root)
        out: List[str] = []
        for path in self.files:
            parent, name = posixpath.split(path)
            parent = posixpath.normpath(parent)
            in_scope = parent == root or (recursive and parent.startswith(root.rstrip("/") + "/"))
            if in_scope and name_matches(name, startswith, endswith, contains, and_or):
                out.append(path)
        return sorted(out)

    def read(self, path: str, filetype: str = "arrow") -> GeoTile:
        check_filetype(filetype)
        key = _key(path)
        if key not in self.files:
            raise FileNotFoundError(path)
        gt = self.files[key]
        meta = GeoTileMeta(geotile_id=id_from_filename(path), xy_epsg=gt.meta.xy_epsg)
        return GeoTile(frame=gt.frame.copy(), meta=meta)

    def write(self, path: str, gt: GeoTile, filetype: str = "arrow") -> None:
        check_filetype(filetype)
        self.files[_key(path)] = GeoTile(frame=gt.frame.copy(), meta=gt.meta)
