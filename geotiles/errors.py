from __future__ import annotations


class GeoTilesError(ValueError):
    """Base class for all geotiles errors."""


class InvalidWidth(GeoTilesError):
    """Tile width does not divide 180 evenly (or is not a positive finite number)."""


class MalformedTileID(GeoTilesError):
    """String does not follow the lat[..]lon[..] grammar."""


class InvalidTileFilename(GeoTilesError):
    """File name does not start with a tile ID (fewer than two closing brackets)."""


class InvalidCoordinate(GeoTilesError):
    """Latitude/longitude is NaN, infinite or not a number."""


class InvalidSuffix(GeoTilesError):
    """Empty file suffix, or no suffix where at least one is required."""


class UnsupportedFileType(GeoTilesError):
    """Requested read/write format is not supported."""


class InvalidConfig(GeoTilesError):
    """Config file has an unknown section or key, or a section that is not a mapping."""


class UnassignedRecords(GeoTilesError):
    """
    Some records fell outside every tile.

    Non-fatal by default: group() reports the count and only raises this when
    asked to (strict=True or GroupResult.check()).
    """

    def __init__(self, count: int, total: int | None = None):
        self.count = int(count)
        self.total = total
        msg = f"{self.count} record(s) not contained within any of the provided geotiles"
        if total is not None:
            msg += f" (of {total})"
        super().__init__(msg)
