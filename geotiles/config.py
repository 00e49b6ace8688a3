from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from geotiles.catalog import suffix_check
from geotiles.errors import InvalidConfig
from geotiles.grid import check_width
from geotiles.io import check_filetype


DEFAULT_CONFIG_PATH = "config/geotiles.yaml"


@dataclass(slots=True)
class TilesConfig:
    width: float = 2.0
    root: str = "data/geotiles"
    suffix: str = ".arrow"
    filetype: str = "arrow"

    def __post_init__(self) -> None:
        check_width(self.width)
        self.suffix = suffix_check(self.suffix)
        check_filetype(self.filetype)


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"


def _section(cls, name: str, raw: Any):
    raw = raw or {}
    if not isinstance(raw, dict):
        raise InvalidConfig(f"config section '{name}' must be a mapping")
    allowed = {f.name for f in fields(cls)}
    unknown = set(raw) - allowed
    if unknown:
        raise InvalidConfig(
            f"unknown key(s) in '{name}': {', '.join(sorted(map(str, unknown)))}"
            f" (expected one of {', '.join(sorted(allowed))})"
        )
    return cls(**raw)


@dataclass(slots=True)
class GeoTilesConfig:
    tiles: TilesConfig = field(default_factory=TilesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "GeoTilesConfig":
        d = d or {}
        if not isinstance(d, dict):
            raise InvalidConfig("config file must be a mapping of sections")
        unknown = set(d) - {"tiles", "logging"}
        if unknown:
            raise InvalidConfig(f"unknown config section(s): {', '.join(sorted(map(str, unknown)))}")
        return cls(
            tiles=_section(TilesConfig, "tiles", d.get("tiles")),
            logging=_section(LoggingConfig, "logging", d.get("logging")),
        )


def load_config(path: str = DEFAULT_CONFIG_PATH) -> GeoTilesConfig:
    """
    Load config/geotiles.yaml; built-in defaults when the file does not exist.

        tiles:
          width: 2          # degrees, must divide 180
          root: data/geotiles
          suffix: .arrow
          filetype: arrow
        logging:
          level: INFO
    """
    if not Path(path).exists():
        return GeoTilesConfig()
    with open(path, "r") as f:
        return GeoTilesConfig.from_dict(yaml.safe_load(f))
