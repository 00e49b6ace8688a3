"""
JSON-lines logging for geotiles.

Every module logs through get_logger("geotiles.<module>") and puts structured
fields in extra={"extra": {...}}, which the formatter emits as one "extra" object:

  geotiles.grid     DEBUG    tile definition (width, tiles, restricted)
  geotiles.catalog  DEBUG    directory scans (dir, suffix, files, kept) and
                             layer joins (suffixes, per_layer, common)
  geotiles.assign   WARNING  records outside every tile (unassigned, records)
  geotiles.table    DEBUG    projection of a tile (id, epsg, rows)
  geotiles.io       DEBUG    tile files written (path, rows)
  geotiles.build    INFO     run summary of the build script; ERROR on bad input

The build script calls setup_logging(level, force=True) after reading
config/geotiles.yaml; library imports fall back to LOG_LEVEL or INFO.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Optional


_CONFIGURED_FLAG = "_geotiles_configured"


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line:
      { "t": 169..., "lvl": "INFO", "name": "geotiles.grid", "msg": "text", "extra": {...} }
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "t": int(time.time() * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        # structured fields are passed as extra={"extra": {...}}
        if hasattr(record, "extra") and isinstance(record.extra, dict):  # type: ignore[attr-defined]
            payload["extra"] = record.extra  # type: ignore[attr-defined]
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    lvl = logging.getLevelName(name)
    return lvl if isinstance(lvl, int) else logging.INFO


def setup_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    """
    Configure the root logger with JSON formatting.

    Level precedence:
      - explicit `level` arg
      - env LOG_LEVEL (DEBUG/INFO/WARNING/ERROR)
      - default INFO

    Only the first call installs the handler; pass force=True to reconfigure
    (the build script does this once it has read its config file).
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG, False) and not force:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))
    setattr(root, _CONFIGURED_FLAG, True)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; ensures root is configured."""
    setup_logging()
    return logging.getLogger(name)
