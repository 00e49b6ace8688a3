"""
Unit tests for configuration loading
"""

import pytest
import os
import sys

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from geotiles.config import GeoTilesConfig, TilesConfig, load_config
from geotiles.errors import GeoTilesError, InvalidConfig, InvalidSuffix, InvalidWidth, UnsupportedFileType


class TestLoadConfig:
    """Test cases for load_config()"""

    def test_missing_file_defaults(self, tmp_path):
        """No file gives the built-in defaults"""
        cfg = load_config(str(tmp_path / "missing.yaml"))
        assert cfg.tiles.width == 2.0
        assert cfg.tiles.root == "data/geotiles"
        assert cfg.tiles.suffix == ".arrow"
        assert cfg.tiles.filetype == "arrow"
        assert cfg.logging.level == "INFO"

    def test_yaml_values(self, tmp_path):
        """Values from YAML override defaults; suffix is normalised"""
        p = tmp_path / "geotiles.yaml"
        p.write_text("tiles:\n  width: 0.5\n  suffix: cop30_v2\n  root: /tmp/gt\nlogging:\n  level: DEBUG\n")
        cfg = load_config(str(p))
        assert cfg.tiles.width == 0.5
        assert cfg.tiles.suffix == ".cop30_v2"
        assert cfg.tiles.root == "/tmp/gt"
        assert cfg.logging.level == "DEBUG"

    def test_empty_yaml(self, tmp_path):
        """An empty file is the same as defaults"""
        p = tmp_path / "empty.yaml"
        p.write_text("")
        assert load_config(str(p)) == GeoTilesConfig()

    def test_repo_config(self):
        """The shipped config/geotiles.yaml loads"""
        cfg = load_config(os.path.join(project_root, "config", "geotiles.yaml"))
        assert cfg.tiles.width == 2


class TestValidation:
    """Invalid settings fail at load time"""

    def test_bad_width(self):
        """Width must divide 180"""
        with pytest.raises(InvalidWidth):
            TilesConfig(width=7)

    def test_bad_suffix(self):
        """Suffix must not be empty"""
        with pytest.raises(InvalidSuffix):
            TilesConfig(suffix="")

    def test_bad_filetype(self):
        """Only supported file types"""
        with pytest.raises(UnsupportedFileType):
            TilesConfig(filetype="csv")

    def test_unknown_key(self, tmp_path):
        """A misspelt key is rejected with the key named"""
        p = tmp_path / "bad.yaml"
        p.write_text("tiles:\n  widht: 2\n")
        with pytest.raises(InvalidConfig, match="widht"):
            load_config(str(p))

    def test_unknown_logging_key(self):
        """Unknown keys are a GeoTilesError, not a TypeError"""
        with pytest.raises(GeoTilesError):
            GeoTilesConfig.from_dict({"logging": {"lvl": "DEBUG"}})

    def test_unknown_section(self):
        """Only tiles and logging sections exist"""
        with pytest.raises(InvalidConfig, match="cache"):
            GeoTilesConfig.from_dict({"cache": {"root": "x"}})

    def test_section_not_mapping(self):
        """A section must be a mapping"""
        with pytest.raises(InvalidConfig):
            GeoTilesConfig.from_dict({"tiles": [2, "data"]})
