"""
Unit tests for the per-tile table container
"""

import pytest
import os
import sys
import pandas as pd

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from geotiles.errors import MalformedTileID
from geotiles.extent import Extent
from geotiles.table import GeoTile, GeoTileMeta, crop, is_geotile, project


def _gt(tile_id="lat[+60+62]lon[+004+006]", **cols):
    frame = pd.DataFrame(cols or {"latitude": [61.0, 60.5], "longitude": [5.0, 4.5], "h": [1.0, 2.0]})
    return GeoTile(frame=frame, meta=GeoTileMeta(geotile_id=tile_id))


class TestGeoTileMeta:
    """Test cases for GeoTileMeta"""

    def test_to_dict(self):
        """Only set keys are written"""
        assert GeoTileMeta("lat[+60+62]lon[+004+006]").to_dict() == {"geotile_id": "lat[+60+62]lon[+004+006]"}
        d = GeoTileMeta("lat[+60+62]lon[+004+006]", xy_epsg=32632).to_dict()
        assert d == {"geotile_id": "lat[+60+62]lon[+004+006]", "XY_epsg": "32632"}

    def test_from_bytes_dict(self):
        """Arrow schema metadata (bytes) is decoded"""
        m = GeoTileMeta.from_dict({b"geotile_id": b"lat[+60+62]lon[+004+006]", b"XY_epsg": b"32632", b"pandas": b"{}"})
        assert m == GeoTileMeta("lat[+60+62]lon[+004+006]", 32632)

    def test_from_empty_dict(self):
        """Missing keys give an empty id and no epsg"""
        assert GeoTileMeta.from_dict({}) == GeoTileMeta("")


class TestGeoTile:
    """Test cases for GeoTile helpers"""

    def test_id_and_extent(self):
        """Extent comes from the ID"""
        gt = _gt()
        assert gt.id == "lat[+60+62]lon[+004+006]"
        assert gt.extent == Extent(xmin=4, xmax=6, ymin=60, ymax=62)
        assert len(gt) == 2

    def test_bad_id_extent(self):
        """A malformed ID surfaces when the extent is needed"""
        with pytest.raises(MalformedTileID):
            _gt(tile_id="nope").extent

    def test_is_geotile(self):
        """Needs latitude, longitude and an ID"""
        assert is_geotile(_gt())
        assert not is_geotile(_gt(tile_id=""))
        assert not is_geotile(_gt(latitude=[1.0], x=[2.0]))

    def test_crop(self):
        """Only rows inside the extent are kept, index reset"""
        gt = _gt()
        out = crop(gt, Extent(xmin=4.75, xmax=6, ymin=60, ymax=62))
        assert out.frame["h"].tolist() == [1.0]
        assert list(out.frame.index) == [0]
        assert out.meta == gt.meta
        assert len(gt) == 2


class TestProject:
    """Test cases for project() (rasterio does the transformation)"""

    def test_central_meridian(self):
        """A point on the zone's central meridian has easting 500 km"""
        gt = _gt(tile_id="lat[+00+02]lon[+008+010]", latitude=[0.5], longitude=[9.0])
        out = project(gt)
        assert out.meta.xy_epsg == 32632
        assert out.frame["X"].iloc[0] == pytest.approx(500000.0, abs=0.01)
        assert out.frame["Y"].iloc[0] == pytest.approx(55_270, abs=100)

    def test_norway_tile(self):
        """Norway tile projects into zone 32, west of its central meridian"""
        gt = _gt()
        out = project(gt)
        assert out.meta.xy_epsg == 32632
        assert (out.frame["X"] < 500000).all()
        assert ((out.frame["Y"] > 6.7e6) & (out.frame["Y"] < 6.85e6)).all()
        assert "X" not in gt.frame.columns

    def test_polar_tile(self):
        """Tiles above 84N use polar stereographic"""
        gt = _gt(tile_id="lat[+86+88]lon[+000+002]", latitude=[87.0], longitude=[1.0])
        out = project(gt)
        assert out.meta.xy_epsg == 3413
        assert out.frame["X"].notna().all()

    def test_empty(self):
        """Empty tiles get empty X/Y columns and the epsg"""
        gt = _gt(latitude=[], longitude=[])
        out = project(gt)
        assert list(out.frame.columns) == ["latitude", "longitude", "X", "Y"]
        assert len(out.frame) == 0
        assert out.meta.xy_epsg == 32632
