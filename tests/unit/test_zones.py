"""
Unit tests for the UTM / polar stereographic zone resolver
"""

import pytest
import os
import sys

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from geotiles.errors import InvalidCoordinate
from geotiles.extent import Extent
from geotiles.tile_id import decode
from geotiles.zones import epsg_crs, utm_epsg, utm_epsg_extent


class TestPolar:
    """Polar stereographic beyond the UTM latitude limits"""

    def test_north(self):
        """Above 84N is EPSG:3413"""
        assert utm_epsg(10, 85) == 3413

    def test_south(self):
        """Below 80S is EPSG:3031"""
        assert utm_epsg(10, -81) == 3031

    def test_limits_are_utm(self):
        """Exactly 84N and 80S still use UTM"""
        assert utm_epsg(50, 84) == 32639
        assert utm_epsg(10, -80) == 32732

    def test_polar_ignores_longitude(self):
        """Polar codes do not depend on longitude"""
        assert {utm_epsg(lon, 89) for lon in (-180, -45, 0, 90, 179.9)} == {3413}
        assert {utm_epsg(lon, -89) for lon in (-180, -45, 0, 90, 179.9)} == {3031}


class TestRegularZones:
    """Regular 6 degree zones"""

    @pytest.mark.parametrize(
        "lon,lat,expected",
        [
            (-145, 61, 32606),     # Alaska
            (151.2, -33.9, 32756),  # Sydney
            (-77.05, 38.9, 32618),  # Washington DC
            (0.0, 0.0, 32631),
            (-0.1, -0.1, 32730),
            (-180, 10, 32601),
            (179.9, 10, 32660),
        ],
    )
    def test_zone(self, lon, lat, expected):
        """Zone and hemisphere from lon/lat"""
        assert utm_epsg(lon, lat) == expected

    def test_longitude_wraps(self):
        """Longitudes outside [-180, 180) are normalised first"""
        assert utm_epsg(180, 10) == 32601
        assert utm_epsg(185, 10) == 32601
        assert utm_epsg(-185, 10) == 32660
        assert utm_epsg(365, 10) == utm_epsg(5, 10)

    def test_axis_order(self):
        """always_xy=False reads (lat, lon)"""
        assert utm_epsg(38.9, -77.05, always_xy=False) == 32618


class TestExceptions:
    """Norway and Svalbard irregular zones"""

    def test_norway(self):
        """61N 5E is pulled into zone 32"""
        assert utm_epsg(5, 61) == 32632
        assert utm_epsg(61, 5, always_xy=False) == 32632

    def test_norway_west_of_3e(self):
        """West of 3E stays in zone 31"""
        assert utm_epsg(2.5, 61) == 32631

    def test_norway_outside_band(self):
        """Outside 56N-64N the exception does not apply"""
        assert utm_epsg(5, 55) == 32631
        assert utm_epsg(5, 64) == 32631

    @pytest.mark.parametrize(
        "lon,expected",
        [(0, 32631), (8.9, 32631), (9, 32633), (20.9, 32633), (21, 32635), (32.9, 32635), (33, 32637), (41.9, 32637)],
    )
    def test_svalbard(self, lon, expected):
        """72N-84N, 0E-42E uses zones 31/33/35/37"""
        assert utm_epsg(lon, 78) == expected

    def test_svalbard_edges(self):
        """Outside 0E-42E or below 72N the exception does not apply"""
        assert utm_epsg(42, 78) == 32638
        assert utm_epsg(-0.5, 78) == 32630
        assert utm_epsg(21, 71.9) == 32634


class TestInvalid:
    """Non-finite input is rejected"""

    @pytest.mark.parametrize(
        "lon,lat",
        [(float("nan"), 10), (10, float("nan")), (float("inf"), 10), (10, float("-inf")), ("x", 10), (None, 10)],
    )
    def test_invalid(self, lon, lat):
        """NaN, inf and non-numbers raise InvalidCoordinate"""
        with pytest.raises(InvalidCoordinate):
            utm_epsg(lon, lat)


class TestExtentZone:
    """Zone of an extent is the zone of its center"""

    def test_extent(self):
        """Norway tile resolves through its center"""
        assert utm_epsg_extent(decode("lat[+60+62]lon[+004+006]")) == 32632

    def test_polar_extent(self):
        """Tile centered above 84N is polar"""
        assert utm_epsg_extent(Extent(xmin=0, xmax=2, ymin=84, ymax=86)) == 3413

    def test_crs_string(self):
        """EPSG code as a CRS string"""
        assert epsg_crs(32632) == "EPSG:32632"
