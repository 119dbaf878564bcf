"""Tests for ellipsoid constants."""

import math

import pytest

from dggs.projections.wgs84 import (
    ellipsoid_constants, area_of_lat_lon_rectangle, AREA_OF_EARTH, RADIUS_AUTHALIC, WGS84
)


class TestEllipsoidConstants:
    """Test constants derived from pyproj ellipsoids."""

    def test_wgs84_area(self):
        assert AREA_OF_EARTH == pytest.approx(510065621.72, rel=1e-8)

    def test_authalic_radius(self):
        assert RADIUS_AUTHALIC == pytest.approx(6371.0072, rel=1e-7)
        assert 4 * math.pi * RADIUS_AUTHALIC ** 2 == pytest.approx(AREA_OF_EARTH, rel=1e-12)

    def test_semi_major_axis(self):
        assert WGS84.semi_major_axis == pytest.approx(6378.137)
        assert WGS84.flattening == pytest.approx(1 / 298.257223563)

    def test_sphere(self):
        sphere = ellipsoid_constants('sphere')
        assert sphere.radius_authalic == pytest.approx(sphere.semi_major_axis)

    def test_unknown_ellipsoid(self):
        with pytest.raises(Exception):
            ellipsoid_constants('no-such-ellipsoid')


class TestRectangleArea:
    """Test areas between parallels and meridians."""

    def test_whole_globe(self):
        assert area_of_lat_lon_rectangle(-90, 90, -180, 180) == pytest.approx(AREA_OF_EARTH, rel=1e-12)

    def test_hemispheres(self):
        north = area_of_lat_lon_rectangle(0, 90, -180, 180)
        assert north == pytest.approx(AREA_OF_EARTH / 2, rel=1e-12)

    def test_one_degree_at_equator(self):
        area = area_of_lat_lon_rectangle(0, 1, 0, 1)
        assert 12200 < area < 12400

    def test_argument_order(self):
        assert area_of_lat_lon_rectangle(10, 0, 20, 30) == pytest.approx(area_of_lat_lon_rectangle(0, 10, 20, 30))
