"""Tests for CoordinateMapper."""

import math

import numpy as np
import pytest

from droneshow.core import CoordinateMapper, PixelPoint, SpatialPoint, WorldPoint
from droneshow.models import CanvasGeometry, DrawingPlane


@pytest.fixture
def mapper():
    """Mapper on the default 400x300 canvas."""
    return CoordinateMapper()


@pytest.mark.unit
class TestDrawingPlanes:
    """Test pixel <-> waypoint conversion on both views."""

    def test_top_view_uses_given_altitude(self, mapper):
        assert mapper.from_pixel(100, 50, DrawingPlane.TOP, altitude=20) == SpatialPoint(100, 50, 20)

    def test_front_view_altitude_from_row(self, mapper):
        """Three pixels per meter, measured up from the bottom edge."""
        point = mapper.from_pixel(120, 240, DrawingPlane.FRONT, altitude=99)
        assert point == SpatialPoint(120, 150, 20)

    def test_front_view_below_ground_clamps(self, mapper):
        assert mapper.from_front_view(10, 320).z == 0

    def test_front_view_top_edge(self, mapper):
        assert mapper.from_front_view(10, 0).z == 100

    def test_top_view_round_trip(self, mapper):
        point = mapper.from_top_view(123.5, 77.25, 15)
        assert mapper.to_pixel(point, DrawingPlane.TOP) == PixelPoint(123.5, 77.25)

    def test_front_view_round_trip(self, mapper):
        point = mapper.from_front_view(50, 212)
        px, py = mapper.to_pixel(point, DrawingPlane.FRONT)
        assert px == 50
        assert py == pytest.approx(212)

    def test_custom_geometry(self):
        mapper = CoordinateMapper(CanvasGeometry(width=800, height=600, pixels_per_meter=6))
        assert mapper.from_front_view(0, 540) == SpatialPoint(0, 300, 10)


@pytest.mark.unit
class TestWorldSpace:
    """Test conversion into the Y-up preview frame."""

    def test_canvas_centre_on_ground_is_origin(self, mapper):
        assert mapper.to_world(SpatialPoint(200, 150, 0)) == WorldPoint(0, 0, 0)

    def test_scales(self, mapper):
        """20 pixels per unit horizontally, 10 meters per unit vertically."""
        assert mapper.to_world(SpatialPoint(220, 190, 10)) == WorldPoint(1, 1, 2)

    def test_world_path_needs_two_points(self, mapper):
        assert mapper.world_path([SpatialPoint(0, 0, 0)]) == []
        assert mapper.world_path([]) == []

    def test_world_path_drops_non_finite(self, mapper, caplog):
        points = [SpatialPoint(200, 150, 0), SpatialPoint(math.nan, 0, 0), SpatialPoint(220, 150, 10)]
        path = mapper.world_path(points)
        assert path == [WorldPoint(0, 0, 0), WorldPoint(1, 1, 0)]
        assert "non-finite" in caplog.text

    def test_world_path_single_valid_point_not_drawn(self, mapper):
        assert mapper.world_path([SpatialPoint(200, 150, 0), SpatialPoint(math.inf, 0, 0)]) == []

    def test_world_path_array(self, mapper, three_point_sequence):
        array = mapper.world_path_array(three_point_sequence.points)
        assert array.shape == (3, 3)
        np.testing.assert_allclose(array[2], [2, 2, 0])

    def test_world_path_array_empty(self, mapper):
        assert mapper.world_path_array([]).shape == (0, 3)
