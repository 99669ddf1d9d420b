"""Coordinate mapping between the drawing planes and 3D world space.

Pixel space is the 2D canvas the operator clicks on. The top view shows the
horizontal plane (x right, y down); the front view shows x against altitude,
with altitude growing upwards from the bottom edge. World space is the
right-handed frame used by the 3D preview: X and Z span the ground plane
centred on the canvas, Y is up.
"""

import logging
import math
from collections.abc import Iterable
from typing import NamedTuple, Protocol

import numpy as np
import numpy.typing as npt

from droneshow.models import CanvasGeometry, DrawingPlane

logger = logging.getLogger(__name__)


class PixelPoint(NamedTuple):
    """Canvas position in pixels."""

    x: float
    y: float


class WorldPoint(NamedTuple):
    """3D preview position in world units (Y up)."""

    x: float
    y: float
    z: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)


class SpatialPoint(NamedTuple):
    """Horizontal pixel position plus altitude in meters (the waypoint frame)."""

    x: float
    y: float
    z: float


class HasPosition(Protocol):
    """Anything carrying waypoint-frame coordinates."""

    x: float
    y: float
    z: float


class CoordinateMapper:
    """
    Maps between canvas pixels, waypoint coordinates and world space.

    All methods are pure functions of the canvas geometry. Round trips are
    exact for the top view; the front view preserves x exactly and altitude
    up to float rounding (pixels are stored unrounded).
    """

    def __init__(self, geometry: CanvasGeometry | None = None):
        self.geometry = geometry or CanvasGeometry()

    # =================================================================
    # Drawing planes
    # =================================================================

    def from_top_view(self, px: float, py: float, altitude: float) -> SpatialPoint:
        """Top view click: pixels are the horizontal plane, altitude is supplied."""
        return SpatialPoint(px, py, altitude)

    def from_front_view(self, px: float, py: float) -> SpatialPoint:
        """Front view click: depth is fixed at the canvas centre, altitude comes from the row."""
        g = self.geometry
        altitude = max(0.0, (g.height - py) / g.pixels_per_meter)
        return SpatialPoint(px, g.height / 2, altitude)

    def to_top_view(self, point: HasPosition) -> PixelPoint:
        return PixelPoint(point.x, point.y)

    def to_front_view(self, point: HasPosition) -> PixelPoint:
        return PixelPoint(point.x, self.geometry.height - point.z * self.geometry.pixels_per_meter)

    def from_pixel(
        self, px: float, py: float, plane: DrawingPlane, altitude: float = 0.0
    ) -> SpatialPoint:
        """
        Convert a click on either plane into waypoint coordinates.

        Args:
            px: Canvas X (pixels)
            py: Canvas Y (pixels)
            plane: Which view was clicked
            altitude: Altitude for top view clicks (ignored for the front view)
        """
        if plane == DrawingPlane.TOP:
            return self.from_top_view(px, py, altitude)
        return self.from_front_view(px, py)

    def to_pixel(self, point: HasPosition, plane: DrawingPlane) -> PixelPoint:
        """Project a waypoint onto either plane."""
        if plane == DrawingPlane.TOP:
            return self.to_top_view(point)
        return self.to_front_view(point)

    # =================================================================
    # World space
    # =================================================================

    def to_world(self, point: HasPosition) -> WorldPoint:
        """Convert waypoint coordinates to preview world space."""
        g = self.geometry
        return WorldPoint(
            (point.x - g.width / 2) / g.horizontal_scale,
            point.z / g.vertical_scale,
            (point.y - g.height / 2) / g.horizontal_scale,
        )

    def world_path(self, points: Iterable[HasPosition]) -> list[WorldPoint]:
        """
        World positions for drawing a flight path.

        Non-finite points are dropped rather than substituted. A path needs at
        least two valid points; otherwise an empty list is returned and
        nothing should be drawn.
        """
        path = []
        dropped = 0
        for point in points:
            world = self.to_world(point)
            if world.is_finite:
                path.append(world)
            else:
                dropped += 1

        if dropped:
            logger.warning(f"Dropped {dropped} non-finite point(s) from flight path")

        if len(path) < 2:
            return []
        return path

    def world_path_array(self, points: Iterable[HasPosition]) -> npt.NDArray[np.float64]:
        """Same as world_path, as an (n, 3) array (shape (0, 3) when not drawable)."""
        path = self.world_path(points)
        if not path:
            return np.empty((0, 3), dtype=np.float64)
        return np.asarray(path, dtype=np.float64)
