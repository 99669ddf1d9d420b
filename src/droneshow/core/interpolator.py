"""Time-parameterized playback of a flight sequence.

Position is interpolated by fractional waypoint index, not by timestamp: the
loop period is split evenly across the segments between consecutive points.
LED color and brightness switch instantly, taken from the waypoint whose slot
the current time falls into.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field

from droneshow.colors import COLORS
from droneshow.models import Color, FlightSequence

from .mapper import CoordinateMapper, WorldPoint

logger = logging.getLogger(__name__)

DEFAULT_POSE = WorldPoint(0.0, 3.0, 0.0)
DEFAULT_COLOR = COLORS.RED
DEFAULT_BRIGHTNESS = 1.0


class FlightPose(BaseModel):
    """Drone position and LED state at one instant."""

    model_config = ConfigDict(frozen=True)

    position: WorldPoint = Field(description="World-space position")
    color: Color = Field(description="LED color")
    brightness: float = Field(ge=0.0, le=1.0, description="LED brightness")
    progress: float = Field(ge=0.0, le=1.0, description="Fraction of the loop period elapsed")
    waypoint_index: int | None = Field(
        default=None, description="Waypoint providing the LED state (None for the default pose)"
    )

    @property
    def is_default(self) -> bool:
        return self.waypoint_index is None


class PlaybackInterpolator:
    """
    Evaluates a sequence at arbitrary times.

    Example:
        ```python
        interpolator = PlaybackInterpolator(CoordinateMapper(config.canvas))
        pose = interpolator.pose_at(sequence, elapsed_ms)
        ```
    """

    def __init__(self, mapper: CoordinateMapper | None = None):
        self.mapper = mapper or CoordinateMapper()

    @staticmethod
    def progress(sequence: FlightSequence, t_ms: float) -> float:
        """Loop progress in [0, 1); 0 for a sequence with no duration."""
        if sequence.duration <= 0:
            return 0.0
        return (t_ms % sequence.duration) / sequence.duration

    def _is_playable(self, sequence: FlightSequence) -> bool:
        return bool(sequence.points) and sequence.duration > 0

    def position_at(self, sequence: FlightSequence, t_ms: float) -> WorldPoint:
        """World position at time t (ms)."""
        if not self._is_playable(sequence):
            return DEFAULT_POSE

        points = sequence.points
        if len(points) == 1:
            return self.mapper.to_world(points[0])

        f = self.progress(sequence, t_ms) * (len(points) - 1)
        segment = math.floor(f)
        local = f - segment
        start = self.mapper.to_world(points[segment])
        end = self.mapper.to_world(points[min(segment + 1, len(points) - 1)])
        return WorldPoint(*(a + (b - a) * local for a, b in zip(start, end, strict=True)))

    def waypoint_index_at(self, sequence: FlightSequence, t_ms: float) -> int | None:
        """Index of the waypoint whose LED state is shown at time t."""
        if not self._is_playable(sequence):
            return None
        n = len(sequence.points)
        return min(math.floor(self.progress(sequence, t_ms) * n), n - 1)

    def color_at(self, sequence: FlightSequence, t_ms: float) -> Color:
        """LED color at time t (no blending between waypoints)."""
        index = self.waypoint_index_at(sequence, t_ms)
        if index is None:
            return DEFAULT_COLOR
        return sequence.points[index].color

    def pose_at(self, sequence: FlightSequence, t_ms: float) -> FlightPose:
        """Full pose (position, color, brightness) at time t."""
        index = self.waypoint_index_at(sequence, t_ms)
        if index is None:
            return FlightPose(
                position=DEFAULT_POSE,
                color=DEFAULT_COLOR,
                brightness=DEFAULT_BRIGHTNESS,
                progress=0.0,
            )

        waypoint = sequence.points[index]
        return FlightPose(
            position=self.position_at(sequence, t_ms),
            color=waypoint.color,
            brightness=waypoint.brightness,
            progress=self.progress(sequence, t_ms),
            waypoint_index=index,
        )

    def sample_positions(
        self, sequence: FlightSequence, times_ms: Sequence[float] | npt.ArrayLike
    ) -> npt.NDArray[np.float64]:
        """
        Evaluate positions at many times at once.

        Args:
            sequence: Sequence to evaluate
            times_ms: Times in milliseconds

        Returns:
            Array of shape (len(times_ms), 3) of world positions
        """
        times = np.asarray(times_ms, dtype=np.float64)
        if not self._is_playable(sequence):
            return np.tile(np.asarray(DEFAULT_POSE, dtype=np.float64), (times.size, 1))

        world = np.asarray([self.mapper.to_world(p) for p in sequence.points], dtype=np.float64)
        if len(world) == 1:
            return np.tile(world[0], (times.size, 1))

        progress = np.mod(times, sequence.duration) / sequence.duration
        f = progress * (len(world) - 1)
        segment = np.floor(f).astype(np.int64)
        local = (f - segment)[:, np.newaxis]
        following = np.minimum(segment + 1, len(world) - 1)
        return world[segment] + (world[following] - world[segment]) * local
