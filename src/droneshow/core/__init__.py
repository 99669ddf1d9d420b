"""Core geometry and playback logic - UI-agnostic."""

from .clock import DEFAULT_TICK_MS, PlaybackClock, Scheduler, TimerHandle
from .interpolator import DEFAULT_COLOR, DEFAULT_POSE, FlightPose, PlaybackInterpolator
from .mapper import CoordinateMapper, PixelPoint, SpatialPoint, WorldPoint

__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_POSE",
    "DEFAULT_TICK_MS",
    "CoordinateMapper",
    "FlightPose",
    "PixelPoint",
    "PlaybackClock",
    "PlaybackInterpolator",
    "Scheduler",
    "SpatialPoint",
    "TimerHandle",
    "WorldPoint",
]
