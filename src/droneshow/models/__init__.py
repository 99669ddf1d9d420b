"""Data models for the drone show designer."""

from .color import Color, hsl_to_rgb, parse_color
from .config import AppConfig, CanvasGeometry
from .draft import Draft
from .enums import DraftState, DrawingPlane, PatternType
from .library import SequenceLibrary
from .sequence import (
    DEFAULT_SEQUENCE_NAME,
    FlightSequence,
    distinct_color_count,
    freehand_duration,
    max_altitude,
    new_sequence_id,
    timestamps_ascending,
)
from .settings import FlightSettings, LedSettings
from .waypoint import Waypoint

__all__ = [
    "DEFAULT_SEQUENCE_NAME",
    # Models
    "AppConfig",
    "CanvasGeometry",
    "Color",
    "Draft",
    # Enums
    "DraftState",
    "DrawingPlane",
    "FlightSequence",
    "FlightSettings",
    "LedSettings",
    "PatternType",
    "SequenceLibrary",
    "Waypoint",
    # Functions
    "distinct_color_count",
    "freehand_duration",
    "hsl_to_rgb",
    "max_altitude",
    "new_sequence_id",
    "parse_color",
    "timestamps_ascending",
]
