"""droneshow: Light show designer for a single drone."""

__version__ = "0.1.0"

from .models import FlightSequence, SequenceLibrary, Waypoint

__all__ = [
    "FlightSequence",
    "SequenceLibrary",
    "Waypoint",
]
