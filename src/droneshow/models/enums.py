"""Enumerations for the drone show designer."""

from enum import Enum


class DrawingPlane(str, Enum):
    """2D projections the operator draws on."""

    TOP = "top"  # Bird's eye view, horizontal x/y
    FRONT = "front"  # Front elevation, horizontal x against altitude


class PatternType(str, Enum):
    """Procedural flight patterns."""

    CIRCLE = "circle"
    FIGURE8 = "figure8"
    SPIRAL = "spiral"
    FORMATION = "formation"

    @property
    def label(self) -> str:
        """Human-readable label used in generated sequence names."""
        return _PATTERN_LABELS[self]


_PATTERN_LABELS = {
    PatternType.CIRCLE: "Circle Pattern",
    PatternType.FIGURE8: "Figure-8 Pattern",
    PatternType.SPIRAL: "Spiral Pattern",
    PatternType.FORMATION: "Formation Flying",
}


class DraftState(str, Enum):
    """Editing state of the current draft."""

    EMPTY = "empty"  # No draft points, nothing to save
    DRAFTING = "drafting"  # Draft differs from what is committed
    SAVED = "saved"  # Draft matches the committed sequence
