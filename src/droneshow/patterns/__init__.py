"""Procedural flight pattern generators."""

from .generators import (
    FORMATIONS,
    PATTERN_GENERATORS,
    generate_circle,
    generate_figure8,
    generate_formation,
    generate_pattern,
    generate_spiral,
)

__all__ = [
    "FORMATIONS",
    "PATTERN_GENERATORS",
    "generate_circle",
    "generate_figure8",
    "generate_formation",
    "generate_pattern",
    "generate_spiral",
]
