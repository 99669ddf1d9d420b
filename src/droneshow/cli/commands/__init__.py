"""CLI commands for droneshow."""

from .config import config
from .draw import draw
from .export import export
from .pattern import pattern
from .preview import preview
from .sequences import sequences_group

__all__ = ["config", "draw", "export", "pattern", "preview", "sequences_group"]
