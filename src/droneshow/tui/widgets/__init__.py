"""Widgets for the preview TUI."""

from .pose_panel import PosePanel
from .sequence_summary import SequenceSummary
from .status_bar import StatusBar

__all__ = ["PosePanel", "SequenceSummary", "StatusBar"]
