"""Terminal preview for flight sequences."""

from .app import PreviewApp

__all__ = ["PreviewApp"]
