"""Services for editing, storing and exporting flight sequences."""

from .editor_service import EditorService
from .export_service import (
    CsvExportWriter,
    ExportDocument,
    ExportedWaypoint,
    ExportFormat,
    ExportService,
    ExportWriter,
    JsonExportWriter,
)
from .library_service import DEFAULT_STORAGE_KEY, SequenceLibraryService

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "CsvExportWriter",
    "EditorService",
    "ExportDocument",
    "ExportFormat",
    "ExportService",
    "ExportWriter",
    "ExportedWaypoint",
    "JsonExportWriter",
    "SequenceLibraryService",
]
