"""Export of flight sequences for autopilot consumers."""

import csv
import io
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, field_serializer

from droneshow.core import CoordinateMapper
from droneshow.exceptions import ExportError
from droneshow.model_manager import PydanticPersistence
from droneshow.models import CanvasGeometry, FlightSequence

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = 1


class ExportFormat(str, Enum):
    """Supported export file formats."""

    JSON = "json"
    CSV = "csv"


class ExportedWaypoint(BaseModel):
    """One waypoint as seen by the consumer: canvas frame plus world frame."""

    index: int
    timestamp: int = Field(description="Milliseconds from sequence start")
    x: float = Field(description="Top-down canvas X (pixels)")
    y: float = Field(description="Top-down canvas Y (pixels)")
    altitude: float = Field(description="Altitude (meters)")
    world_x: float
    world_y: float
    world_z: float
    color: str = Field(description="LED color as '#RRGGBB'")
    rgb: dict[str, int] = Field(description="LED color channels")
    brightness: float
    speed: float | None = None
    transition_duration: int | None = None


class ExportDocument(BaseModel):
    """Self-describing export of one sequence."""

    format_version: int = EXPORT_FORMAT_VERSION
    generator: str = "droneshow"
    exported_at: datetime = Field(default_factory=datetime.now)
    sequence_id: str
    name: str
    duration: int
    waypoint_count: int
    timestamps_ascending: bool = Field(
        description="False means waypoint order and timestamps disagree; order is authoritative"
    )
    canvas: CanvasGeometry
    waypoints: list[ExportedWaypoint]

    @field_serializer("exported_at")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()


class ExportWriter(Protocol):
    """Writes an export document to a file."""

    suffix: str

    def write(self, document: ExportDocument, path: Path) -> None: ...


class JsonExportWriter:
    """Pretty-printed JSON document."""

    suffix = ".json"

    def write(self, document: ExportDocument, path: Path) -> None:
        PydanticPersistence.write_text_atomic(path, document.model_dump_json(indent=2), backup=False)


class CsvExportWriter:
    """One row per waypoint; sequence metadata is not included."""

    suffix = ".csv"

    COLUMNS = (
        "index",
        "timestamp",
        "x",
        "y",
        "altitude",
        "world_x",
        "world_y",
        "world_z",
        "color",
        "r",
        "g",
        "b",
        "brightness",
        "speed",
        "transition_duration",
    )

    def write(self, document: ExportDocument, path: Path) -> None:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=self.COLUMNS, lineterminator="\n")
        writer.writeheader()
        for waypoint in document.waypoints:
            row = waypoint.model_dump(exclude={"rgb"})
            row.update(waypoint.rgb)
            writer.writerow({k: "" if v is None else v for k, v in row.items()})
        PydanticPersistence.write_text_atomic(path, buffer.getvalue(), backup=False)


WRITERS: dict[ExportFormat, type] = {
    ExportFormat.JSON: JsonExportWriter,
    ExportFormat.CSV: CsvExportWriter,
}


class ExportService:
    """
    Builds export documents and hands them to a writer.

    Waypoints are exported in list order. They are not re-sorted by
    timestamp; a warning is logged when the two disagree.
    """

    def __init__(self, mapper: CoordinateMapper | None = None):
        self.mapper = mapper or CoordinateMapper()

    def build_document(self, sequence: FlightSequence) -> ExportDocument:
        """Convert a sequence into its export representation."""
        ascending = sequence.timestamps_ascending
        if not ascending:
            logger.warning(
                f"Sequence '{sequence.name}' ({sequence.id}) has timestamps out of order; "
                "exporting in waypoint order"
            )

        waypoints = []
        for index, point in enumerate(sequence.points):
            world = self.mapper.to_world(point)
            waypoints.append(
                ExportedWaypoint(
                    index=index,
                    timestamp=point.timestamp,
                    x=point.x,
                    y=point.y,
                    altitude=point.z,
                    world_x=world.x,
                    world_y=world.y,
                    world_z=world.z,
                    color=point.color_hex,
                    rgb=point.rgb,
                    brightness=point.brightness,
                    speed=point.speed,
                    transition_duration=point.transition_duration,
                )
            )

        return ExportDocument(
            sequence_id=sequence.id,
            name=sequence.name,
            duration=sequence.duration,
            waypoint_count=len(waypoints),
            timestamps_ascending=ascending,
            canvas=self.mapper.geometry,
            waypoints=waypoints,
        )

    def export(
        self,
        sequence: FlightSequence,
        path: Path,
        export_format: ExportFormat | str = ExportFormat.JSON,
        writer: ExportWriter | None = None,
    ) -> Path:
        """
        Write a sequence to a file.

        Args:
            sequence: Sequence to export
            path: Output file, or a directory to place '<id><suffix>' in
            export_format: Format used when no writer is given
            writer: Explicit writer (overrides export_format)

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        writer = writer or WRITERS[ExportFormat(export_format)]()
        path = Path(path)
        if path.is_dir():
            path = path / f"{sequence.id}{writer.suffix}"

        document = self.build_document(sequence)
        try:
            writer.write(document, path)
        except OSError as e:
            logger.error(f"Failed to export {sequence.id} to {path}: {e}")
            raise ExportError(str(path), str(e)) from e

        logger.info(f"Exported '{sequence.name}' ({document.waypoint_count} waypoints) to {path}")
        return path

    @staticmethod
    def default_filename(sequence: FlightSequence, export_format: ExportFormat | str) -> str:
        return f"{sequence.id}{WRITERS[ExportFormat(export_format)].suffix}"
