"""Tests for ExportService and its writers."""

import csv
import json

import pytest

from droneshow.colors import COLORS
from droneshow.exceptions import ExportError
from droneshow.models import FlightSequence
from droneshow.services import CsvExportWriter, ExportFormat, ExportService


@pytest.fixture
def exporter():
    return ExportService()


@pytest.mark.unit
class TestBuildDocument:
    """Test the export representation."""

    def test_metadata(self, exporter, three_point_sequence):
        document = exporter.build_document(three_point_sequence)
        assert document.sequence_id == "seq-three"
        assert document.name == "Three Points"
        assert document.duration == 3000
        assert document.waypoint_count == 3
        assert document.timestamps_ascending
        assert document.canvas.width == 400

    def test_waypoints_carry_both_frames(self, exporter, three_point_sequence):
        waypoint = exporter.build_document(three_point_sequence).waypoints[1]
        assert (waypoint.x, waypoint.y, waypoint.altitude) == (220, 150, 10)
        assert (waypoint.world_x, waypoint.world_y, waypoint.world_z) == (1, 1, 0)
        assert waypoint.color == "#00FF00"
        assert waypoint.rgb == COLORS.GREEN.to_rgb_dict()
        assert waypoint.timestamp == 1000

    def test_out_of_order_kept_and_flagged(self, exporter, make_waypoint, caplog):
        sequence = FlightSequence.from_points(
            [make_waypoint(timestamp=2000), make_waypoint(timestamp=1000)], sequence_id="messy"
        )
        document = exporter.build_document(sequence)
        assert [w.timestamp for w in document.waypoints] == [2000, 1000]
        assert not document.timestamps_ascending
        assert "out of order" in caplog.text

    def test_empty_sequence(self, exporter):
        document = exporter.build_document(FlightSequence(id="empty"))
        assert document.waypoints == []
        assert document.duration == 0


@pytest.mark.unit
class TestExportFiles:
    """Test writing JSON and CSV files."""

    def test_json_into_directory(self, exporter, three_point_sequence, tmp_path):
        path = exporter.export(three_point_sequence, tmp_path)
        assert path == tmp_path / "seq-three.json"

        data = json.loads(path.read_text())
        assert data["format_version"] == 1
        assert data["generator"] == "droneshow"
        assert data["waypoint_count"] == 3
        assert data["waypoints"][2]["color"] == "#0000FF"
        assert "exported_at" in data

    def test_json_to_file(self, exporter, three_point_sequence, tmp_path):
        target = tmp_path / "nested" / "flight.json"
        assert exporter.export(three_point_sequence, target) == target
        assert target.exists()

    def test_csv(self, exporter, three_point_sequence, tmp_path):
        path = exporter.export(three_point_sequence, tmp_path, ExportFormat.CSV)
        assert path.suffix == ".csv"

        with path.open(newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 3
        assert list(rows[0].keys()) == list(CsvExportWriter.COLUMNS)
        assert (rows[2]["r"], rows[2]["g"], rows[2]["b"]) == ("0", "0", "255")
        assert rows[0]["speed"] == ""

    def test_format_string(self, exporter, three_point_sequence, tmp_path):
        assert exporter.export(three_point_sequence, tmp_path, "csv").suffix == ".csv"

    def test_explicit_writer(self, exporter, three_point_sequence, tmp_path):
        path = exporter.export(three_point_sequence, tmp_path, writer=CsvExportWriter())
        assert path.name == "seq-three.csv"

    def test_unwritable_path(self, exporter, three_point_sequence, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            exporter.export(three_point_sequence, blocker / "flight.json")

    def test_default_filename(self, three_point_sequence):
        assert ExportService.default_filename(three_point_sequence, "json") == "seq-three.json"
