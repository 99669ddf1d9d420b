"""Smoke tests for CLI commands.

Every command runs against a config file in a temp directory, so the
sequence store and exports never touch the home directory. Uses Click's
CliRunner; the TUI itself is covered in test_tui_smoke.py.
"""

import json

import pytest
from click.testing import CliRunner

from droneshow.cli.main import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def home(temp_dir):
    """Config file pointing data and exports into the temp dir."""
    config_path = temp_dir / "config.json"
    config_path.write_text(
        json.dumps({"data_dir": str(temp_dir / "data"), "export_dir": str(temp_dir / "exports")})
    )
    return temp_dir


@pytest.fixture
def invoke(runner, home):
    """Run the CLI with the temp config and log file."""

    def _invoke(*args, **kwargs):
        base = ["--config", str(home / "config.json"), "--log-file", str(home / "droneshow.log")]
        return runner.invoke(cli, [*base, *args], catch_exceptions=False, **kwargs)

    return _invoke


def stored(home) -> dict:
    return json.loads((home / "data" / "drone-sequences.json").read_text())


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Drone light show designer" in result.output
        assert "--config" in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize(
        "command", [["sequences"], ["draw"], ["pattern"], ["export"], ["preview"], ["config"]]
    )
    def test_command_help(self, invoke, command):
        result = invoke(*command, "--help")
        assert result.exit_code == 0


@pytest.mark.integration
class TestDrawAndSequences:
    """Test drawing and managing saved sequences."""

    def test_empty_list(self, invoke):
        result = invoke("sequences", "list")
        assert result.exit_code == 0
        assert "No saved sequences" in result.output

    def test_draw_saves_sequence(self, invoke, home):
        result = invoke("draw", "100,100", "200,50", "300,100", "--altitude", "25", "--color", "#00ff00", "--name", "Tri")
        assert result.exit_code == 0, result.output
        assert "Tri" in result.output

        data = stored(home)
        sequence = data["sequences"][0]
        assert data["active_id"] == sequence["id"]
        assert sequence["duration"] == 3000
        assert [p["timestamp"] for p in sequence["points"]] == [0, 1000, 2000]
        assert {p["z"] for p in sequence["points"]} == {25}
        assert sequence["points"][0]["color"] == "#00FF00"

    def test_draw_front_view(self, invoke, home):
        result = invoke("draw", "--plane", "front", "120,240")
        assert result.exit_code == 0, result.output
        assert stored(home)["sequences"][0]["points"][0]["z"] == 20

    def test_draw_append(self, invoke, home):
        invoke("draw", "0,0")
        result = invoke("draw", "--append", "10,10")
        assert result.exit_code == 0, result.output
        sequences = stored(home)["sequences"]
        assert len(sequences) == 1
        assert len(sequences[0]["points"]) == 2

    def test_draw_invalid_point(self, invoke):
        result = invoke("draw", "abc")
        assert result.exit_code == 1
        assert "Invalid point" in result.output

    def test_draw_invalid_color(self, invoke):
        result = invoke("draw", "1,1", "--color", "blurple")
        assert result.exit_code == 1
        assert "Unsupported color format" in result.output

    def test_list_marks_active(self, invoke):
        invoke("draw", "0,0", "--name", "First")
        invoke("draw", "5,5", "--name", "Second")
        result = invoke("sequences", "list")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert any(line.startswith("*") and "Second" in line for line in lines)
        assert any(line.startswith(" ") and "First" in line for line in lines)

    def test_show_select_rename_delete(self, invoke, home):
        invoke("draw", "0,0", "--name", "First")
        invoke("draw", "5,5", "10,10", "--name", "Second")
        first_id, second_id = (s["id"] for s in stored(home)["sequences"])

        result = invoke("sequences", "show", second_id)
        assert result.exit_code == 0
        assert "#FF0000" in result.output

        result = invoke("sequences", "select", first_id)
        assert result.exit_code == 0
        assert stored(home)["active_id"] == first_id

        result = invoke("sequences", "rename", first_id, "Renamed")
        assert result.exit_code == 0
        assert stored(home)["sequences"][0]["name"] == "Renamed"

        result = invoke("sequences", "delete", first_id, "--yes")
        assert result.exit_code == 0
        assert stored(home)["active_id"] == second_id

    def test_delete_needs_confirmation(self, invoke, home):
        invoke("draw", "0,0")
        sequence_id = stored(home)["sequences"][0]["id"]
        result = invoke("sequences", "delete", sequence_id, input="n\n")
        assert result.exit_code == 1
        assert len(stored(home)["sequences"]) == 1

    def test_unknown_sequence(self, invoke):
        result = invoke("sequences", "show", "nope")
        assert result.exit_code == 1
        assert "Sequence 'nope' not found" in result.output

    def test_import(self, invoke, home, three_point_sequence):
        source = home / "import.json"
        source.write_text(json.dumps([json.loads(three_point_sequence.model_dump_json())]))

        result = invoke("sequences", "import", str(source))
        assert result.exit_code == 0, result.output
        assert "Imported 1 sequence(s)" in result.output

        # Importing again keeps both copies under different ids
        invoke("sequences", "import", str(source))
        ids = [s["id"] for s in stored(home)["sequences"]]
        assert len(ids) == 2
        assert ids[0] == "seq-three"

    def test_import_bad_file(self, invoke, home):
        source = home / "bad.json"
        source.write_text("{not json")
        result = invoke("sequences", "import", str(source))
        assert result.exit_code == 1
        assert "Failed 1 of 1" in result.output


@pytest.mark.integration
class TestPatternCommand:
    """Test pattern generation from the CLI."""

    def test_preview_only(self, invoke, home):
        result = invoke("pattern", "circle")
        assert result.exit_code == 0
        assert "Not saved" in result.output
        assert not (home / "data" / "drone-sequences.json").exists()

    def test_save_with_name(self, invoke, home):
        result = invoke("pattern", "formation", "--save", "--name", "Show Opener", "--waypoints")
        assert result.exit_code == 0, result.output
        sequence = stored(home)["sequences"][0]
        assert sequence["name"] == "Show Opener"
        assert sequence["duration"] == 12000
        assert sequence["id"].startswith("formation-preview-")

    def test_save_keeps_existing_sequences(self, invoke, home):
        invoke("draw", "0,0", "--name", "Hand Drawn")
        result = invoke("pattern", "circle", "--save")
        assert result.exit_code == 0, result.output
        sequences = stored(home)["sequences"]
        assert [s["name"] for s in sequences][0] == "Hand Drawn"
        assert len(sequences) == 2
        assert len(sequences[0]["points"]) == 1

    def test_invalid_pattern(self, invoke):
        result = invoke("pattern", "hexagon")
        assert result.exit_code == 2


@pytest.mark.integration
class TestExportCommand:
    """Test exporting from the CLI."""

    def test_export_active_to_default_dir(self, invoke, home):
        invoke("draw", "0,0", "10,10")
        sequence_id = stored(home)["sequences"][0]["id"]

        result = invoke("export")
        assert result.exit_code == 0, result.output
        exported = json.loads((home / "exports" / f"{sequence_id}.json").read_text())
        assert exported["waypoint_count"] == 2

    def test_export_csv_to_file(self, invoke, home):
        invoke("draw", "0,0", "10,10")
        target = home / "flight.csv"
        result = invoke("export", "--format", "csv", "-o", str(target))
        assert result.exit_code == 0, result.output
        assert target.read_text().splitlines()[0].startswith("index,timestamp")

    def test_export_without_sequences(self, invoke):
        result = invoke("export")
        assert result.exit_code == 1
        assert "not found" in result.output


@pytest.mark.integration
class TestPreviewCommand:
    """Test the headless preview."""

    def test_headless(self, invoke):
        invoke("draw", "200,150", "220,150")
        result = invoke("preview", "--headless", "--steps", "4")
        assert result.exit_code == 0, result.output
        rows = [line for line in result.output.splitlines() if line.strip().startswith(("0 ", "50 ", "100 ", "150 "))]
        assert len(rows) == 4

    def test_headless_without_sequence(self, invoke):
        result = invoke("preview", "--headless", "--steps", "1")
        assert result.exit_code == 0
        assert "default pose" in result.output
        assert "#FF0000" in result.output


@pytest.mark.integration
class TestConfigCommand:
    """Test the config command group."""

    def test_show(self, invoke):
        result = invoke("config")
        assert result.exit_code == 0
        assert "flight.max_speed: 10" in result.output

    def test_show_field(self, invoke):
        result = invoke("config", "show", "--field", "draw_color")
        assert result.output.strip() == "#FF0000"

    def test_show_json(self, invoke):
        result = invoke("config", "show", "--json")
        assert json.loads(result.output)["canvas"]["width"] == 400

    def test_set_and_persist(self, invoke, home):
        result = invoke("config", "set", "flight.max_speed", "12")
        assert result.exit_code == 0, result.output
        assert json.loads((home / "config.json").read_text())["flight"]["max_speed"] == 12

        result = invoke("config", "show", "-f", "flight.max_speed")
        assert result.output.strip() == "12.0"

    def test_setting_reaches_patterns(self, invoke, home):
        invoke("config", "set", "led.brightness", "50")
        invoke("pattern", "circle", "--save")
        assert stored(home)["sequences"][0]["points"][0]["brightness"] == 0.5

    def test_set_out_of_range(self, invoke):
        result = invoke("config", "set", "flight.max_speed", "99")
        assert result.exit_code == 1
        assert "Invalid configuration value" in result.output
        assert "1-25 m/s" in result.output

    def test_set_unknown_field(self, invoke):
        result = invoke("config", "set", "warp_factor", "9")
        assert result.exit_code == 1
        assert "Unknown config field" in result.output

    def test_reset(self, invoke):
        invoke("config", "set", "default_altitude", "40")
        result = invoke("config", "reset", "--yes")
        assert result.exit_code == 0
        assert "reset to defaults" in result.output
