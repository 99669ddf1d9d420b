"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from droneshow.colors import COLORS
from droneshow.model_manager import MemoryBlobStore
from droneshow.models import AppConfig, FlightSequence, Waypoint
from droneshow.services import EditorService, SequenceLibraryService


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """Config whose directories live in the temp dir."""
    return AppConfig(data_dir=temp_dir / "data", export_dir=temp_dir / "exports")


@pytest.fixture
def store():
    """Empty in-memory blob store."""
    return MemoryBlobStore()


@pytest.fixture
def library(store):
    """Loaded library service over the in-memory store."""
    service = SequenceLibraryService(store)
    service.load()
    return service


@pytest.fixture
def editor(config, library):
    """Editor service sharing the library fixture."""
    return EditorService(config, library)


@pytest.fixture
def make_waypoint():
    """Factory for waypoints with sensible defaults."""

    def _make(x=200.0, y=150.0, z=10.0, color=COLORS.RED, timestamp=0, **kwargs):
        return Waypoint(x=x, y=y, z=z, color=color, timestamp=timestamp, **kwargs)

    return _make


@pytest.fixture
def three_point_sequence(make_waypoint):
    """
    Three waypoints one world unit apart along X and up.

    World positions (default canvas): (0, 0, 0), (1, 1, 0), (2, 2, 0).
    """
    return FlightSequence(
        id="seq-three",
        name="Three Points",
        points=[
            make_waypoint(x=200, y=150, z=0, color=COLORS.RED, timestamp=0),
            make_waypoint(x=220, y=150, z=10, color=COLORS.GREEN, timestamp=1000),
            make_waypoint(x=240, y=150, z=20, color=COLORS.BLUE, timestamp=2000),
        ],
        duration=3000,
    )
