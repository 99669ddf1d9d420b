"""Flight sequence model and derived metrics (data structure only - persistence is in SequenceLibraryService)."""

import logging
import time
import uuid
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field, model_validator

from .waypoint import Waypoint

logger = logging.getLogger(__name__)

DEFAULT_SEQUENCE_NAME = "New Sequence"
FREEHAND_TAIL_MS = 1000


def new_sequence_id(prefix: str | None = None) -> str:
    """Create a unique sequence id.

    Ids combine the current epoch milliseconds with a short random suffix so
    two sequences created within the same millisecond never collide.
    Generator previews use a ``<pattern>-preview-<ms>`` prefix form.
    """
    stamp = int(time.time() * 1000)
    suffix = uuid.uuid4().hex[:6]
    if prefix:
        return f"{prefix}-{stamp}-{suffix}"
    return f"{stamp}-{suffix}"


def max_altitude(points: Iterable[Waypoint]) -> float:
    """Highest altitude in meters, 0 for no points."""
    return max((p.z for p in points), default=0.0)


def distinct_color_count(points: Iterable[Waypoint]) -> int:
    """Number of distinct LED colors used."""
    return len({p.color for p in points})


def freehand_duration(points: Sequence[Waypoint]) -> int:
    """Duration of a hand-drawn flight: last timestamp plus a one second tail."""
    if not points:
        return 0
    return max(p.timestamp for p in points) + FREEHAND_TAIL_MS


def timestamps_ascending(points: Sequence[Waypoint]) -> bool:
    """Check whether timestamps are non-decreasing in list order."""
    return all(a.timestamp <= b.timestamp for a, b in zip(points, points[1:], strict=False))


class FlightSequence(BaseModel):
    """An ordered, timed list of waypoints flown by one drone.

    Point order is semantic: playback interpolates between consecutive
    entries regardless of their timestamps.
    """

    id: str = Field(default_factory=new_sequence_id, description="Stable unique identifier")
    name: str = Field(default=DEFAULT_SEQUENCE_NAME, description="Display name")
    points: list[Waypoint] = Field(default_factory=list, description="Waypoints in flight order")
    duration: int = Field(default=0, ge=0, description="Total sequence length (ms)")

    @model_validator(mode="after")
    def check_duration(self) -> "FlightSequence":
        """Duration must cover every waypoint, and be zero for an empty sequence."""
        if not self.points:
            if self.duration != 0:
                raise ValueError(f"Empty sequence must have duration 0, got {self.duration}")
            return self

        last = max(p.timestamp for p in self.points)
        if self.duration <= 0:
            raise ValueError("Sequence with points must have a positive duration")
        if self.duration < last:
            raise ValueError(
                f"Duration {self.duration}ms is shorter than the last waypoint timestamp {last}ms"
            )
        return self

    @classmethod
    def from_points(
        cls,
        points: Sequence[Waypoint],
        name: str = DEFAULT_SEQUENCE_NAME,
        sequence_id: str | None = None,
        duration: int | None = None,
    ) -> "FlightSequence":
        """Build a sequence from points, deriving the freehand duration if none is given."""
        if duration is None:
            duration = freehand_duration(points)
        kwargs = {"name": name, "points": list(points), "duration": duration}
        if sequence_id is not None:
            kwargs["id"] = sequence_id
        return cls(**kwargs)

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def max_altitude(self) -> float:
        return max_altitude(self.points)

    @property
    def color_count(self) -> int:
        return distinct_color_count(self.points)

    @property
    def duration_seconds(self) -> float:
        return self.duration / 1000

    @property
    def timestamps_ascending(self) -> bool:
        return timestamps_ascending(self.points)
