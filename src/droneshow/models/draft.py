"""Editor draft model (not persisted)."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import DraftState
from .sequence import DEFAULT_SEQUENCE_NAME
from .waypoint import Waypoint


class Draft(BaseModel):
    """Working copy of a sequence being edited or previewed.

    Frozen: the editor replaces the whole draft on every transition, so
    observers always see a consistent snapshot.
    """

    model_config = ConfigDict(frozen=True)

    points: tuple[Waypoint, ...] = Field(default=(), description="Draft waypoints")
    name: str = Field(default=DEFAULT_SEQUENCE_NAME, description="Draft sequence name")
    is_preview: bool = Field(default=False, description="Draft holds an uncommitted generated pattern")
    has_unsaved_changes: bool = Field(default=False, description="Draft differs from the saved sequence")
    duration: int | None = Field(
        default=None,
        description="Duration carried over from a loaded sequence; None derives it from the points",
    )

    @property
    def state(self) -> DraftState:
        if not self.points:
            return DraftState.EMPTY
        if self.has_unsaved_changes or self.is_preview:
            return DraftState.DRAFTING
        return DraftState.SAVED

    @property
    def is_empty(self) -> bool:
        return not self.points
