"""Observer protocol definitions for domain-specific events.

- Edit observers: React to draft changes
- Library observers: React to collection changes
- Playback observers: React to preview clock ticks
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from droneshow.models import Draft, SequenceLibrary

from .events import EditEvent, LibraryEvent, PlaybackEvent


@runtime_checkable
class EditObserver(Protocol):
    """
    Observer that receives editing events.

    Allows loose coupling between the editor service and renderers
    (canvas views, 3D preview, status bars).
    """

    def on_edit_event(self, event: EditEvent, draft: "Draft") -> None:
        """
        Handle editing events.

        Args:
            event: The type of edit event
            draft: Snapshot of the draft after the change
        """
        ...


@runtime_checkable
class LibraryObserver(Protocol):
    """Observer that receives sequence collection events."""

    def on_library_event(
        self,
        event: LibraryEvent,
        library: "SequenceLibrary",
        sequence_id: str | None = None,
    ) -> None:
        """
        Handle collection events.

        Args:
            event: The type of library event
            library: Snapshot of the collection after the change
            sequence_id: Id of the sequence involved (None for LOADED)
        """
        ...


@runtime_checkable
class PlaybackObserver(Protocol):
    """
    Observer that receives playback clock events.

    Called on the scheduler's context (the Textual event loop in the
    preview app), so implementations should return quickly.
    """

    def on_playback_event(self, event: PlaybackEvent, elapsed_ms: int) -> None:
        """
        Handle playback events.

        Args:
            event: The type of playback event
            elapsed_ms: Clock position after the change
        """
        ...
