"""Domain events for observer pattern.

- Edit events: Draft changes in the editor
- Library events: Persistent collection mutations
- Playback events: Preview clock state changes
"""

from enum import Enum


class EditEvent(Enum):
    """
    Events that occur while editing the draft.

    Draft state is ephemeral; only SEQUENCE_CREATED and SEQUENCE_UPDATED
    coincide with a write to the library.
    """

    POINT_ADDED = "point_added"  # Waypoint appended from a canvas click
    PREVIEW_LOADED = "preview_loaded"  # Generated pattern loaded into the draft
    PREVIEW_CLEARED = "preview_cleared"  # Preview discarded by a canvas click
    DRAFT_CLEARED = "draft_cleared"  # Draft emptied (clear / new sequence)
    DRAFT_RENAMED = "draft_renamed"  # Draft name changed
    SEQUENCE_SELECTED = "sequence_selected"  # Saved sequence copied into the draft
    SEQUENCE_CREATED = "sequence_created"  # Draft saved as a new sequence
    SEQUENCE_UPDATED = "sequence_updated"  # Draft saved over an existing sequence


class LibraryEvent(Enum):
    """Events from the persisted sequence collection."""

    LOADED = "loaded"  # Collection read from storage
    SEQUENCE_ADDED = "sequence_added"  # Sequence appended
    SEQUENCE_UPDATED = "sequence_updated"  # Sequence replaced in place
    SEQUENCE_DELETED = "sequence_deleted"  # Sequence removed
    ACTIVE_CHANGED = "active_changed"  # Active selection changed


class PlaybackEvent(Enum):
    """Events from the preview playback clock."""

    STARTED = "started"  # Clock registered with its scheduler
    PAUSED = "paused"  # Clock timer cancelled
    TICK = "tick"  # Elapsed time advanced
    RESET = "reset"  # Elapsed time returned to zero
    SEQUENCE_LOADED = "sequence_loaded"  # A different sequence is being played
