"""Protocol definitions for domain-specific observer patterns.

- Events: editing, library and playback events
- Observers: Protocols for components that react to these events

For generic model management protocols (ModelEvent, ModelObserver, BlobStore),
see droneshow.model_manager.protocols.
"""

from .events import EditEvent, LibraryEvent, PlaybackEvent
from .observers import EditObserver, LibraryObserver, PlaybackObserver

__all__ = [
    # Events
    "EditEvent",
    # Observers
    "EditObserver",
    "LibraryEvent",
    "LibraryObserver",
    "PlaybackEvent",
    "PlaybackObserver",
]
