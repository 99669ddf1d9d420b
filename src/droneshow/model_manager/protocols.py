"""Protocol definitions for the model management framework.

- ModelEvent: Events from model lifecycle (load, save, update, reset)
- ModelObserver: Observer protocol for model change notifications
- BlobStore: Key-value string store the sequence library is persisted to
"""

from enum import Enum
from typing import Protocol, runtime_checkable


class ModelEvent(Enum):
    """Events from model changes (configuration)."""

    MODEL_LOADED = "model_loaded"  # Model was loaded from disk
    MODEL_SAVED = "model_saved"  # Model was saved to disk
    MODEL_UPDATED = "model_updated"  # Model value(s) were updated
    MODEL_RESET = "model_reset"  # Model was reset to defaults


@runtime_checkable
class ModelObserver(Protocol):
    """Observer that receives model change events."""

    def on_model_event(self, event: "ModelEvent", **kwargs) -> None:
        """
        Handle model change events.

        Args:
            event: The type of model event
            **kwargs: Event-specific data:
                - For MODEL_UPDATED: 'keys' (list of changed keys), 'values' (dict of new values)
                - For MODEL_LOADED/MODEL_SAVED: 'path' (Path to model file)
                - For MODEL_RESET: 'model' (the new default model)

        Error Handling:
            Exceptions raised by observers are caught and logged by the
            ModelManagerService. They do not propagate to the caller.
        """
        ...


@runtime_checkable
class BlobStore(Protocol):
    """
    Key-value store of serialized strings.

    The sequence library is written as a single JSON document under one key,
    mirroring browser local storage. Implementations decide where the bytes
    live; callers never see paths.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key (no-op if absent)."""
        ...
