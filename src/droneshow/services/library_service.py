"""Sequence library service: the persisted collection of flight sequences."""

import json
import logging

from pydantic import ValidationError

from droneshow.exceptions import DuplicateSequenceError, SequenceNotFoundError
from droneshow.model_manager import BlobStore, ObserverManager
from droneshow.models import FlightSequence, SequenceLibrary
from droneshow.protocols import LibraryEvent, LibraryObserver

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "drone-sequences"


class SequenceLibraryService:
    """
    Owns the sequence collection and its persistence.

    Every mutation builds a new SequenceLibrary snapshot, writes the whole
    collection to the blob store, and only then replaces the in-memory
    snapshot. A failed write (StorageError) therefore leaves the service
    unchanged.

    Stored format is the JSON of SequenceLibrary. A bare JSON list of
    sequences, as written by the original web designer, is also accepted;
    the first sequence becomes active.
    """

    def __init__(self, store: BlobStore, storage_key: str = DEFAULT_STORAGE_KEY):
        self._store = store
        self._key = storage_key
        self._library = SequenceLibrary()
        self._observers = ObserverManager[LibraryObserver](observer_type_name="library")
        logger.info(f"SequenceLibraryService initialized ({store!r}, key={storage_key!r})")

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: LibraryObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: LibraryObserver) -> None:
        self._observers.unregister(observer)

    def _notify_observers(self, event: LibraryEvent, sequence_id: str | None = None) -> None:
        self._observers.notify("on_library_event", event, self._library, sequence_id)

    # =================================================================
    # Access
    # =================================================================

    @property
    def library(self) -> SequenceLibrary:
        """Current collection snapshot (treat as read-only)."""
        return self._library

    @property
    def sequences(self) -> list[FlightSequence]:
        return list(self._library.sequences)

    @property
    def active_id(self) -> str | None:
        return self._library.active_id

    @property
    def active(self) -> FlightSequence | None:
        return self._library.active

    def get(self, sequence_id: str) -> FlightSequence | None:
        return self._library.get(sequence_id)

    def require(self, sequence_id: str) -> FlightSequence:
        """
        Get a sequence or fail.

        Raises:
            SequenceNotFoundError: If no sequence has this id
        """
        sequence = self._library.get(sequence_id)
        if sequence is None:
            raise SequenceNotFoundError(sequence_id)
        return sequence

    def __len__(self) -> int:
        return len(self._library)

    # =================================================================
    # Persistence
    # =================================================================

    def _parse(self, raw: str) -> SequenceLibrary:
        data = json.loads(raw)
        if isinstance(data, list):
            logger.info("Loaded legacy sequence list; first sequence becomes active")
            return SequenceLibrary.from_legacy_list(data)
        return SequenceLibrary.model_validate(data)

    def load(self) -> SequenceLibrary:
        """
        Read the collection from the store.

        Missing data yields an empty collection. Malformed data is logged
        and also yields an empty collection; the stored value is left in
        place until the next mutation overwrites it.

        Raises:
            StorageError: If the store itself cannot be read
        """
        raw = self._store.get(self._key)
        if raw is None or not raw.strip():
            library = SequenceLibrary()
            logger.info(f"No saved sequences under {self._key!r}")
        else:
            try:
                library = self._parse(raw)
                logger.info(f"Loaded {len(library)} sequence(s) from {self._key!r}")
            except (ValueError, ValidationError) as e:
                logger.error(f"Error loading saved sequences from {self._key!r}: {e}")
                library = SequenceLibrary()

        self._library = library
        self._notify_observers(LibraryEvent.LOADED)
        return library

    def _commit(self, library: SequenceLibrary) -> None:
        """Persist a new snapshot, then adopt it."""
        self._store.set(self._key, library.model_dump_json(indent=2))
        self._library = library

    # =================================================================
    # Mutation
    # =================================================================

    def add(self, sequence: FlightSequence, make_active: bool = True) -> None:
        """
        Append a sequence.

        Raises:
            DuplicateSequenceError: If the id is already used
        """
        if self._library.get(sequence.id) is not None:
            raise DuplicateSequenceError(sequence.id)

        previous_active = self._library.active_id
        active_id = sequence.id if make_active else previous_active
        self._commit(
            SequenceLibrary(sequences=[*self._library.sequences, sequence], active_id=active_id)
        )
        logger.info(f"Added sequence '{sequence.name}' ({sequence.id}, {sequence.point_count} waypoints)")

        self._notify_observers(LibraryEvent.SEQUENCE_ADDED, sequence.id)
        if active_id != previous_active:
            self._notify_observers(LibraryEvent.ACTIVE_CHANGED, active_id)

    def update(self, sequence: FlightSequence) -> None:
        """
        Replace a sequence in place, keeping its position and id.

        Raises:
            SequenceNotFoundError: If no sequence has this id
        """
        index = self._library.index_of(sequence.id)
        if index is None:
            raise SequenceNotFoundError(sequence.id)

        sequences = list(self._library.sequences)
        sequences[index] = sequence
        self._commit(SequenceLibrary(sequences=sequences, active_id=self._library.active_id))
        logger.info(f"Updated sequence '{sequence.name}' ({sequence.id})")

        self._notify_observers(LibraryEvent.SEQUENCE_UPDATED, sequence.id)

    def rename(self, sequence_id: str, name: str) -> FlightSequence:
        """Rename a saved sequence."""
        renamed = self.require(sequence_id).model_copy(update={"name": name})
        self.update(renamed)
        return renamed

    def delete(self, sequence_id: str) -> str | None:
        """
        Remove a sequence.

        Deleting the active sequence re-points the active selection to the
        first remaining sequence, or None if the collection is now empty.

        Returns:
            The active id after deletion

        Raises:
            SequenceNotFoundError: If no sequence has this id
        """
        sequence = self.require(sequence_id)
        remaining = [s for s in self._library.sequences if s.id != sequence_id]

        previous_active = self._library.active_id
        active_id = previous_active
        if previous_active == sequence_id:
            active_id = remaining[0].id if remaining else None

        self._commit(SequenceLibrary(sequences=remaining, active_id=active_id))
        logger.info(f"Deleted sequence '{sequence.name}' ({sequence_id})")

        self._notify_observers(LibraryEvent.SEQUENCE_DELETED, sequence_id)
        if active_id != previous_active:
            self._notify_observers(LibraryEvent.ACTIVE_CHANGED, active_id)
        return active_id

    def set_active(self, sequence_id: str | None) -> None:
        """
        Change the active selection.

        The pointer is persisted with the collection so the next session
        (or CLI command) opens the same sequence.

        Raises:
            SequenceNotFoundError: If the id names no sequence
        """
        if sequence_id is not None:
            self.require(sequence_id)
        if sequence_id == self._library.active_id:
            return

        self._commit(SequenceLibrary(sequences=self._library.sequences, active_id=sequence_id))
        logger.debug(f"Active sequence is now {sequence_id!r}")

        self._notify_observers(LibraryEvent.ACTIVE_CHANGED, sequence_id)
