"""Sequence library: the persisted collection of flight sequences."""

import logging

from pydantic import BaseModel, Field, field_validator, model_validator

from .sequence import FlightSequence

logger = logging.getLogger(__name__)


class SequenceLibrary(BaseModel):
    """Ordered collection of sequences plus the active selection.

    The library is treated as an immutable snapshot by the services: every
    mutation builds a new library and persists it as a whole.
    """

    sequences: list[FlightSequence] = Field(default_factory=list, description="Saved sequences")
    active_id: str | None = Field(default=None, description="Currently selected sequence id")

    @field_validator("sequences")
    @classmethod
    def validate_unique_ids(cls, v: list[FlightSequence]) -> list[FlightSequence]:
        """Ensure no two sequences share an id."""
        seen: set[str] = set()
        for sequence in v:
            if sequence.id in seen:
                raise ValueError(f"Duplicate sequence id: {sequence.id}")
            seen.add(sequence.id)
        return v

    @model_validator(mode="after")
    def repoint_dangling_active(self) -> "SequenceLibrary":
        """An active id that names no sequence falls back to the first sequence."""
        if self.active_id is not None and self.index_of(self.active_id) is None:
            fallback = self.sequences[0].id if self.sequences else None
            logger.warning(f"Active sequence {self.active_id!r} not found, using {fallback!r}")
            self.active_id = fallback
        return self

    @classmethod
    def from_legacy_list(cls, sequences: list) -> "SequenceLibrary":
        """Build a library from a bare list of sequences (first one becomes active)."""
        library = cls(sequences=sequences)
        if library.sequences:
            library.active_id = library.sequences[0].id
        return library

    def index_of(self, sequence_id: str) -> int | None:
        """Position of a sequence in the library, or None."""
        for index, sequence in enumerate(self.sequences):
            if sequence.id == sequence_id:
                return index
        return None

    def get(self, sequence_id: str) -> FlightSequence | None:
        """Get a sequence by id."""
        index = self.index_of(sequence_id)
        return self.sequences[index] if index is not None else None

    @property
    def active(self) -> FlightSequence | None:
        """The active sequence, if any."""
        return self.get(self.active_id) if self.active_id is not None else None

    @property
    def ids(self) -> list[str]:
        return [s.id for s in self.sequences]

    def __len__(self) -> int:
        return len(self.sequences)
