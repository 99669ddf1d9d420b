"""Sequence editing exceptions.

- SequenceError: Base class for editing and library errors
- EmptyDraftError: Save requested with no waypoints
- SequenceNotFoundError: No sequence with the given id
- DuplicateSequenceError: A sequence with the given id already exists
"""

from .base import DroneShowError


class SequenceError(DroneShowError):
    """A sequence operation was rejected."""

    pass


class EmptyDraftError(SequenceError):
    """Save was requested while the draft holds no waypoints."""

    def __init__(self):
        super().__init__(
            user_message="No points to save",
            technical_message="Refused to save an empty draft",
            recoverable=True,
            recovery_hint="Add some waypoints before saving",
        )


class SequenceNotFoundError(SequenceError):
    """Requested sequence does not exist in the library."""

    def __init__(self, sequence_id: str):
        """
        Initialize sequence-not-found error.

        Args:
            sequence_id: The id that wasn't found
        """
        super().__init__(
            user_message=f"Sequence '{sequence_id}' not found",
            recoverable=True,
            recovery_hint="Run 'droneshow sequences list' to see saved sequences",
        )
        self.sequence_id = sequence_id


class DuplicateSequenceError(SequenceError):
    """A sequence with this id is already in the library."""

    def __init__(self, sequence_id: str):
        super().__init__(
            user_message=f"Sequence '{sequence_id}' already exists",
            recoverable=True,
            recovery_hint="Update the existing sequence instead, or delete it first",
        )
        self.sequence_id = sequence_id
