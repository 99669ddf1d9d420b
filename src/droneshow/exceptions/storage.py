"""Storage and export exceptions.

- StorageError: The sequence store could not be read or written
- ExportError: A flight file could not be written
"""

from .base import DroneShowError


class StorageError(DroneShowError):
    """Reading or writing the sequence store failed."""

    def __init__(self, key: str, reason: str, location: str | None = None):
        """
        Initialize storage error.

        Args:
            key: Storage key being accessed
            reason: Underlying failure
            location: Where the store lives (directory or file), if known
        """
        recovery = "Check file permissions and disk space."
        if location:
            recovery += f"\nStore location: {location}"

        super().__init__(
            user_message=f"Could not access saved sequences ({key})",
            technical_message=f"Storage failure for key {key!r}: {reason}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.key = key
        self.reason = reason
        self.location = location


class ExportError(DroneShowError):
    """Writing an export file failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            user_message=f"Failed to export flight to {path}",
            technical_message=f"Export to {path} failed: {reason}",
            recoverable=True,
            recovery_hint="Check that the output directory exists and is writable",
        )
        self.path = path
        self.reason = reason
