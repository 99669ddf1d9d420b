"""BlobStore implementations: one JSON file per key, or an in-memory dict."""

import logging
import re
from pathlib import Path

from droneshow.exceptions import wrap_storage_error
from droneshow.model_manager.persistence import PydanticPersistence

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileBlobStore:
    """
    Stores each key as '<directory>/<key>.json'.

    Writes go through PydanticPersistence.write_text_atomic, so a crash
    mid-write never leaves a truncated file and the previous value stays
    available as '<key>.json.bak'.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File that holds a key."""
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise wrap_storage_error(e, key, str(path)) from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            PydanticPersistence.write_text_atomic(path, value)
        except OSError as e:
            raise wrap_storage_error(e, key, str(path)) from e
        logger.debug(f"Stored {len(value)} bytes under {key!r} at {path}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise wrap_storage_error(e, key, str(path)) from e

    def __repr__(self) -> str:
        return f"FileBlobStore({str(self.directory)!r})"


class MemoryBlobStore:
    """Dictionary-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def __repr__(self) -> str:
        return f"MemoryBlobStore(keys={sorted(self.data)})"
