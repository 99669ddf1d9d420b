"""Shared utilities for Pydantic model persistence.

Stateless helpers for loading and saving Pydantic models to and from JSON
files, used by AppConfig, ModelManagerService and the file blob store.

Error Handling:
    Low-level Pydantic and I/O errors are converted into DroneShowError
    exceptions with recovery hints (see droneshow.exceptions.handlers).

Safety Features:
    - Automatic .bak backups before overwriting files
    - Atomic writes using temp file + rename
    - Never auto-saves over corrupted files
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from droneshow.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Utility class providing shared Pydantic persistence operations.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(Path("config.json"), AppConfig)
        PydanticPersistence.save_json(config, Path("config.json"))
        ```
    """

    @staticmethod
    def write_text_atomic(path: Path, content: str, backup: bool = True) -> None:
        """
        Write text to a file with a .bak backup and an atomic rename.

        Args:
            path: Destination file
            content: Text to write
            backup: Copy the existing file to '<name>.bak' before replacing it

        Raises:
            OSError: If the file cannot be written
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            backup_path = path.with_suffix(path.suffix + ".bak")
            shutil.copy2(path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(content, encoding="utf-8")
            temp_path.replace(path)
        finally:
            # Clean up temp file if the rename failed
            if temp_path.exists():
                temp_path.unlink()

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a JSON file.

        Args:
            path: Path to the JSON file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid or the file is empty
            ConfigValidationError: If the JSON content fails Pydantic validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text(encoding="utf-8")

            if not json_content.strip():
                raise ConfigFileInvalidError(str(path), "File is empty")

            model = model_type.model_validate_json(json_content)

            logger.debug(f"Loaded {model_type.__name__} from {path}")
            return model

        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        except ConfigurationError:
            raise

        except Exception as e:
            logger.error(f"Unexpected error loading {model_type.__name__} from {path}: {e}")
            raise ConfigFileInvalidError(str(path), f"Unexpected error: {e}") from e

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Save a Pydantic model to a JSON file with automatic backup and atomic write.

        Args:
            data: The Pydantic model instance to save
            path: Path where the file should be saved
            indent: JSON indentation level (default: 2 spaces)
            backup: Create .bak backup before overwriting existing file (default: True)

        Raises:
            OSError: If the file cannot be written (permission denied, disk full, etc.)
            ConfigurationError: If serialization fails
        """
        try:
            json_content = data.model_dump_json(indent=indent)
            PydanticPersistence.write_text_atomic(path, json_content, backup=backup)
            logger.debug(f"Saved {type(data).__name__} to {path}")

        except OSError as e:
            logger.error(f"OS error saving {type(data).__name__} to {path}: {e}")
            raise

        except Exception as e:
            logger.error(f"Unexpected error saving {type(data).__name__} to {path}: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Failed to save {type(data).__name__}: {e}",
                recovery_hint="Check file permissions and disk space. Backup file (.bak) may be available.",
            ) from e

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[T], default_factory: Callable[[], T] | None = None
    ) -> T:
        """
        Load a model from JSON, or return a default if the file doesn't exist.

        Other errors (ConfigurationError subclasses) are propagated. The default
        is not written to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"File not found: {path}, creating default {model_type.__name__}")
            return default_factory() if default_factory else model_type()

    @staticmethod
    def ensure_valid_or_create(
        path: Path,
        model_type: type[T],
        default_factory: Callable[[], T] | None = None,
        auto_save: bool = True,
    ) -> T:
        """
        Ensure a valid JSON file exists, creating a default if needed.

        Only a missing file is replaced by a saved default. A corrupted file
        yields an in-memory default and is left untouched for manual recovery.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"File not found: {path}, creating default {model_type.__name__}")
            instance = default_factory() if default_factory else model_type()

            if auto_save:
                PydanticPersistence.save_json(instance, path, backup=False)
                logger.info(f"Saved default {model_type.__name__} to {path}")

            return instance

        except ConfigurationError as e:
            logger.error(f"Failed to load {path}: {e.user_message}")
            logger.warning(
                f"Using default {model_type.__name__} configuration "
                f"(existing file NOT overwritten - manual recovery may be possible)"
            )
            return default_factory() if default_factory else model_type()
