"""Model manager service for managing Pydantic models (application config)."""

import logging
from pathlib import Path
from threading import Lock
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from droneshow.model_manager.observer import ObserverManager
from droneshow.model_manager.persistence import PydanticPersistence
from droneshow.model_manager.protocols import ModelEvent, ModelObserver

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


def _has_path(model: BaseModel, key: str) -> bool:
    """Check that a dotted key names a field, descending through nested models."""
    target: Any = model
    for part in key.split("."):
        if not isinstance(target, BaseModel) or part not in type(target).model_fields:
            return False
        target = getattr(target, part)
    return True


def _assign_path(data: dict[str, Any], key: str, value: Any) -> None:
    """Assign a dotted key inside a dumped model dict."""
    *parents, leaf = key.split(".")
    for part in parents:
        data = data[part]
    data[leaf] = value


class ModelManagerService[ModelType: BaseModel]:
    """
    Generic service for managing Pydantic-based models.

    Provides get/set operations, persistence and event notifications for a
    single model instance. Keys may be dotted to reach nested models
    (``"flight.max_speed"``).

    Threading:
        The lock protects model state during reads/writes and is released
        before observers are notified.

    Usage Example:
        ```python
        config = AppConfig.load_or_default()
        service = ModelManagerService[AppConfig](AppConfig, config, default_path=path)

        service.set("led.brightness", 60)
        service.save()
        ```
    """

    def __init__(
        self,
        model_type: type[ModelType],
        initial_model: ModelType,
        default_path: Path | None = None,
    ):
        """
        Initialize the model manager service.

        Args:
            model_type: The Pydantic model class (e.g., AppConfig)
            initial_model: The initial model instance
            default_path: Default path for save/load operations (optional)
        """
        self._model_type = model_type
        self._model = initial_model
        self._default_path = default_path
        self._lock = Lock()

        self._observers = ObserverManager[ModelObserver](lock=self._lock, observer_type_name="model")

        logger.info(f"ModelManagerService initialized with {model_type.__name__}")

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: ModelObserver) -> None:
        """Register an observer to receive model change events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: ModelObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def _notify_observers(self, event: ModelEvent, **kwargs: Any) -> None:
        self._observers.notify("on_model_event", event, **kwargs)

    # =================================================================
    # Model Access
    # =================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a model field value by (optionally dotted) key.

        Example:
            ```python
            tick = service.get("playback_tick_ms")
            speed = service.get("flight.max_speed")
            ```
        """
        with self._lock:
            target: Any = self._model
            for part in key.split("."):
                if not hasattr(target, part):
                    return default
                target = getattr(target, part)
            return target

    def has_field(self, key: str) -> bool:
        """Check whether a (dotted) key names a model field."""
        with self._lock:
            return _has_path(self._model, key)

    @property
    def default_path(self) -> Path | None:
        return self._default_path

    def get_all(self) -> dict[str, Any]:
        """Get all model field values as a JSON-compatible dictionary."""
        with self._lock:
            return self._model.model_dump(mode="json")

    def get_model(self) -> ModelType:
        """Get a deep copy of the entire model object."""
        with self._lock:
            return self._model.model_copy(deep=True)

    # =================================================================
    # Model Mutation
    # =================================================================

    def set(self, key: str, value: Any) -> None:
        """
        Set a model field value by (optionally dotted) key.

        Raises:
            AttributeError: If key doesn't exist in model
            ValidationError: If value fails Pydantic validation

        Events:
            Emits MODEL_UPDATED with keys=[key], values={key: value}
        """
        self.update({key: value})

    def update(self, values: dict[str, Any]) -> None:
        """
        Update multiple model field values at once (all or nothing).

        Raises:
            AttributeError: If any key doesn't exist in model
            ValidationError: If any value fails Pydantic validation

        Events:
            Emits a single MODEL_UPDATED event with all changed keys/values
        """
        with self._lock:
            for key in values:
                if not _has_path(self._model, key):
                    raise AttributeError(f"'{self._model_type.__name__}' has no field '{key}'")

            # Validate by reconstructing the model (model_copy doesn't validate)
            try:
                current_dict = self._model.model_dump()
                for key, value in values.items():
                    _assign_path(current_dict, key, value)
                self._model = self._model_type.model_validate(current_dict)
            except ValidationError as e:
                logger.error(f"Validation error updating {list(values)}: {e}")
                raise

        self._notify_observers(ModelEvent.MODEL_UPDATED, keys=list(values.keys()), values=values)

        logger.debug(f"Model updated: {values}")

    def reset(self) -> None:
        """
        Reset model to default values.

        Events:
            Emits MODEL_RESET with the new default model
        """
        with self._lock:
            self._model = self._model_type()
            model_copy = self._model.model_copy(deep=True)

        self._notify_observers(ModelEvent.MODEL_RESET, model=model_copy)

        logger.info(f"Model reset to defaults: {self._model_type.__name__}")

    # =================================================================
    # Persistence
    # =================================================================

    def _resolve_path(self, path: Path | None) -> Path:
        file_path = path or self._default_path
        if file_path is None:
            raise ValueError("No path specified and no default_path set")
        return Path(file_path)

    def load(self, path: Path | None = None) -> None:
        """
        Load model from file.

        Raises:
            ValueError: If no path specified and no default_path set
            FileNotFoundError: If model file doesn't exist
            ConfigurationError: If the file is invalid

        Events:
            Emits MODEL_LOADED with the file path
        """
        file_path = self._resolve_path(path)

        new_model = PydanticPersistence.load_json(file_path, self._model_type)

        with self._lock:
            self._model = new_model

        self._notify_observers(ModelEvent.MODEL_LOADED, path=file_path)

        logger.info(f"Model loaded from {file_path}")

    def save(self, path: Path | None = None) -> None:
        """
        Save model to file.

        Raises:
            ValueError: If no path specified and no default_path set

        Events:
            Emits MODEL_SAVED with the file path
        """
        file_path = self._resolve_path(path)

        with self._lock:
            model_copy = self._model.model_copy(deep=True)

        PydanticPersistence.save_json(model_copy, file_path)

        self._notify_observers(ModelEvent.MODEL_SAVED, path=file_path)

        logger.info(f"Model saved to {file_path}")
