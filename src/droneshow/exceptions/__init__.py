"""
Custom exception hierarchy for droneshow.

## Exception Hierarchy

```
DroneShowError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── SequenceError
│   ├── EmptyDraftError
│   ├── SequenceNotFoundError
│   └── DuplicateSequenceError
├── StorageError
└── ExportError
```

Every exception carries `user_message`, `technical_message`, `recoverable`
and `recovery_hint`.

## Usage

```python
from droneshow.exceptions import EmptyDraftError

raise EmptyDraftError()

# User sees: "No points to save"
# Suggestion: "Add some waypoints before saving"
```

See `droneshow.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import DroneShowError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_storage_error,
)
from .sequence import (
    DuplicateSequenceError,
    EmptyDraftError,
    SequenceError,
    SequenceNotFoundError,
)
from .storage import ExportError, StorageError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Base
    "DroneShowError",
    # Sequence
    "DuplicateSequenceError",
    "EmptyDraftError",
    "ErrorCollector",
    # Storage
    "ExportError",
    "SequenceError",
    "SequenceNotFoundError",
    "StorageError",
    # Handlers
    "collect_errors",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_storage_error",
]
