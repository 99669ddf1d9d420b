"""
Centralized error handling utilities.

Errors are translated one layer at a time:

1. **Low level** (file I/O, pydantic parsing) raises standard exceptions.
2. **Services** catch them and raise DroneShowError subclasses that carry a
   user message and a recovery hint.
3. **User layer** (CLI/TUI) formats `user_message` and `recovery_hint`; the
   technical message goes to the log.

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Save with no waypoints | `raise EmptyDraftError()` |
| Unknown sequence id | `raise SequenceNotFoundError(sequence_id)` |
| Config value invalid | `raise wrap_pydantic_error(e, str(path)) from e` |
| Store unreadable/unwritable | `raise wrap_storage_error(e, key, location) from e` |

| Pattern | Code |
|---------|------|
| Show error to user, continue | `@handle_errors(operation_name="save", user_notification=self.notify, re_raise=False)` |
| Log and re-raise | `@handle_errors(operation_name="load library", re_raise=True)` |
| Try several ops, collect errors | `collector = collect_errors("import"); with collector.try_operation(...): ...` |

## Example: Importing Several Files

```python
from droneshow.exceptions import collect_errors

collector = collect_errors("import sequences")
for path in paths:
    with collector.try_operation(f"import {path.name}"):
        library_service.add(FlightSequence.model_validate_json(path.read_text()))

if collector.has_errors:
    click.echo(collector.get_summary(), err=True)
```
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from .base import DroneShowError
from .config import ConfigFileInvalidError, ConfigValidationError
from .storage import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def handle_errors(
    *,
    operation_name: str,
    user_notification: Callable[[str], None] | None = None,
    fallback_value: T | None = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR,
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "save sequence")
        user_notification: Optional callback to notify user (e.g., self.notify)
        fallback_value: Value to return if an error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="save sequence", user_notification=self.notify, re_raise=False)
        def action_save(self):
            self.editor.save()
        ```
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except DroneShowError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(log_level, f"Unexpected error during {operation_name}: {e}", exc_info=True)

                if user_notification:
                    user_notification(f"Error: {e}")

                if re_raise:
                    raise
                return fallback_value

        return wrapper

    return decorator


def wrap_pydantic_error(error: Exception, file_path: str) -> DroneShowError:
    """
    Convert Pydantic validation errors to droneshow exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Valid JSON is required before field validation can even start
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", ("unknown",)))
            return ConfigValidationError(
                field=field,
                value=first_error.get("input"),
                error_msg=first_error.get("msg", "validation failed"),
                file_path=file_path,
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get("loc", ("unknown",)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path,
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def wrap_storage_error(error: Exception, key: str, location: str | None = None) -> StorageError:
    """
    Convert low-level I/O errors to a StorageError.

    Args:
        error: The original exception (usually OSError)
        key: Storage key being accessed
        location: Where the store lives, if known
    """
    if isinstance(error, StorageError):
        return error
    if isinstance(error, PermissionError):
        reason = f"permission denied ({error})"
    elif isinstance(error, OSError) and error.errno == 28:
        reason = f"disk full ({error})"
    else:
        reason = str(error) or type(error).__name__
    return StorageError(key, reason, location)


def format_error_for_display(error: Exception) -> tuple[str, str | None]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, DroneShowError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Args:
        operation: Description of the overall operation
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def try_operation(self, sub_operation: str):
        """Context manager that records the outcome of one operation in the batch."""
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """Multi-line summary of collected errors."""
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = f"Failed {self.error_count} of {self.error_count + self.success_count} operations:\n"
        for sub_op, error in self.errors:
            if isinstance(error, DroneShowError):
                summary += f"  - {sub_op}: {error.user_message}\n"
            else:
                summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            logger.warning(f"{self.collector.operation}: {self.sub_operation} failed: {exc_val}")
            self.collector.errors.append((self.sub_operation, exc_val))
            return True
