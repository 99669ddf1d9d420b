"""Decorators for TUI components."""

from functools import wraps

from droneshow.exceptions import handle_errors as _handle_errors


def handle_action_errors(operation_name: str):
    """
    Wrap a TUI action with the centralized error handler.

    Errors are logged and shown with self.notify; they are not re-raised so
    the app stays responsive.

    Example:
        @handle_action_errors("save sequence")
        def action_save(self):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            handler = _handle_errors(
                operation_name=operation_name,
                user_notification=lambda msg: self.notify(msg, severity="error", timeout=5),
                re_raise=False,
                fallback_value=None,
            )
            return handler(func)(self, *args, **kwargs)

        return wrapper

    return decorator
