"""Configuration-related exceptions.

- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: Config file has invalid syntax
- ConfigValidationError: Config values fail validation
"""

from typing import Any

from .base import DroneShowError

# Recovery hints for settings with a constrained range
_RANGE_HINTS = {
    "max_altitude": "Valid maximum altitude: 10-100 m",
    "max_speed": "Valid maximum speed: 1-25 m/s",
    "safety_radius": "Valid safety radius: 20-200 m",
    "brightness": "Valid LED brightness: 0-100 percent",
    "transition_speed": "Valid LED transition speed: 100-2000 ms",
    "default_altitude": "Valid default altitude: 1-100 m",
}


class ConfigurationError(DroneShowError):
    """Configuration is invalid or cannot be loaded."""

    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = (
            "Check for common JSON errors:\n"
            "  - Trailing commas (remove commas after last item)\n"
            "  - Missing quotes around strings\n"
            "  - Unclosed braces or brackets\n"
            f"  - Edit: {file_path}"
        )

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"
            recovery = f"Delete {file_path} or run 'droneshow config reset' to restore defaults"
        elif "expecting" in parse_error.lower():
            user_msg = "Configuration file has a syntax error"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        leaf = field.rsplit(".", 1)[-1]
        if leaf in _RANGE_HINTS:
            recovery += f"\n{_RANGE_HINTS[leaf]}"
        elif "color" in leaf:
            recovery += "\nUse '#RRGGBB' or 'hsl(h, s%, l%)'"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
