"""Errors raised while loading, editing or validating the bridge config."""

from typing import Any, Optional

from .base import PedalBridgeError

# Extra hint lines keyed on a word in the field name
_FIELD_HINTS = (
    ("midi_output", "Run 'pedalbridge midi list' to see valid MIDI devices"),
    ("channel", "Valid MIDI channels: 1-16, or 0 for any"),
    ("port", "Valid UDP ports: 1-65535"),
)


class ConfigurationError(PedalBridgeError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """The config file exists but can't be read as JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: Path of the offending file
            parse_error: What the reader or JSON parser reported
        """
        reason = parse_error.lower()
        if "empty" in reason:
            user_msg = "Configuration file is empty"
            hint = f"Delete {file_path} (or run 'pedalbridge config reset') to start from defaults"
        elif "trailing comma" in reason:
            user_msg = "Configuration file has a trailing comma"
            hint = f"Remove the comma after the last entry in {file_path}"
        else:
            user_msg = "Configuration file is not valid JSON"
            hint = (
                f"Fix the JSON in {file_path}, "
                "or run 'pedalbridge config reset' to overwrite it with defaults"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Could not parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config value is out of range or of the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Args:
            field: Dotted name of the rejected field
            value: The rejected value
            error_msg: Why it was rejected
            file_path: Config file the value came from, if any
        """
        hint_lines = [f"Set '{field}' with a directive or edit it in the config file"]
        if file_path:
            hint_lines.append(f"Config file: {file_path}")
        for keyword, line in _FIELD_HINTS:
            if keyword in field.lower():
                hint_lines.append(line)
                break

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"{field}={value!r} rejected: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hint_lines),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
