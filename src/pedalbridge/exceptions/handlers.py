"""Translating third-party errors into PedalBridgeError, and showing them.

Only the CLI shows errors to the user. Below it, the bridge loop logs a
PedalBridgeError's technical message and keeps going, so nothing raised by
mido, python-osc or a malformed OSC message stops the bridge.
"""

from typing import Optional

from pydantic import ValidationError

from .base import PedalBridgeError
from .config import ConfigFileInvalidError, ConfigValidationError


def _field_name(detail: dict) -> str:
    return ".".join(str(part) for part in detail.get("loc", ())) or "unknown"


def wrap_pydantic_error(error: Exception, file_path: Optional[str] = None) -> PedalBridgeError:
    """
    Turn a pydantic ValidationError into a configuration error.

    Broken JSON becomes ConfigFileInvalidError; rejected values become a
    ConfigValidationError naming the field (or listing all of them when
    several fail).
    """
    if not isinstance(error, ValidationError):
        return ConfigValidationError("unknown", None, str(error), file_path)

    details = error.errors()
    json_problems = [d for d in details if d.get("type") == "json_invalid"]
    if json_problems:
        reason = json_problems[0].get("ctx", {}).get("error") or json_problems[0].get("msg", "")
        return ConfigFileInvalidError(file_path or "<unknown>", str(reason))

    if len(details) == 1:
        detail = details[0]
        return ConfigValidationError(
            field=_field_name(detail),
            value=detail.get("input"),
            error_msg=detail.get("msg", "validation failed"),
            file_path=file_path,
        )

    summary = "\n".join(f"  - {_field_name(d)}: {d.get('msg', 'validation failed')}" for d in details)
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(details)} validation errors:\n{summary}",
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Message and hint to show for an error.

    Returns:
        (message, recovery hint or None); foreign exceptions show their type
    """
    if isinstance(error, PedalBridgeError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
