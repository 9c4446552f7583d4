"""
state-service exception hierarchy.

Provides a base exception class with user-facing messages and debug context,
plus specialized subclasses for different error domains.

Note that callback failures are never wrapped in these types: an exception
raised by a subscriber propagates to the caller of subscribe()/emit() as-is.
"""

from typing import Any, Dict, Optional


class StateServiceError(Exception):
    """Base exception for state-service errors.

    Attributes:
        user_message: Safe, user-facing error message.
        context: Dictionary of debug information.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class ConfigError(StateServiceError):
    """Configuration load/validation errors."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a YAML config file cannot be parsed or has invalid structure.

    load_config() puts the file path in the message and keeps user_message
    path-free, for display to end users.

    Attributes:
        line: Line number (1-indexed) if available from the YAML parser.
              None for structural errors (e.g., top level is not a mapping).
        column: Column number (1-indexed) if available from the YAML parser.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.line = line
        self.column = column
        super().__init__(message, user_message=user_message, context=context)
        self.user_message = self._with_location(self.user_message)

    def _with_location(self, text: str) -> str:
        if self.line is None:
            return text
        loc = f"line {self.line}"
        if self.column is not None:
            loc += f", column {self.column}"
        return f"{text} ({loc})"

    def __str__(self) -> str:
        return self._with_location(super().__str__())
