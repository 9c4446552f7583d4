# state_service/common/typed_config/models.py
#
# Frozen dataclass definitions and type conversion helpers.

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable

# Recognized bool strings
_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}

COPY_MODES = ("deep", "shallow", "none")

_COPIERS: dict[str, Callable[[Any], Any]] = {
    "deep": copy.deepcopy,
    "shallow": copy.copy,
    "none": lambda value: value,
}


def _get_logger() -> logging.Logger:
    """Get module logger (lazy to avoid side effect at import time)."""
    return logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def safe_bool(value: Any, default: bool = False) -> bool:
    """Convert to bool. Unrecognized strings return default (typo guard).

    Args:
        value: Value to convert
        default: Returned for None or unconvertible values

    Returns:
        Converted bool value

    Note:
        Unrecognized strings ("abc", "fasle") return default so that typos in
        a config file never silently flip a flag.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        if not value:
            return default
        lower = value.lower()
        if lower in _TRUE_STRINGS:
            return True
        if lower in _FALSE_STRINGS:
            return False
        return default
    return default


def safe_str(value: Any, default: str) -> str:
    """Convert to str. None, empty string and non-str values return default.

    Note:
        None is handled explicitly to avoid str(None) == "None".
    """
    if value is None:
        return default
    if not isinstance(value, str):
        return default
    if not value:
        return default
    return value


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class ServiceConfig:
    """StateService options (``state_service`` section).

    Thread-safety: Immutable (frozen=True)

    Attributes:
        copy_mode: How stored/returned states are copied ("deep", "shallow"
            or "none"). Use "none" only for immutable state types.
        isolate_callback_errors: Log a failing callback during emit and keep
            notifying the rest, instead of propagating the exception.
        log_subscribers: Emit a DEBUG record with the subscriber keys after
            every add/remove.
    """

    copy_mode: str = "deep"
    isolate_callback_errors: bool = False
    log_subscribers: bool = True

    def __post_init__(self) -> None:
        if self.copy_mode not in COPY_MODES:
            raise ValueError(f"copy_mode must be one of {COPY_MODES}, got {self.copy_mode!r}")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ServiceConfig":
        """Build from a dict. Missing keys use defaults, bad types are converted safely.

        An unknown copy_mode falls back to "deep" with a warning.

        Args:
            d: Config dict (``state_service`` section)

        Returns:
            ServiceConfig instance
        """
        copy_mode = safe_str(d.get("copy_mode"), "deep").lower()
        if copy_mode not in COPY_MODES:
            _get_logger().warning("Unknown copy_mode %r, using 'deep'", d.get("copy_mode"))
            copy_mode = "deep"

        return cls(
            copy_mode=copy_mode,
            isolate_callback_errors=safe_bool(d.get("isolate_callback_errors"), default=False),
            log_subscribers=safe_bool(d.get("log_subscribers"), default=True),
        )

    def copier(self) -> Callable[[Any], Any]:
        """Return the copy function for copy_mode."""
        return _COPIERS[self.copy_mode]
