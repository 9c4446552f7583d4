# state_service/__init__.py
"""In-process observable state container.

A StateService holds a single latest value of an application-defined state,
lets callers replace it with emit(), and notifies subscribers synchronously
in registration order. New subscribers immediately receive the current value.

Example:
    >>> from state_service import StateService
    >>>
    >>> service = StateService({"items": []})
    >>> subscription = service.subscribe(lambda state: print(state))
    {'items': []}
    >>> service.emit({"items": ["Learn Python"]})
    {'items': ['Learn Python']}
    >>> subscription.unsubscribe(service)
    True
"""
from state_service.common.errors import ConfigError, ConfigParseError, StateServiceError
from state_service.common.typed_config import ServiceConfig
from state_service.core.state import (
    StateCallback,
    StateService,
    StateServiceSubscription,
    Subscription,
    SubscriptionKey,
)

__version__ = "0.1.0"

__all__ = [
    "StateService",
    "StateServiceSubscription",
    "Subscription",
    "SubscriptionKey",
    "StateCallback",
    "ServiceConfig",
    "load_config",
    "StateServiceError",
    "ConfigError",
    "ConfigParseError",
]


def __getattr__(name):
    """
    Lazy import for load_config so that importing the package does not load yaml.
    """
    if name == "load_config":
        from state_service.common.typed_config.reader import load_config

        return load_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
