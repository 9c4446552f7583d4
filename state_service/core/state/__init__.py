# state_service/core/state/__init__.py
"""Observable state container.

Public API:
    - StateService: Holds the latest state and notifies subscribers
    - StateServiceSubscription: Handle returned by subscribe()
    - StateCallback: Callback type, Callable[[State], None]
"""
from state_service.core.state.service import LoggerType, StateCallback, StateService
from state_service.core.state.subscription import (
    StateServiceSubscription,
    Subscription,
    SubscriptionKey,
    next_subscription_key,
)

__all__ = [
    "StateService",
    "StateCallback",
    "LoggerType",
    "StateServiceSubscription",
    "Subscription",
    "SubscriptionKey",
    "next_subscription_key",
]
