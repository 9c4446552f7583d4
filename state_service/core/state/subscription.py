# state_service/core/state/subscription.py
"""Subscription identities and handles.

A subscription is identified by an integer key drawn from a process-wide
counter. Keys are never reused, so a handle issued by one StateService can
never match an entry of another instance, and two subscriptions registered
within the same clock tick still get distinct keys.

The registration time is kept next to the key for diagnostics only; it plays
no part in equality or lookup.
"""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from state_service.core.state.service import StateService

SubscriptionKey = int


class _KeySource:
    """Thread-safe monotonically increasing key generator."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_key(self) -> SubscriptionKey:
        with self._lock:
            return next(self._counter)


_KEYS = _KeySource()


def next_subscription_key() -> SubscriptionKey:
    """Return a fresh key, unique for the lifetime of the process."""
    return _KEYS.next_key()


@dataclass(frozen=True)
class StateServiceSubscription:
    """Opaque handle returned by StateService.subscribe().

    The handle does not reference the service it came from; pass the service
    explicitly when unsubscribing. Presenting the handle to another service,
    or unsubscribing twice, is a no-op.

    Attributes:
        key: Subscription identity used for removal
        registered_at_ns: time.monotonic_ns() at registration (diagnostics)

    Example:
        >>> service = StateService(0)
        >>> subscription = service.subscribe(print)
        0
        >>> subscription.unsubscribe(service)
        True
    """

    key: SubscriptionKey
    registered_at_ns: int = field(default_factory=time.monotonic_ns, compare=False)

    def unsubscribe(self, service: StateService[Any]) -> bool:
        """Remove this subscription from ``service``.

        Returns:
            True if an entry was removed, False if it was not found
        """
        return service.remove_subscriber(self.key)


class Subscription(Protocol):
    """Anything that can detach itself from a StateService."""

    def unsubscribe(self, service: StateService[Any]) -> bool: ...
