# state_service/core/state/service.py
"""Observable state container (synchronous, thread-safe).

StateService holds the latest value of an application-defined state and
notifies subscribers synchronously, in registration order, on every emit.

Replay-one Semantics:
- subscribe() calls the new callback with the current state before it
  returns, then registers it
- If that first call raises, the exception propagates and nothing is
  registered
- The lock is held during that call, so emit() from another thread waits
  until the subscriber is registered and then delivers to it

Snapshot Semantics:
- emit() takes a snapshot of the subscriber list before notification
- Subscribers added during emit() are not called for the current state
- Subscribers removed during emit() still receive the current state
- Next emit() will not call removed subscribers

Error Policy:
- By default a callback exception propagates out of emit() unchanged and
  later subscribers are not notified for that state
- With ServiceConfig(isolate_callback_errors=True) the failure is logged and
  delivery continues

Logger Injection:
- Logger is optional: Callable[[str], None] or None
- It is called once per isolated callback error with message + traceback
- If logger is None or fails, the module logger is used
"""

from __future__ import annotations

import logging
import threading
import traceback
from collections.abc import Callable
from typing import Generic, TypeVar

from state_service.common.typed_config.models import ServiceConfig
from state_service.core.state.subscription import (
    StateServiceSubscription,
    SubscriptionKey,
    next_subscription_key,
)

State = TypeVar("State")

StateCallback = Callable[[State], None]

# Logger type: level is bound by caller via closure
LoggerType = Callable[[str], None]


def _get_logger() -> logging.Logger:
    """Get module logger (lazy to avoid side effect at import time)."""
    return logging.getLogger(__name__)


class StateService(Generic[State]):
    """Holds the latest state and fans it out to subscribers.

    Example:
        >>> service = StateService({"count": 0})
        >>> subscription = service.subscribe(lambda state: print(state))
        {'count': 0}
        >>> service.emit({"count": 1})
        {'count': 1}
        >>> subscription.unsubscribe(service)
        True
        >>> service.emit({"count": 2})
        >>> service.get_latest_state()
        {'count': 2}
    """

    def __init__(
        self,
        initial_state: State,
        *,
        config: ServiceConfig | None = None,
        logger: LoggerType | None = None,
    ) -> None:
        """Initialize the service with an initial state and no subscribers.

        Args:
            initial_state: The first latest state (copied per config.copy_mode)
            config: Service options. Defaults to ServiceConfig().
            logger: Optional logger function for isolated callback errors.
                   Signature: Callable[[str], None]. If None, errors go to the
                   module logger at ERROR level.
        """
        self._config = config or ServiceConfig()
        self._copy = self._config.copier()
        self._lock = threading.RLock()
        self._latest_state: State = self._copy(initial_state)
        self._subscribers: list[tuple[SubscriptionKey, StateCallback[State]]] = []
        self._logger = logger

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def subscribe(self, callback: StateCallback[State]) -> StateServiceSubscription:
        """Register a callback and immediately deliver the current state to it.

        Subscribing the same callable twice creates two independent entries.

        Args:
            callback: Function called with every new state

        Returns:
            Handle to pass to unsubscribe()
        """
        return self.add_subscriber(callback)

    def add_subscriber(self, callback: StateCallback[State]) -> StateServiceSubscription:
        # Replay and append under one lock: emits from other threads wait for it
        with self._lock:
            callback(self._copy(self._latest_state))

            key = next_subscription_key()
            self._subscribers.append((key, callback))
            if self._config.log_subscribers:
                _get_logger().debug(
                    "add_subscriber: key=%d callback=%s subscribers=%s",
                    key,
                    _callback_name(callback),
                    self._keys(),
                )
        return StateServiceSubscription(key)

    def unsubscribe(self, subscription: StateServiceSubscription) -> bool:
        """Remove a subscription. Unknown or already removed handles are a no-op.

        Returns:
            True if an entry was removed, False otherwise
        """
        return self.remove_subscriber(subscription.key)

    def remove_subscriber(self, key: SubscriptionKey) -> bool:
        with self._lock:
            for index, (entry_key, callback) in enumerate(self._subscribers):
                if entry_key == key:
                    del self._subscribers[index]
                    break
            else:
                return False

            if self._config.log_subscribers:
                _get_logger().debug(
                    "remove_subscriber: key=%d index=%d callback=%s subscribers=%s",
                    key,
                    index,
                    _callback_name(callback),
                    self._keys(),
                )
        return True

    def emit(self, next_state: State) -> None:
        """Replace the latest state and notify every current subscriber.

        Takes a snapshot of the subscriber list before notification, so
        modifications during notification don't affect the current round.

        Args:
            next_state: The full replacement state
        """
        with self._lock:
            self._latest_state = self._copy(next_state)
            # Defensive copy: snapshot of current subscribers
            subscribers = self._subscribers[:]

        isolate = self._config.isolate_callback_errors
        for key, callback in subscribers:
            if not isolate:
                callback(next_state)
                continue
            try:
                callback(next_state)
            except Exception as e:
                self._log_error(key, callback, e)

    def get_latest_state(self) -> State:
        """Return a copy of the latest state."""
        with self._lock:
            return self._copy(self._latest_state)

    def subscription_keys(self) -> tuple[SubscriptionKey, ...]:
        """Subscription keys in registration order."""
        with self._lock:
            return self._keys()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __len__(self) -> int:
        return self.subscriber_count

    def __bool__(self) -> bool:
        return True

    def clear(self) -> None:
        """Remove all subscribers (primarily for testing)."""
        with self._lock:
            self._subscribers.clear()
            if self._config.log_subscribers:
                _get_logger().debug("clear: subscribers=()")

    def _keys(self) -> tuple[SubscriptionKey, ...]:
        return tuple(key for key, _ in self._subscribers)

    def _log_error(self, key: SubscriptionKey, callback: StateCallback[State], e: Exception) -> None:
        """Report an isolated callback failure (logger injection support, exception-safe).

        The logger is called once with the callback name, subscription key,
        exception details and full traceback. If it is None or fails, the
        module logger is used.
        """
        msg = f"[StateService] subscriber {key}: {_callback_name(callback)} failed: {type(e).__name__}: {e!r}"
        full_msg = f"{msg}\n{traceback.format_exc()}"

        if self._logger:
            try:
                self._logger(full_msg)
                return
            except Exception:
                _get_logger().exception("Injected logger failed")
        _get_logger().error(full_msg)


def _callback_name(callback: Callable[..., object]) -> str:
    return getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None) or repr(callback)
