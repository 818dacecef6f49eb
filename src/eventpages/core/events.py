"""
Publish/subscribe support for views and models.

Handlers are plain callables invoked synchronously, in subscription order,
on the thread that triggers the event. Everything runs on one event loop,
so there is no locking.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count
from typing import Any

EventHandler = Callable[..., Any]

_subscription_ids = count(1)


@dataclass(frozen=True)
class Subscription:
    """Represents one handler registered for one named event."""

    event: str
    handler: EventHandler
    id: int = field(default_factory=lambda: next(_subscription_ids))


class EventEmitter:
    """
    Named-event publisher.

    Example:
        emitter = EventEmitter()
        sub = emitter.on("places", handle_places)
        emitter.trigger("places", data)
        emitter.off(subscription=sub)
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def on(self, event: str, handler: EventHandler) -> Subscription:
        """Subscribe `handler` to `event`."""
        subscription = Subscription(event=event, handler=handler)
        self._subscriptions.append(subscription)
        return subscription

    def off(
        self,
        event: str | None = None,
        handler: EventHandler | None = None,
        subscription: Subscription | None = None,
    ) -> int:
        """
        Remove subscriptions.

        With no arguments every subscription is removed. Otherwise only
        subscriptions matching all of the given criteria are removed.

        Returns:
            Number of subscriptions removed.
        """
        kept: list[Subscription] = []
        removed = 0
        for sub in self._subscriptions:
            matches = (
                (subscription is None or sub.id == subscription.id)
                and (event is None or sub.event == event)
                and (handler is None or sub.handler == handler)
            )
            if matches:
                removed += 1
            else:
                kept.append(sub)
        self._subscriptions = kept
        return removed

    def trigger(self, event: str, *args: Any) -> None:
        """Invoke every handler subscribed to `event` with `args`."""
        # snapshot so handlers may unsubscribe while being notified
        for sub in list(self._subscriptions):
            if sub.event == event:
                sub.handler(*args)

    def listener_count(self, event: str | None = None) -> int:
        """Count subscriptions, optionally for one event."""
        if event is None:
            return len(self._subscriptions)
        return sum(1 for sub in self._subscriptions if sub.event == event)
