from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)

Handler = Callable[[object], None]


@dataclass(frozen=True)
class _Subscription:
    event_type: type
    priority: int
    order: int
    handler: Handler

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


class EventBus:
    """Synchronous in-process dispatch of domain events.

    A handler subscribed to a base class also receives its subclasses, so
    subscribing to ``object`` sees every event. Handlers run by ascending
    priority, then subscription order. A failing handler is logged and
    skipped; state already persisted by the publisher stays as it is.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []
        self._failures: list[tuple[str, Exception]] = []

    def subscribe(self, event_type: type, handler: Handler, *, priority: int = 100) -> None:
        self._subscriptions.append(
            _Subscription(event_type, int(priority), len(self._subscriptions), handler)
        )
        self._subscriptions.sort(key=lambda row: (row.priority, row.order))

    def unsubscribe(self, event_type: type, handler: Handler) -> None:
        self._subscriptions = [
            row for row in self._subscriptions if not (row.event_type is event_type and row.handler == handler)
        ]

    def publish(self, event: object) -> int:
        """Deliver ``event`` and return how many handlers completed."""
        self._failures = []
        delivered = 0
        for subscription in [row for row in self._subscriptions if isinstance(event, row.event_type)]:
            try:
                subscription.handler(event)
            except Exception as exc:
                self._failures.append((subscription.name, exc))
                logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": type(event).__name__,
                        "handler": subscription.name,
                        "priority": subscription.priority,
                    },
                )
            else:
                delivered += 1
        return delivered

    def last_publish_errors(self) -> list[Exception]:
        return [exc for _, exc in self._failures]

    def last_publish_failures(self) -> list[tuple[str, Exception]]:
        return list(self._failures)
