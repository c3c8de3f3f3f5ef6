from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type

Handler = Callable[[object], None]


class Subscription:
    def __init__(self, bus: "EventBus", event_type: Type[object], handler: Handler, token: int) -> None:
        self._bus = bus
        self.event_type = event_type
        self.handler = handler
        self.token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._bus.unsubscribe(self.event_type, self.token)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *_exc) -> None:
        self.release()


class SubscriptionGroup:
    """Releases a set of subscriptions together."""

    def __init__(self, subscriptions: List[Subscription] | None = None) -> None:
        self._subscriptions: List[Subscription] = list(subscriptions or [])

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def __len__(self) -> int:
        return len([row for row in self._subscriptions if row.active])

    def release(self) -> None:
        for subscription in self._subscriptions:
            subscription.release()
        self._subscriptions = []

    def __enter__(self) -> "SubscriptionGroup":
        return self

    def __exit__(self, *_exc) -> None:
        self.release()


class EventBus:
    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[tuple[int, int, Handler]]] = defaultdict(list)
        self._next_order = 0
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Handler, *, priority: int = 100) -> Subscription:
        token = self._next_order
        self._subscribers[event_type].append((int(priority), token, handler))
        self._next_order += 1
        self._subscribers[event_type].sort(key=lambda row: (row[0], row[1]))
        return Subscription(self, event_type, handler, token)

    def unsubscribe(self, event_type: Type[object], token: int) -> None:
        rows = self._subscribers.get(event_type)
        if not rows:
            return
        rows[:] = [row for row in rows if row[1] != token]

    def subscriber_count(self, event_type: Type[object]) -> int:
        return len(self._subscribers.get(event_type, ()))

    def publish(self, event: object) -> None:
        errors: List[Exception] = []
        event_type = type(event)
        # Handlers may release subscriptions while the event is delivered.
        for priority, _, handler in list(self._subscribers.get(event_type, ())):
            try:
                handler(event)
            except Exception as exc:
                errors.append(exc)
                handler_name = getattr(handler, "__qualname__", getattr(handler, "__name__", repr(handler)))
                self._logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": handler_name,
                        "priority": priority,
                    },
                )
        self._last_publish_errors = errors

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
