"""
Typed event bus for battle notifications.

Listeners (combat log view, damage numbers, screen shake) subscribe by
Enum member and receive an Event carrying keyword data. The battle
core never depends on who is listening.

Usage:
    bus = EventBus()
    bus.subscribe(CombatEvent.ACTION_RESOLVED, log_view.on_action)
    bus.publish(CombatEvent.ACTION_RESOLVED, result=result, state=state)
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    A published notification.

    Attributes:
        type: Enum member identifying the event
        data: Keyword data given to publish()
        consumed: Set by a listener to stop lower-priority listeners
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop delivery to the remaining listeners."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    target: Any  # handler, ref or WeakMethod
    one_shot: bool = False

    def resolve(self) -> Optional[EventHandler]:
        """Handler to call, or None once a weakly held handler is gone."""
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe hub owned by one battle session.

    - Higher priority listeners run first; equal priorities keep
      subscription order
    - Listeners are held weakly unless weak=False
    - One-shot listeners drop after their first delivery
    - Events published from inside a listener are delivered after the
      current event finishes
    """

    def __init__(self) -> None:
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: deque[Event] = deque()
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Register a listener.

        Args:
            event_type: Enum member to listen for
            handler: Callback receiving the Event
            priority: Delivery rank, highest first (default 0)
            one_shot: Remove after the first delivery
            weak: Hold the handler by weak reference (bound methods
                  use WeakMethod so the owner can be collected)
        """
        if not weak:
            target: Any = handler
        elif hasattr(handler, '__self__'):
            target = WeakMethod(handler)
        else:
            target = ref(handler)

        subscriptions = self._subscriptions.setdefault(event_type, [])
        position = next(
            (i for i, sub in enumerate(subscriptions) if sub.priority < priority),
            len(subscriptions),
        )
        subscriptions.insert(position, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of ``handler`` for an event type."""
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        subscriptions[:] = [sub for sub in subscriptions if sub.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Build and deliver an event.

        Returns:
            The delivered Event (check .consumed to see if a listener stopped it)
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """Deliver a pre-built event, or queue it while another is being delivered."""
        if self._dispatching:
            self._pending.append(event)
            return

        self._deliver(event)
        while self._pending:
            self._deliver(self._pending.popleft())

    def has_subscribers(self, event_type: Enum) -> bool:
        return bool(self._subscriptions.get(event_type))

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop listeners for one event type, or for all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished: list[_Subscription] = []
        self._dispatching = True
        try:
            for sub in list(subscriptions):
                handler = sub.resolve()
                if handler is None:
                    finished.append(sub)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Listener for {event.type} failed")

                if sub.one_shot:
                    finished.append(sub)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        if finished:
            subscriptions[:] = [
                sub for sub in subscriptions if all(sub is not f for f in finished)
            ]
