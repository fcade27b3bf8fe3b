"""
events.py — Minimal publish/subscribe utility.

Independent from the money types: any object can own an EventEmitter, or
inherit Observable to expose on/off/trigger by delegation.

    class Cart(Observable):
        def add_item(self, price):
            ...
            self.trigger("changed", price)

    cart = Cart()
    cart.on("changed", lambda event, price: print(event.type, price))
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union
import logging

logger = logging.getLogger(__name__)


Handler = Callable[..., Any]


@dataclass(frozen=True)
class Event:
    """Passed as first argument to every handler."""
    type: str
    time_stamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventEmitter:
    """
    Registry of handlers per event type.

    Handlers run synchronously, in registration order. Exceptions raised by a
    handler propagate to the caller of trigger() and stop the dispatch.
    """

    def __init__(self):
        self._events: Dict[str, List[Handler]] = {}

    def on(self, type: str, handler: Handler) -> EventEmitter:
        """Register $handler for $type. The same handler may be registered twice."""
        if not callable(handler):
            raise TypeError(f"$handler must be callable, but provided value is: {handler!r}")

        self._events.setdefault(type, []).append(handler)
        return self

    def off(self, type: Optional[str] = None, handler: Optional[Handler] = None) -> EventEmitter:
        """
        Remove registrations.

        - off(): every handler of every type
        - off(type): every handler of $type
        - off(type, handler): the first registration of $handler for $type
        """
        if type is None:
            self._events = {}
        elif handler is None:
            self._events.pop(type, None)
        else:
            handlers = self._events.get(type)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._events[type]
        return self

    def trigger(self, event: Union[str, Event], *args: Any) -> EventEmitter:
        """
        Dispatch $event to its handlers as handler(event, *args).

        A string is wrapped in a fresh Event carrying the current timestamp.
        """
        if isinstance(event, str):
            event = Event(event)
        elif not isinstance(event, Event):
            raise TypeError(f"$event must be a str or an Event, but provided value is: {event!r}")

        # Snapshot: handlers added or removed during dispatch apply from the next trigger
        handlers = list(self._events.get(event.type, ()))
        logger.debug(f"Dispatching '{event.type}' to {len(handlers)} handler(s)")
        for handler in handlers:
            handler(event, *args)
        return self

    def listeners(self, type: str) -> List[Handler]:
        return list(self._events.get(type, ()))

    def __repr__(self) -> str:
        counts = {name: len(handlers) for name, handlers in self._events.items()}
        return f"{self.__class__.__name__}({counts})"


class Observable:
    """
    Owns a private EventEmitter and exposes it through delegating methods.

    Subclasses that define __init__ must call super().__init__(), otherwise
    the emitter does not exist and every delegated call fails.
    """

    def __init__(self):
        self._emitter = EventEmitter()

    def on(self, type: str, handler: Handler):
        self._emitter.on(type, handler)
        return self

    def off(self, type: Optional[str] = None, handler: Optional[Handler] = None):
        self._emitter.off(type, handler)
        return self

    def trigger(self, event: Union[str, Event], *args: Any):
        self._emitter.trigger(event, *args)
        return self

    def listeners(self, type: str) -> List[Handler]:
        return self._emitter.listeners(type)
