"""
Priority ordered, synchronous event dispatcher.

Each form node owns one dispatcher. Listeners registered for an event name
run highest priority first, ties in registration order. Dispatch stops once a
listener calls `stop_propagation()`, and listener exceptions propagate to the
caller untouched.

Listeners come in two kinds:
    - `CallableListener`: any callable taking the event.
    - `MethodListener`: a (target, method name) pair, produced from subscribers.

Subscribers declare a mapping of event name to method name through
`get_subscribed_events()`; `subscriber_listeners()` expands that mapping into
plain `(event_name, listener, priority)` registrations.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from attrs import field, frozen

from formtree.events.types import Event
from formtree.exceptions import SubscriberError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Event)


@frozen
class CallableListener:
    """Listener wrapping a plain callable."""

    callback: Callable[[Any], Any]

    def __call__(self, event: Event) -> Any:
        return self.callback(event)

    def describe(self) -> str:
        return getattr(self.callback, "__qualname__", repr(self.callback))


@frozen
class MethodListener:
    """Listener calling a named method on a target object."""

    target: Any = field(eq=False)
    method_name: str
    # Targets are compared by identity, not by their own __eq__
    target_id: int = field(init=False, eq=True, repr=False)

    @target_id.default
    def _target_id(self) -> int:
        return id(self.target)

    def __call__(self, event: Event) -> Any:
        return getattr(self.target, self.method_name)(event)

    def describe(self) -> str:
        return f"{type(self.target).__name__}.{self.method_name}"


Listener = CallableListener | MethodListener


@frozen
class ListenerEntry:
    listener: Listener
    priority: int = 0


@runtime_checkable
class EventSubscriber(Protocol):
    """Object declaring the events it listens to.

    The mapping values take one of these forms:
        "method_name"
        ("method_name", priority)
        [("method_a", 10), ("method_b",)]
    """

    def get_subscribed_events(self) -> Mapping[str, Any]: ...


def _as_listener(listener: Callable[[Any], Any] | Listener) -> Listener:
    if isinstance(listener, (CallableListener, MethodListener)):
        return listener
    return CallableListener(listener)


def _method_specs(event_name: str, params: Any, subscriber: Any) -> list[tuple[str, int]]:
    if isinstance(params, str):
        return [(params, 0)]
    if isinstance(params, Sequence) and params:
        if isinstance(params[0], str):
            priority = params[1] if len(params) > 1 else 0
            return [(params[0], int(priority))]
        specs = []
        for item in params:
            specs.extend(_method_specs(event_name, item, subscriber))
        return specs
    raise SubscriberError(subscriber, params, event_name)


def subscriber_listeners(subscriber: EventSubscriber) -> list[tuple[str, MethodListener, int]]:
    """
    Expand a subscriber into plain listener registrations.

    Params:
        subscriber: Object exposing `get_subscribed_events()`

    Returns:
        List of (event_name, listener, priority) tuples, in declaration order

    Raises:
        SubscriberError: If a declared method does not exist or is not callable
    """
    registrations = []
    for event_name, params in subscriber.get_subscribed_events().items():
        for method_name, priority in _method_specs(event_name, params, subscriber):
            if not callable(getattr(subscriber, method_name, None)):
                raise SubscriberError(subscriber, method_name, event_name)
            registrations.append((event_name, MethodListener(subscriber, method_name), priority))
    return registrations


class EventDispatcher:
    """Synchronous pub/sub for one form node."""

    def __init__(self, log_events: bool = False):
        self._listeners: dict[str, list[ListenerEntry]] = {}
        self._subscribers: list[EventSubscriber] = []
        self.log_events = log_events

    def on(
        self,
        event_name: str,
        listener: Callable[[Any], Any] | Listener,
        priority: int = 0,
    ) -> None:
        """
        Register a listener.

        Params:
            event_name: Event to listen to
            listener: Callable taking the event, or a prepared Listener
            priority: Higher runs earlier; equal priorities keep registration order
        """
        entries = self._listeners.setdefault(event_name, [])
        entries.append(ListenerEntry(_as_listener(listener), priority))
        # list.sort is stable, so ties keep registration order
        entries.sort(key=lambda entry: -entry.priority)

    def off(self, event_name: str, listener: Callable[[Any], Any] | Listener) -> None:
        """Remove every registration of `listener` for `event_name`."""
        if event_name not in self._listeners:
            return
        target = _as_listener(listener)
        remaining = [entry for entry in self._listeners[event_name] if entry.listener != target]
        if remaining:
            self._listeners[event_name] = remaining
        else:
            del self._listeners[event_name]

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        registrations = subscriber_listeners(subscriber)
        for event_name, listener, priority in registrations:
            self.on(event_name, listener, priority)
        self._subscribers.append(subscriber)

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        for event_name, listener, _ in subscriber_listeners(subscriber):
            self.off(event_name, listener)
        self._subscribers = [item for item in self._subscribers if item is not subscriber]

    def dispatch(self, event_name: str, event: E) -> E:
        """
        Run the listeners of `event_name` against `event`.

        Params:
            event_name: Event being dispatched
            event: Event object handed to each listener

        Returns:
            The same event object, possibly modified by listeners
        """
        entries = list(self._listeners.get(event_name, ()))
        if self.log_events:
            logger.debug("Dispatching %s to %d listener(s)", event_name, len(entries))

        for entry in entries:
            if event.propagation_stopped:
                if self.log_events:
                    logger.debug("Propagation of %s stopped", event_name)
                break
            entry.listener(event)
        return event

    def has_listeners(self, event_name: str | None = None) -> bool:
        if event_name is None:
            return any(self._listeners.values())
        return bool(self._listeners.get(event_name))

    def get_listeners(self, event_name: str) -> list[Listener]:
        """Return the listeners of an event in dispatch order."""
        return [entry.listener for entry in self._listeners.get(event_name, ())]

    def get_event_names(self) -> list[str]:
        return list(self._listeners)

    def get_subscribers(self) -> list[EventSubscriber]:
        return list(self._subscribers)

    def remove_all_listeners(self) -> None:
        self._listeners = {}
        self._subscribers = []
