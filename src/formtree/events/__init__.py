"""
Event system for form lifecycle hooks.

This package provides the event name constants, the event objects handed to
listeners and the priority ordered dispatcher owned by every form node.
"""

from formtree.events.dispatcher import (
    CallableListener,
    EventDispatcher,
    EventSubscriber,
    Listener,
    MethodListener,
    subscriber_listeners,
)
from formtree.events.names import FieldEvents, FormEvents
from formtree.events.types import Event, FieldEvent, FormEvent

__all__ = [
    "EventDispatcher",
    "EventSubscriber",
    "Listener",
    "CallableListener",
    "MethodListener",
    "subscriber_listeners",
    "FormEvents",
    "FieldEvents",
    "Event",
    "FormEvent",
    "FieldEvent",
]
