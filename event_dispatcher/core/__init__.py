"""Core event model and propagation."""

from .event import Event, EventPhase
from .bridge import ElementBridge, RecordingElement, namespaced_type, trigger_native_event
from .dispatcher import EventDispatcher, ListenerBinding

__all__ = [
    'Event',
    'EventPhase',
    'ElementBridge',
    'RecordingElement',
    'namespaced_type',
    'trigger_native_event',
    'EventDispatcher',
    'ListenerBinding',
]
