"""DOM-style event dispatching with capture and bubble phases along parent chains."""

from .config import (
    AppConfig,
    DispatcherConfig,
    EventDispatcherError,
    InvalidListenerError,
    CyclicParentError,
    BridgeError,
)
from .core import Event, EventPhase, EventDispatcher, ListenerBinding, RecordingElement

__version__ = "0.1.0"

__all__ = [
    'AppConfig',
    'DispatcherConfig',
    'EventDispatcherError',
    'InvalidListenerError',
    'CyclicParentError',
    'BridgeError',
    'Event',
    'EventPhase',
    'EventDispatcher',
    'ListenerBinding',
    'RecordingElement',
]
