"""Event value object passed to listeners during propagation."""

import logging
from collections.abc import Mapping
from enum import IntEnum
from typing import Any

logger = logging.getLogger(__name__)


class EventPhase(IntEnum):
    """Propagation phase an event is currently in."""
    CAPTURING = 0
    AT_TARGET = 1
    BUBBLING = 2

    @property
    def label(self) -> str:
        return self.name.lower().replace('_', ' ')


class Event:
    """A single occurrence travelling through a dispatcher tree.

    Built from a type name, a mapping of fields, or any object whose
    attributes should be copied. Defaults are assigned first and caller
    fields afterwards, so anything supplied (including ``type``,
    ``bubbles`` or ``phase``) wins. Extra fields become plain attributes
    and are visible to listeners. A ``cancelled`` field is ignored; only
    stop_propagation() cancels an event.

    Example:
        >>> event = Event({'type': 'resize', 'width': 640})
        >>> event.type, event.width
        ('resize', 640)
        >>> Event('move', x=3).x
        3
    """

    def __init__(self, options: Any = None, **extra: Any):
        self.type: str | None = options if isinstance(options, str) else None

        self.bubbles = True
        self.cancelable = True
        self.phase = EventPhase.CAPTURING
        self.target = None
        self.current_target = None

        self._cancelled = False

        if isinstance(options, Mapping):
            self._merge(options)
        elif options is not None and not isinstance(options, str):
            if not hasattr(options, '__dict__'):
                raise TypeError(
                    f"Event options must be a type name, a mapping or an object "
                    f"with attributes, got {type(options).__name__}"
                )
            self._merge(vars(options))
        if extra:
            self._merge(extra)

    def _merge(self, source: Mapping[str, Any]) -> None:
        for name, value in source.items():
            # the cancellation flag only changes through stop_propagation()
            if name in ('cancelled', '_cancelled'):
                logger.debug("Ignoring '%s' field copied onto event", name)
                continue
            setattr(self, name, value)

    @property
    def cancelled(self) -> bool:
        """True once stop_propagation() has been called."""
        return self._cancelled

    def stop_propagation(self) -> None:
        """Prevent any further propagation of the event."""
        self._cancelled = True

    stopPropagation = stop_propagation

    def to_payload(self) -> dict[str, Any]:
        """Shallow copy of the public fields, used for native re-emission."""
        payload = {
            name: value for name, value in vars(self).items()
            if not name.startswith('_')
        }
        payload['cancelled'] = self._cancelled
        return payload

    def __repr__(self) -> str:
        return (
            f"Event(type={self.type!r}, phase={getattr(self.phase, 'name', self.phase)}, "
            f"target={self.target!r})"
        )
