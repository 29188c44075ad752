"""Native UI element bridge.

After propagation finishes, a dispatcher hands a namespaced copy of the
event to the topmost element found along its parent chain. What the
element does with it belongs to whatever UI toolkit owns the element;
this module only defines the hand-off.
"""

import logging
from typing import Any, Protocol

from ..config import BridgeError

logger = logging.getLogger(__name__)


class ElementBridge(Protocol):
    """Callable that re-emits a payload onto a native element."""

    def __call__(self, element: Any, payload: dict[str, Any]) -> Any:
        ...


def namespaced_type(event_type: str | None, suffix: str) -> str:
    """Append the namespace suffix to an event type, e.g. 'click' -> 'click.ed'."""
    return f"{event_type}.{suffix}"


def trigger_native_event(element: Any, payload: dict[str, Any]) -> Any:
    """Default bridge: call ``element.trigger(payload)``.

    Raises:
        BridgeError: If the element has no callable ``trigger``
    """
    trigger = getattr(element, 'trigger', None)
    if not callable(trigger):
        raise BridgeError(
            f"Element {element!r} has no trigger() method for native events."
        )
    logger.debug("Triggering native event '%s' on %r", payload.get('type'), element)
    return trigger(payload)


class RecordingElement:
    """In-memory stand-in for a native element.

    Keeps every payload it receives, in order.
    """

    def __init__(self, name: str = "element"):
        self.name = name
        self.received: list[dict[str, Any]] = []

    def trigger(self, payload: dict[str, Any]) -> None:
        self.received.append(payload)

    def __repr__(self) -> str:
        return f"RecordingElement({self.name!r})"
