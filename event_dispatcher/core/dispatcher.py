"""DOM-style event dispatching along a parent chain.

Objects that inherit from EventDispatcher (or call its __init__ from their
own) gain a per-instance listener registry and a dispatch_event() that
propagates through their ancestors the way browser events travel through
a document:

    capture   root -> ... -> parent        (use_capture listeners only)
    at target the dispatching object       (every listener)
    bubble    parent -> ... -> root        (every listener)

Example:
    root = EventDispatcher()
    child = EventDispatcher(parent=root)
    root.on('save', lambda e: print('saw', e.type, 'in', e.phase.label))
    child.emit('save')   # prints "saw save in bubbling"
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..config import (
    DEFAULT_NAMESPACE_SUFFIX,
    CyclicParentError,
    DispatcherConfig,
    InvalidListenerError,
)
from .bridge import ElementBridge, namespaced_type, trigger_native_event
from .event import Event, EventPhase

logger = logging.getLogger(__name__)

_TYPE_SEPARATOR = re.compile(r'\s+')


@dataclass
class ListenerBinding:
    """A registered listener together with its call context and phase."""
    listener: Callable
    context: Any
    use_capture: bool = False
    explicit_context: bool = False

    def matches(self, listener: Callable, context: Any, use_capture: bool) -> bool:
        return (
            self.listener is listener
            and self.context is context
            and self.use_capture == use_capture
        )

    def invoke(self, event: Event) -> None:
        if self.explicit_context:
            self.listener(self.context, event)
        else:
            self.listener(event)


class EventDispatcher:
    """Mixin giving an object DOM-like event listeners and propagation.

    Args:
        parent: Optional ancestor dispatcher. Only read, never owned.
        element: Optional native UI element to mirror events onto.
        bridge: Callable used to hand events to ``element``
            (defaults to calling ``element.trigger(payload)``)
        config: Dispatcher configuration (namespace suffix)

    Parent chains must be acyclic; dispatching on a node whose ancestors
    loop raises CyclicParentError before any listener runs.
    """

    dom_namespace_suffix: str = DEFAULT_NAMESPACE_SUFFIX

    def __init__(
        self,
        parent: Optional['EventDispatcher'] = None,
        element: Any = None,
        *,
        bridge: Optional[ElementBridge] = None,
        config: Optional[DispatcherConfig] = None
    ):
        self._listeners_by_type: dict[str, list[ListenerBinding]] = {}
        self.parent = parent
        self.element = element
        self.bridge = bridge or trigger_native_event
        if config is not None:
            self.dom_namespace_suffix = config.dom_namespace_suffix

    # --- LISTENER REGISTRY ---

    def add_event_listener(
        self,
        type: str,
        listener: Callable,
        context: Any = None,
        use_capture: bool = False
    ) -> 'EventDispatcher':
        """Add an event listener on this object.

        Args:
            type: Event type, or several types separated by whitespace
            listener: Callable receiving the Event
            context: Object passed as the listener's first argument.
                Defaults to this dispatcher, in which case the listener is
                called with the event only.
            use_capture: Fire during the capture phase instead of bubbling

        Returns:
            Self for method chaining

        Raises:
            InvalidListenerError: If listener is not callable
        """
        types = _TYPE_SEPARATOR.split(type.strip())
        if len(types) > 1:
            for name in types:
                self.add_event_listener(name, listener, context, use_capture)
            return self

        if not callable(listener):
            raise InvalidListenerError(f"Listener must be callable, got {listener!r}")

        name = types[0]
        binding = ListenerBinding(
            listener=listener,
            context=context if context is not None else self,
            use_capture=bool(use_capture),
            explicit_context=context is not None
        )
        self._listeners_by_type.setdefault(name, []).append(binding)
        logger.debug(
            "Added %s listener for '%s' on %r",
            "capture" if binding.use_capture else "bubble", name, self
        )
        return self

    def remove_event_listener(
        self,
        type: str,
        listener: Optional[Callable] = None,
        context: Any = None,
        use_capture: bool = False
    ) -> 'EventDispatcher':
        """Remove one event listener from this object.

        With only ``type`` given, the first binding for that type is removed
        whatever its listener, context or phase. Otherwise the first binding
        matching (listener, context, use_capture) is removed.

        Returns:
            Self for method chaining
        """
        bindings = self._listeners_by_type.get(type.strip())
        if bindings is None:
            return self

        if listener is None:
            if bindings:
                bindings.pop(0)
                logger.debug("Removed first listener for '%s' on %r", type, self)
            return self

        if context is None:
            context = self
        use_capture = bool(use_capture)

        for index, binding in enumerate(bindings):
            if binding.matches(listener, context, use_capture):
                del bindings[index]
                logger.debug("Removed listener for '%s' on %r", type, self)
                break

        return self

    def has_event_listener(self, type: str) -> bool:
        """Return True if a registry entry exists for ``type``.

        Entries are never pruned, so this stays True after every binding
        for the type has been removed.
        """
        return type.strip() in self._listeners_by_type

    def listeners(self, type: str) -> tuple[ListenerBinding, ...]:
        """Snapshot of the bindings registered for ``type``."""
        return tuple(self._listeners_by_type.get(type.strip(), ()))

    # --- DISPATCH ---

    def dispatch_event(self, event: Event | str | Mapping[str, Any]) -> 'EventDispatcher':
        """Fire an event on this object and propagate it through its ancestors.

        Args:
            event: An Event, an event type, or a mapping of Event fields

        Returns:
            Self for method chaining

        Raises:
            CyclicParentError: If the parent chain loops
            Any exception raised by a listener, unchanged
        """
        if not isinstance(event, Event):
            event = Event(event)

        event.target = self
        path = self.propagation_path()
        logger.debug("Dispatching '%s' on %r through %d ancestors", event.type, self, len(path))

        try:
            event.phase = EventPhase.CAPTURING
            for node in path:
                if event.cancelled:
                    break
                node._trigger_listeners(event)

            if event.cancelled:
                logger.debug("'%s' cancelled during capture", event.type)
                return self

            event.phase = EventPhase.AT_TARGET
            self._trigger_listeners(event)

            event.phase = EventPhase.BUBBLING
            for node in reversed(path):
                if event.cancelled:
                    logger.debug("'%s' cancelled during bubbling", event.type)
                    break
                node._trigger_listeners(event)
        finally:
            event.current_target = None

        self._trigger_native_event(event, path)
        return self

    def propagation_path(self) -> list['EventDispatcher']:
        """Ancestors of this node, root first, excluding the node itself."""
        path = []
        seen = {id(self)}
        node = getattr(self, 'parent', None)
        while node is not None:
            if id(node) in seen:
                raise CyclicParentError(f"Parent chain of {self!r} loops back to {node!r}")
            seen.add(id(node))
            path.append(node)
            node = getattr(node, 'parent', None)
        path.reverse()
        return path

    def _trigger_native_event(self, event: Event, path: list['EventDispatcher']) -> None:
        # the topmost ancestor carrying an element wins over nearer ones
        element = getattr(self, 'element', None)
        for node in reversed(path):
            candidate = getattr(node, 'element', None)
            if candidate is not None:
                element = candidate

        if element is None:
            return

        payload = event.to_payload()
        payload['type'] = namespaced_type(event.type, self.dom_namespace_suffix)
        logger.debug("Mirroring '%s' onto %r", payload['type'], element)
        self.bridge(element, payload)

    def _trigger_listeners(self, event: Event) -> None:
        """Call this object's listeners for the event's current phase.

        Private to the propagation algorithm; iterates a snapshot so that
        listeners may add or remove bindings while running.
        """
        bindings = self._listeners_by_type.get(event.type)
        if not bindings:
            return

        event.current_target = self
        for binding in tuple(bindings):
            if event.phase == EventPhase.CAPTURING and not binding.use_capture:
                continue
            binding.invoke(event)

    # --- ALIASES ---

    def on(self, *args, **kwargs) -> 'EventDispatcher':
        """Alias of add_event_listener()."""
        return self.add_event_listener(*args, **kwargs)

    def off(self, *args, **kwargs) -> 'EventDispatcher':
        """Alias of remove_event_listener()."""
        return self.remove_event_listener(*args, **kwargs)

    def trigger(self, *args, **kwargs) -> 'EventDispatcher':
        """Alias of dispatch_event()."""
        return self.dispatch_event(*args, **kwargs)

    def emit(self, *args, **kwargs) -> 'EventDispatcher':
        """Alias of dispatch_event()."""
        return self.dispatch_event(*args, **kwargs)
