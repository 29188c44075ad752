"""Formatting utilities for presenting dispatch traces."""

from typing import Any

from ..core.event import EventPhase


def format_node(node: Any) -> str:
    """Format a dispatcher for display.

    Uses the node's ``name`` attribute when it has one:
    - TraceNode(name='button') -> 'button'
    - EventDispatcher() -> 'EventDispatcher'

    Args:
        node: Any object taking part in propagation

    Returns:
        Short display label
    """
    if node is None:
        return "-"
    name = getattr(node, 'name', None)
    if name:
        return str(name)
    return type(node).__name__


def format_phase(phase: Any) -> str:
    """Format a propagation phase: EventPhase.AT_TARGET -> 'at target'."""
    try:
        return EventPhase(phase).label
    except ValueError:
        return str(phase)


def format_path(nodes: list[Any]) -> str:
    """Format a propagation path: [root, panel] -> 'root > panel'."""
    return " > ".join(format_node(n) for n in nodes)
