"""YAML scenario describing a dispatcher tree, its listeners and one dispatch.

Example scenario.yaml:

    nodes:
      window: {element: true}
      panel: {parent: window}
      button: {parent: panel}
    listeners:
      - {node: window, type: click, capture: true}
      - {node: panel, type: click}
      - {node: button, type: click, stop: true}
    dispatch:
      node: button
      event: {type: click, x: 10, y: 4}
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ...config import DispatcherConfig, ScenarioError, safe_load_dataclass
from ...core import EventDispatcher, RecordingElement

logger = logging.getLogger(__name__)


class TraceNode(EventDispatcher):
    """Named dispatcher used to build scenario trees."""

    def __init__(self, name: str, parent: Optional['TraceNode'] = None,
                 element: Any = None, config: Optional[DispatcherConfig] = None):
        super().__init__(parent=parent, element=element, config=config)
        self.name = name

    def __repr__(self) -> str:
        return f"TraceNode({self.name!r})"


@dataclass
class ListenerSpec:
    """One listener declared in a scenario."""
    node: str
    type: str
    capture: bool = False
    stop: bool = False


@dataclass
class Scenario:
    """A loaded scenario, with its nodes already linked."""
    nodes: dict[str, TraceNode]
    parents: dict[str, str | None]
    listeners: list[ListenerSpec]
    target: str
    event: Any
    source: Optional[Path] = None
    elements: dict[str, RecordingElement] = field(default_factory=dict)

    @classmethod
    def load(cls, scenario_path: Path | str,
             config: Optional[DispatcherConfig] = None) -> 'Scenario':
        """Load a scenario from a YAML file.

        Args:
            scenario_path: Path to the scenario file
            config: Dispatcher configuration applied to every node

        Returns:
            Scenario with nodes built and parents linked

        Raises:
            ScenarioError: If the file is missing, unparsable or inconsistent
        """
        path = Path(scenario_path)
        if not path.exists():
            raise ScenarioError(f"Scenario file '{path}' not found.")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ScenarioError(f"Error parsing YAML: {e}") from e

        scenario = cls.from_dict(data, config)
        scenario.source = path
        return scenario

    @classmethod
    def from_dict(cls, data: Any, config: Optional[DispatcherConfig] = None) -> 'Scenario':
        """Build a scenario from already-parsed data."""
        if not isinstance(data, dict):
            raise ScenarioError("Scenario must be a mapping.")

        raw_nodes = data.get('nodes')
        if not raw_nodes or not isinstance(raw_nodes, dict):
            raise ScenarioError("Scenario needs a non-empty 'nodes' mapping.")

        nodes: dict[str, TraceNode] = {}
        parents: dict[str, str | None] = {}
        elements: dict[str, RecordingElement] = {}

        for name, options in raw_nodes.items():
            options = options or {}
            name = str(name)
            if not isinstance(options, dict):
                raise ScenarioError(f"Node '{name}' must be a mapping.")
            element = None
            if options.get('element'):
                element = elements[name] = RecordingElement(name)
            nodes[name] = TraceNode(name, element=element, config=config)
            parent = options.get('parent')
            parents[name] = str(parent) if parent is not None else None

        # second pass so parents may be declared after their children
        for name, parent in parents.items():
            if parent is None:
                continue
            if parent not in nodes:
                raise ScenarioError(f"Node '{name}' has unknown parent '{parent}'.")
            nodes[name].parent = nodes[parent]

        listeners = []
        for index, raw in enumerate(data.get('listeners') or []):
            try:
                spec = safe_load_dataclass(ListenerSpec, raw, f'listeners[{index}]')
            except TypeError as e:
                raise ScenarioError(f"Invalid listener #{index}: {e}") from e
            if spec.node not in nodes:
                raise ScenarioError(f"Listener #{index} refers to unknown node '{spec.node}'.")
            listeners.append(spec)

        dispatch = data.get('dispatch') or {}
        if not isinstance(dispatch, dict):
            raise ScenarioError("'dispatch' must be a mapping.")
        target = dispatch.get('node')
        if target not in nodes:
            raise ScenarioError(f"Dispatch target '{target}' is not a declared node.")
        event = dispatch.get('event')
        if not event:
            raise ScenarioError("Dispatch needs an 'event' (type name or mapping).")

        logger.debug(
            "Loaded scenario: %d nodes, %d listeners, dispatching on '%s'",
            len(nodes), len(listeners), target
        )
        return cls(
            nodes=nodes,
            parents=parents,
            listeners=listeners,
            target=target,
            event=event,
            elements=elements
        )

    def dispatch(self) -> TraceNode:
        """Dispatch the scenario's event on its target node."""
        target = self.nodes[self.target]
        return target.dispatch_event(self.event)
