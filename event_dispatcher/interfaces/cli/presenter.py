"""CLI presentation layer for dispatch traces.

Registers recording listeners for a scenario, then renders what fired
where: the node tree, one table row per listener call, and the native
payloads mirrored onto elements.
"""

from dataclasses import dataclass
from typing import Any, Optional

from halo import Halo
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core import Event
from ...utils import build_node_tree, format_node, format_phase
from .scenario import ListenerSpec, Scenario


@dataclass
class Hop:
    """One listener invocation seen during a dispatch."""
    node: str
    phase: str
    type: str
    capture: bool
    stopped: bool


class DispatchTracePresenter:
    """Displays the propagation of a scenario's dispatch in the CLI.

    Example:
        scenario = Scenario.load('scenario.yaml')
        presenter = DispatchTracePresenter(scenario)
        presenter.attach()
        presenter.run()
        presenter.render()
    """

    def __init__(self, scenario: Scenario, console: Optional[Console] = None):
        self.scenario = scenario
        self.console = console or Console()
        self.hops: list[Hop] = []

    def attach(self) -> 'DispatchTracePresenter':
        """Register a recording listener for every listener in the scenario."""
        for spec in self.scenario.listeners:
            node = self.scenario.nodes[spec.node]
            node.add_event_listener(spec.type, self._make_recorder(spec), use_capture=spec.capture)
        return self

    def _make_recorder(self, spec: ListenerSpec):
        def record(event: Event):
            if spec.stop:
                event.stop_propagation()
            self.hops.append(Hop(
                node=format_node(event.current_target),
                phase=format_phase(event.phase),
                type=str(event.type),
                capture=spec.capture,
                stopped=spec.stop
            ))
        return record

    def run(self) -> None:
        """Dispatch the scenario's event behind a spinner."""
        spinner = Halo(text=f'Dispatching on {self.scenario.target}...', spinner='dots')
        spinner.start()
        try:
            self.scenario.dispatch()
        except Exception as e:
            spinner.fail(f"Dispatch failed: {e}")
            raise
        spinner.succeed(self._format_success_message())

    def _format_success_message(self) -> str:
        if not self.hops:
            return 'Dispatch complete (no listeners fired)'
        if any(hop.stopped for hop in self.hops):
            return f'Dispatch stopped after {len(self.hops)} listener call(s)'
        return f'Dispatch complete ({len(self.hops)} listener calls)'

    def build_hops_table(self) -> Table:
        table = Table(box=box.SIMPLE, header_style=None)
        table.add_column("#", justify="right", no_wrap=True)
        table.add_column("Node", no_wrap=True)
        table.add_column("Phase", no_wrap=True)
        table.add_column("Type", no_wrap=True)
        table.add_column("Binding", no_wrap=True)

        for index, hop in enumerate(self.hops, start=1):
            binding = "capture" if hop.capture else "bubble"
            if hop.stopped:
                binding += " [bold red](stop)[/bold red]"
            table.add_row(str(index), escape(hop.node), hop.phase, escape(hop.type), binding)
        return table

    def build_payloads_table(self) -> Optional[Table]:
        received = [
            (name, payload)
            for name, element in self.scenario.elements.items()
            for payload in element.received
        ]
        if not received:
            return None

        table = Table(box=box.SIMPLE, header_style=None)
        table.add_column("Element", no_wrap=True)
        table.add_column("Native type", no_wrap=True)
        table.add_column("Fields")
        for name, payload in received:
            table.add_row(
                escape(name), escape(str(payload.get('type'))), escape(_format_fields(payload))
            )
        return table

    def render(self) -> None:
        """Print the tree, the hop table and any native payloads."""
        with_element = set(self.scenario.elements)
        self.console.print(
            build_node_tree(self.scenario.parents, with_element), markup=False
        )
        self.console.print(self.build_hops_table())

        payloads = self.build_payloads_table()
        if payloads is not None:
            self.console.print(payloads)


def _format_fields(payload: dict[str, Any]) -> str:
    skip = {'type', 'phase', 'target', 'current_target'}
    parts = [f"{k}={v!r}" for k, v in payload.items() if k not in skip]
    parts.append(f"phase={format_phase(payload.get('phase'))}")
    parts.append(f"target={format_node(payload.get('target'))}")
    return ", ".join(parts)
