"""Dependency validator - cycle policy on top of DependencyGraph.

DependencyGraph only answers whether a cycle exists. This module decides
what to do with that answer: record it, or refuse the input.
"""

from collections.abc import Iterable

import structlog

from .graph import DependencyGraph
from .models import EdgeCheck, EdgeRow, ValidationReport
from .utils.exceptions import CyclicDependencyError

logger = structlog.get_logger(__name__)


class DependencyValidator:
    """
    Feed edges into a DependencyGraph and apply a cycle policy.

    Modes:
    - fail_fast=False: every edge is inserted and checked; the report lists
      which insertion first closed a cycle.
    - fail_fast=True: the first cycle-closing edge raises
      CyclicDependencyError. That edge is already in the graph, since the
      graph never refuses an insertion, so callers needing a clean DAG
      should discard the graph on error.
    """

    def __init__(self, graph: DependencyGraph | None = None, fail_fast: bool = False) -> None:
        """
        Initialize validator.

        Args:
            graph: Graph to insert into (a new empty graph if omitted)
            fail_fast: Raise on the first cycle-closing edge
        """
        self.graph = graph if graph is not None else DependencyGraph()
        self.fail_fast = fail_fast
        self.checks: list[EdgeCheck] = []
        self._first_cycle: EdgeCheck | None = None

    def add(self, source: str, target: str, line_number: int | None = None) -> EdgeCheck:
        """
        Insert one edge and record the cycle answer.

        Args:
            source: Edge source node
            target: Edge target node
            line_number: Optional location of the edge in its input file

        Returns:
            EdgeCheck for this insertion

        Raises:
            CyclicDependencyError: If fail_fast is set and the graph now has a cycle
        """
        creates_cycle = self.graph.add_edge_and_detect_cycle(source, target)
        check = EdgeCheck(
            source=source,
            target=target,
            creates_cycle=creates_cycle,
            line_number=line_number,
        )
        self.checks.append(check)

        if creates_cycle and self._first_cycle is None:
            self._first_cycle = check
            cyclic = sorted(self.graph.cyclic_nodes())
            logger.warning("Cycle detected", edge=str(check), cyclic_nodes=cyclic)

            if self.fail_fast:
                logger.error("Rejecting cycle-closing edge", edge=str(check))
                raise CyclicDependencyError(
                    f"Edge {check} creates a cyclic dependency involving nodes: {cyclic}",
                    source=source,
                    target=target,
                    cycles=cyclic,
                )

        return check

    def add_rows(self, rows: Iterable[EdgeRow]) -> ValidationReport:
        """
        Insert parsed edge rows in order.

        Args:
            rows: Validated edge rows

        Returns:
            ValidationReport for the whole graph
        """
        for row in rows:
            self.add(row.source, row.target, line_number=row.line_number)
        return self.report()

    def validate(self, edges: Iterable[tuple[str, str]]) -> ValidationReport:
        """
        Insert ``(source, target)`` pairs in order.

        Args:
            edges: Edge pairs

        Returns:
            ValidationReport for the whole graph
        """
        for source, target in edges:
            self.add(source, target)
        return self.report()

    @property
    def first_cycle(self) -> EdgeCheck | None:
        """The insertion that first produced a cycle, if any."""
        return self._first_cycle

    def report(self) -> ValidationReport:
        """Build a report of everything inserted so far."""
        report = ValidationReport(
            checks=list(self.checks),
            node_count=self.graph.node_count,
            edge_count=self.graph.edge_count,
            cyclic_nodes=sorted(self.graph.cyclic_nodes()),
        )
        logger.info(
            "Dependency validation complete",
            edges_checked=len(self.checks),
            node_count=report.node_count,
            has_cycle=report.has_cycle,
        )
        return report
