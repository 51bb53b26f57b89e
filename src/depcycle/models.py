"""Edge input models and validation results."""

from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def strip_whitespace(v: Any) -> Any:
    """
    Strip whitespace from string fields.

    Spreadsheet-edited edge lists often carry stray spaces (" build" and
    "build" must be the same node). Blank values become None so the required
    field check rejects them.

    Args:
        v: The value to process.

    Returns:
        Any: The processed value with whitespace stripped.
    """
    if isinstance(v, str):
        stripped = v.strip()
        if not stripped:
            return None
        return stripped
    return v


NodeId = Annotated[str, BeforeValidator(strip_whitespace), Field(min_length=1)]


class EdgeRow(BaseModel):
    """
    One ``source -> target`` dependency read from an edge file.

    Extra columns (descriptions, owners, ...) are kept but ignored by the
    graph.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    source: NodeId
    target: NodeId
    line_number: int | None = Field(default=None, exclude=True)


@dataclass
class EdgeCheck:
    """
    Result of inserting a single edge.

    Attributes:
        source: Edge source node
        target: Edge target node
        creates_cycle: Whether the graph contained a cycle after insertion
        line_number: Line in the edge file, when read from one
    """

    source: str
    target: str
    creates_cycle: bool
    line_number: int | None = None

    def __str__(self) -> str:
        location = f" (line {self.line_number})" if self.line_number else ""
        return f"{self.source} -> {self.target}{location}"


@dataclass
class ValidationReport:
    """
    Summary of validating a sequence of edges.

    Once a cycle exists every later insertion also reports one, because the
    graph keeps every edge. first_cycle is the insertion that closed the
    first cycle.

    Attributes:
        checks: One EdgeCheck per inserted edge, in insertion order
        node_count: Distinct nodes in the final graph
        edge_count: Edges in the final graph
        cyclic_nodes: Nodes on or downstream of a cycle in the final graph
    """

    checks: list[EdgeCheck] = field(default_factory=list)
    node_count: int = 0
    edge_count: int = 0
    cyclic_nodes: list[str] = field(default_factory=list)

    @property
    def has_cycle(self) -> bool:
        """Whether any insertion reported a cycle."""
        return any(check.creates_cycle for check in self.checks)

    @property
    def first_cycle(self) -> EdgeCheck | None:
        """The edge whose insertion first produced a cycle."""
        for check in self.checks:
            if check.creates_cycle:
                return check
        return None

    def get_summary(self) -> str:
        """
        Get a human-readable summary.

        Returns:
            str: One-line summary of the validation.
        """
        if not self.has_cycle:
            return f"No cycles: {self.node_count} nodes, {self.edge_count} edges"
        return (
            f"Cycle closed by {self.first_cycle}: "
            f"{len(self.cyclic_nodes)} of {self.node_count} nodes affected"
        )
