"""Dependency Graph - incremental edge insertion with Kahn cycle detection.

Edges are added one at a time and the graph can be asked after every
insertion whether it still forms a DAG.
"""

from collections import deque

import structlog

logger = structlog.get_logger(__name__)


class DependencyGraph:
    """
    Directed graph that reports cycles as edges are inserted.

    An edge ``source -> target`` means "source depends on / points to target".
    Nodes are created implicitly the first time they appear as an endpoint.
    Parallel edges are allowed and each one counts toward the target's
    in-degree.

    INSERTION CONTRACT:
    add_edge_and_detect_cycle() always records the edge, even when the
    result is True. Callers that need a strict DAG must reject the input
    themselves (see DependencyValidator with fail_fast=True).

    THREAD-SAFETY:
    None. State is mutated in place; wrap the graph in LockedDependencyGraph
    or hold an external lock around each call when sharing it.
    """

    def __init__(self) -> None:
        # Adjacency: node -> targets in insertion order, duplicates kept
        self.edges: dict[str, list[str]] = {}
        # Authoritative in-degree counts, one entry per known node
        self.in_degree: dict[str, int] = {}
        self._edge_count = 0

    def add_edge_and_detect_cycle(self, source: str, target: str) -> bool:
        """
        Add the edge ``source -> target`` and check the graph for cycles.

        The edge is kept regardless of the outcome.

        Args:
            source: Node the edge starts from
            target: Node the edge points to (may equal source)

        Returns:
            True if the graph now contains a directed cycle, False otherwise
        """
        self.edges.setdefault(source, []).append(target)
        self.in_degree[target] = self.in_degree.get(target, 0) + 1
        # Sources keep their existing count; new ones start at 0
        self.in_degree.setdefault(source, 0)
        self._edge_count += 1

        cyclic = self.has_cycle()

        logger.debug(
            "Edge added",
            source=source,
            target=target,
            node_count=self.node_count,
            edge_count=self._edge_count,
            cyclic=cyclic,
        )
        return cyclic

    def has_cycle(self) -> bool:
        """
        Check whether the graph currently contains a directed cycle.

        Pure query: runs Kahn's algorithm on a copy of the in-degree table and
        never touches ``edges`` or ``in_degree``.

        Returns:
            True if at least one node could not be processed
        """
        processed, _ = self._kahn_pass()
        return len(processed) < len(self.in_degree)

    def cyclic_nodes(self) -> set[str]:
        """
        Nodes that lie on a cycle or depend transitively on one.

        These are the nodes whose in-degree never drops to zero during the
        Kahn pass.

        Returns:
            Set of node ids, empty when the graph is acyclic
        """
        processed, _ = self._kahn_pass()
        return set(self.in_degree) - processed

    def _kahn_pass(self) -> tuple[set[str], dict[str, int]]:
        """
        Run Kahn's topological processing without producing an ordering.

        ALGORITHM (Kahn, 1962):
        1. Copy the in-degree table
        2. Queue every node whose copied in-degree is 0
        3. While the queue is not empty:
           a. Pop a node (FIFO) and mark it processed
           b. Decrement the copied in-degree of each outgoing target,
              once per parallel edge
           c. Queue a target when its in-degree reaches exactly 0
        4. Nodes never processed are on, or downstream of, a cycle

        A self-loop adds 1 to its own node's in-degree, and that node can
        only release it after being processed, so it is never processed.

        TIME COMPLEXITY: O(V + E)
        SPACE COMPLEXITY: O(V) for the copied table and queue

        Returns:
            Tuple of (processed node ids, remaining in-degree counts)
        """
        remaining = dict(self.in_degree)

        # deque for O(1) pops (list.pop(0) is O(n))
        queue = deque(node for node, degree in remaining.items() if degree == 0)
        processed: set[str] = set()

        while queue:
            node = queue.popleft()
            processed.add(node)

            for neighbor in self.edges.get(node, ()):
                remaining[neighbor] -= 1
                if remaining[neighbor] == 0:
                    queue.append(neighbor)

        return processed, remaining

    @property
    def node_count(self) -> int:
        """Number of distinct nodes seen as either endpoint."""
        return len(self.in_degree)

    @property
    def edge_count(self) -> int:
        """Number of inserted edges, parallel edges included."""
        return self._edge_count

    def nodes(self) -> list[str]:
        """Node ids in first-seen order."""
        return list(self.in_degree)

    def successors(self, node: str) -> list[str]:
        """
        Targets of the outgoing edges of a node.

        Args:
            node: Node id

        Returns:
            Copy of the target list in insertion order; empty for unknown
            nodes or nodes without outgoing edges
        """
        return list(self.edges.get(node, ()))

    def in_degree_of(self, node: str) -> int:
        """Incoming edge count of a node (0 if unknown)."""
        return self.in_degree.get(node, 0)

    def __len__(self) -> int:
        return len(self.in_degree)

    def __contains__(self, node: object) -> bool:
        return node in self.in_degree

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={self.node_count}, edges={self.edge_count})"

    def to_dot(self) -> str:
        """
        Generate DOT format representation of the dependency graph.

        Nodes on or downstream of a cycle are filled red.

        Returns:
            String containing the Graphviz DOT definition
        """
        cyclic = self.cyclic_nodes()

        lines = ["digraph DependencyGraph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=box style=filled];")

        for node in self.in_degree:
            color = "#f8d7da" if node in cyclic else "#d4edda"
            lines.append(f'    "{_escape(node)}" [fillcolor="{color}"];')

        for source, targets in self.edges.items():
            for target in targets:
                lines.append(f'    "{_escape(source)}" -> "{_escape(target)}";')

        lines.append("}")
        return "\n".join(lines)


def _escape(node: str) -> str:
    return node.replace("\\", "\\\\").replace('"', '\\"')


def new_graph() -> DependencyGraph:
    """Return an empty DependencyGraph."""
    return DependencyGraph()
