"""
Concurrency utilities.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ..graph import DependencyGraph


class LockedDependencyGraph:
    """
    A DependencyGraph guarded by a single exclusive lock.

    CONCURRENCY MODEL:
    DependencyGraph mutates its adjacency and in-degree tables in place with
    no synchronization. This wrapper owns one graph and one threading.Lock
    and holds the lock for the whole of each insert-and-check call, so the
    cycle answer always reflects exactly the state the caller's edge
    produced.

    Example Use Case:
        Worker threads registering task dependencies into one shared graph:

            shared = LockedDependencyGraph()
            if shared.add_edge_and_detect_cycle("build", "compile"):
                ...

    Multi-step critical sections use hold():

            with shared.hold() as graph:
                graph.add_edge_and_detect_cycle("a", "b")
                graph.add_edge_and_detect_cycle("b", "c")
    """

    def __init__(self, graph: DependencyGraph | None = None) -> None:
        self._graph = graph if graph is not None else DependencyGraph()
        self._lock = threading.Lock()

    def add_edge_and_detect_cycle(self, source: str, target: str) -> bool:
        """Insert an edge and check for cycles under the lock."""
        with self._lock:
            return self._graph.add_edge_and_detect_cycle(source, target)

    def has_cycle(self) -> bool:
        """Run the cycle check under the lock."""
        with self._lock:
            return self._graph.has_cycle()

    def cyclic_nodes(self) -> set[str]:
        with self._lock:
            return self._graph.cyclic_nodes()

    @property
    def node_count(self) -> int:
        with self._lock:
            return self._graph.node_count

    @property
    def edge_count(self) -> int:
        with self._lock:
            return self._graph.edge_count

    @contextmanager
    def hold(self) -> Iterator[DependencyGraph]:
        """
        Acquire the lock and yield the underlying graph.

        The graph must not be used after the with-block exits.

        Yields:
            The wrapped DependencyGraph
        """
        with self._lock:
            yield self._graph
