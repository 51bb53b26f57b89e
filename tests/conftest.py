"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Graph fixtures: Pre-built dependency graphs
- File fixtures: Edge list CSV files written to a temp directory
"""

from pathlib import Path

import pytest
import structlog

from src.depcycle.graph import DependencyGraph

# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def diamond_graph() -> DependencyGraph:
    """Graph a -> b, a -> c, c -> d, d -> b (acyclic, b has in-degree 2)."""
    graph = DependencyGraph()
    for source, target in [("a", "b"), ("a", "c"), ("c", "d"), ("d", "b")]:
        graph.add_edge_and_detect_cycle(source, target)
    return graph


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def write_edges(tmp_path: Path):
    """Factory writing edge file content to a temp file.

    Example:
        def test_something(write_edges):
            path = write_edges("source,target\\na,b\\n")
    """

    def _write(content: str, name: str = "edges.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def acyclic_csv(write_edges) -> Path:
    """Edge file describing a small build pipeline."""
    return write_edges(
        "# build pipeline\n"
        "source,target,note\n"
        "package,build,\n"
        "build,compile,\n"
        "build,lint,\n"
        "compile,fetch,needs sources\n"
    )


@pytest.fixture
def cyclic_csv(write_edges) -> Path:
    """Edge file whose fourth edge closes a cycle."""
    return write_edges(
        "source,target\n"
        "a,b\n"
        "b,c\n"
        "c,d\n"
        "c,a\n"
        "d,e\n"
    )


@pytest.fixture(autouse=True)
def _reset_log_context():
    """Keep bound log context from leaking between tests."""
    yield
    structlog.contextvars.clear_contextvars()
