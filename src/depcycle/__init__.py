"""depcycle - Cycle detection for incrementally-built dependency graphs."""

__version__ = "0.1.0"

from .cli import app  # noqa: E402
from .config import DepCycleConfig  # noqa: E402
from .graph import DependencyGraph, new_graph  # noqa: E402
from .validator import DependencyValidator  # noqa: E402

__all__ = ["app", "DepCycleConfig", "DependencyGraph", "DependencyValidator", "new_graph"]
