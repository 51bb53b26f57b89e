"""Utility functions and exceptions."""

from .exceptions import (
    ConfigurationError,
    CyclicDependencyError,
    DepCycleError,
    EdgeFileError,
    ValidationError,
)
from .locking import LockedDependencyGraph

__all__ = [
    "DepCycleError",
    "ValidationError",
    "EdgeFileError",
    "CyclicDependencyError",
    "ConfigurationError",
    "LockedDependencyGraph",
]
