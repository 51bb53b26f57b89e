"""Custom exceptions for depcycle.

Exception Hierarchy:
-------------------
DepCycleError (base)
├── ValidationError
│   └── EdgeFileError           # Malformed edge file, missing columns, empty identifiers
├── CyclicDependencyError       # Cycle-closing edge rejected in fail-fast mode
└── ConfigurationError          # Invalid YAML or environment configuration

Usage Guidelines:
----------------
1. DependencyGraph itself never raises: every edge is accepted and the cycle
   answer is returned as a boolean.

2. DependencyValidator turns a True answer into CyclicDependencyError only
   when fail_fast is enabled.

3. Use DepCycleError as catch-all for depcycle-specific errors.
"""


class DepCycleError(Exception):
    """Base exception for all depcycle errors."""

    pass


class ValidationError(DepCycleError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Error message.
            line_number: Optional line number where error occurred.
            original_error: Optional original exception that caused this error.
        """
        super().__init__(message)
        self.line_number = line_number
        self.original_error = original_error


class EdgeFileError(ValidationError):
    """Raised when an edge file or one of its rows is invalid."""

    def __str__(self) -> str:
        if self.line_number:
            return f"Line {self.line_number}: {self.args[0]}"
        return str(self.args[0]) if self.args else "Edge file error"


class CyclicDependencyError(DepCycleError):
    """
    Raised when an inserted edge closes a dependency cycle.

    The edge has already been recorded in the graph when this is raised;
    the graph keeps every insertion. The caller owning the graph decides
    whether to discard it.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        target: str | None = None,
        cycles: list[str] | None = None,
    ) -> None:
        """
        Initialize CyclicDependencyError.

        Args:
            message: Error message.
            source: Source node of the edge that closed the cycle.
            target: Target node of the edge that closed the cycle.
            cycles: Node ids left unprocessed by the cycle check.
        """
        super().__init__(message)
        self.source = source
        self.target = target
        self.cycles = cycles or []


class ConfigurationError(DepCycleError):
    """Raised when configuration cannot be loaded."""

    pass
