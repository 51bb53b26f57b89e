"""Unit tests for Custom Exceptions."""

import pytest

from src.depcycle.utils.exceptions import (
    ConfigurationError,
    CyclicDependencyError,
    DepCycleError,
    EdgeFileError,
    ValidationError,
)


class TestEdgeFileError:
    """Test EdgeFileError exception."""

    def test_with_line_number(self):
        error = EdgeFileError("target: Field required", line_number=7)

        assert str(error) == "Line 7: target: Field required"
        assert error.line_number == 7

    def test_without_line_number(self):
        error = EdgeFileError("Header is missing")

        assert str(error) == "Header is missing"
        assert error.line_number is None

    def test_original_error(self):
        cause = ValueError("bad")
        error = EdgeFileError("wrapped", original_error=cause)

        assert error.original_error is cause


class TestCyclicDependencyError:
    """Test CyclicDependencyError exception."""

    def test_attributes(self):
        error = CyclicDependencyError("cycle", source="b", target="a", cycles=["a", "b"])

        assert str(error) == "cycle"
        assert error.source == "b"
        assert error.target == "a"
        assert error.cycles == ["a", "b"]

    def test_defaults(self):
        error = CyclicDependencyError("cycle")

        assert error.source is None
        assert error.target is None
        assert error.cycles == []


@pytest.mark.parametrize(
    "error",
    [
        ValidationError("x"),
        EdgeFileError("x"),
        CyclicDependencyError("x"),
        ConfigurationError("x"),
    ],
)
def test_hierarchy(error):
    """Test every exception is catchable as DepCycleError."""
    assert isinstance(error, DepCycleError)
    assert isinstance(error, Exception)


def test_edge_file_error_is_validation_error():
    assert issubclass(EdgeFileError, ValidationError)
