"""Manifold error hierarchy.

Validation of points and tangent vectors is explicit: ``validate_point`` and
``validate_tangent`` raise one of the ``ValidationError`` subclasses below and
return ``True`` otherwise. The only error raised implicitly by a geometric
operation is ``IncompatibleTangentSpaceError`` from ``dot``.
"""

from typing import Any


class ManifoldError(Exception):
    """Base exception for manifold-related errors."""

    pass


class ValidationError(ManifoldError):
    """Exception for values that violate the constraints of their manifold."""

    def __init__(self, message: str, value: Any = None, constraint: str | None = None):
        """Initialize ValidationError with the offending value and the violated constraint."""
        super().__init__(message)
        self.value = value
        self.constraint = constraint


class InvalidPointError(ValidationError):
    """Exception for points that do not lie on the manifold."""

    pass


class InvalidTangentVectorError(ValidationError):
    """Exception for tangent vectors that do not lie in the tangent space."""

    pass


class DimensionMismatchError(ValidationError):
    """Exception for length mismatches between points, vectors and component manifolds."""

    def __init__(
        self,
        message: str,
        expected: int | tuple | None = None,
        actual: int | tuple | None = None,
        value: Any = None,
    ):
        """Initialize DimensionMismatchError with dimension information."""
        super().__init__(message, value=value, constraint="dimension")
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        """Return string representation with dimension information."""
        base_msg = super().__str__()
        if self.expected is not None and self.actual is not None:
            return f"{base_msg} (expected={self.expected}, actual={self.actual})"
        return base_msg


class IncompatibleTangentSpaceError(ManifoldError):
    """Exception for inner products between vectors of different tangent spaces."""

    def __init__(self, message: str, first_base: Any = None, second_base: Any = None):
        """Initialize IncompatibleTangentSpaceError with both base points."""
        super().__init__(message)
        self.first_base = first_base
        self.second_base = second_base


def check_component_count(expected: int, actual: int, what: str, value: Any = None) -> None:
    """Raise ``DimensionMismatchError`` unless ``actual == expected``.

    Args:
        expected: Number of component manifolds.
        actual: Number of components of the inspected value.
        what: Description of the inspected value used in the message.
        value: The inspected value, attached to the error.
    """
    if expected != actual:
        raise DimensionMismatchError(
            f"Number of components of the {what} does not match the number of manifolds",
            expected=expected,
            actual=actual,
            value=value,
        )
