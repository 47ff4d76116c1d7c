"""Tests for the manifold error hierarchy."""

import pytest

from manoptax.manifolds import (
    DimensionMismatchError,
    IncompatibleTangentSpaceError,
    InvalidPointError,
    InvalidTangentVectorError,
    ManifoldError,
    ValidationError,
)
from manoptax.manifolds.errors import check_component_count


def test_hierarchy():
    assert issubclass(ValidationError, ManifoldError)
    assert issubclass(InvalidPointError, ValidationError)
    assert issubclass(InvalidTangentVectorError, ValidationError)
    assert issubclass(DimensionMismatchError, ValidationError)
    assert issubclass(IncompatibleTangentSpaceError, ManifoldError)
    assert not issubclass(IncompatibleTangentSpaceError, ValidationError)


def test_validation_error_attributes():
    error = InvalidPointError("bad point", value=4.0, constraint="angle_range")
    assert str(error) == "bad point"
    assert error.value == 4.0
    assert error.constraint == "angle_range"


def test_dimension_mismatch_message():
    error = DimensionMismatchError("length mismatch", expected=3, actual=2)
    assert str(error) == "length mismatch (expected=3, actual=2)"
    assert error.constraint == "dimension"
    assert str(DimensionMismatchError("plain")) == "plain"


def test_check_component_count():
    check_component_count(2, 2, "point")
    with pytest.raises(DimensionMismatchError) as excinfo:
        check_component_count(2, 3, "point", value="x")
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 3
    assert excinfo.value.value == "x"
