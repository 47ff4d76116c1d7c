"""Tests for the circle S^1 represented by angles."""

import math

import jax.random as jr
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from manoptax.manifolds import (
    Circle,
    DimensionMismatchError,
    InvalidPointError,
    S1Point,
    S1TVector,
    create_circle,
    sym_rem,
)

angles = st.floats(min_value=-1e3, max_value=1e3, allow_nan=False, allow_infinity=False)


@pytest.fixture
def circle():
    return create_circle()


class TestSymRem:
    """The symmetric remainder reduces reals to [-π, π)."""

    @settings(max_examples=200, deadline=None)
    @given(a=angles)
    def test_range(self, a):
        r = float(sym_rem(a))
        assert -math.pi <= r < math.pi

    @settings(max_examples=200, deadline=None)
    @given(a=angles)
    def test_idempotent(self, a):
        r = sym_rem(a)
        assert float(sym_rem(r)) == float(r)

    def test_rounds_to_nearest(self):
        assert float(sym_rem(3 * math.pi)) == pytest.approx(-math.pi)
        assert float(sym_rem(math.pi)) == pytest.approx(-math.pi)
        assert float(sym_rem(-6.0)) == pytest.approx(2 * math.pi - 6.0)

    def test_custom_period(self):
        assert float(sym_rem(3.0, 2.0)) == pytest.approx(-1.0)


class TestCircleGeometry:
    """Exponential and logarithmic maps, distance and metric."""

    def test_attributes(self, circle):
        assert circle.dimension == 1
        assert circle.abbreviation == "S1"
        assert circle.typical_distance == pytest.approx(math.pi / 2)
        assert S1Point(0.0).manifold_dimension == 1

    def test_log_wraps_around(self, circle):
        v = circle.log(S1Point(3.0), S1Point(-3.0))
        assert float(v.value) == pytest.approx(0.283185, abs=1e-6)
        assert v.base == S1Point(3.0)

    def test_exp_wraps_around(self, circle):
        y = circle.exp(S1Point(3.0), S1TVector(0.5))
        assert float(y.value) == pytest.approx(3.5 - 2 * math.pi)

    def test_exp_scales_vector(self, circle):
        y = circle.exp(S1Point(0.0), S1TVector(1.0), 0.25)
        assert float(y.value) == pytest.approx(0.25)

    @settings(max_examples=100, deadline=None)
    @given(a=st.floats(min_value=-math.pi, max_value=3.14), b=st.floats(min_value=-math.pi, max_value=3.14))
    def test_distance_symmetric(self, a, b):
        circle = Circle()
        x, y = S1Point(a), S1Point(b)
        assert float(circle.distance(x, y)) == float(circle.distance(y, x))
        assert float(circle.distance(x, x)) == 0.0

    def test_exp_log_round_trip(self, circle, key):
        k1, k2 = jr.split(key)
        x, y = circle.random_point(k1), circle.random_point(k2)
        assert float(circle.exp(x, circle.log(x, y)).value) == pytest.approx(float(y.value), abs=1e-12)

    def test_metric(self, circle):
        x = S1Point(0.0)
        assert float(circle.dot(x, S1TVector(2.0), S1TVector(-3.0))) == pytest.approx(-6.0)
        assert float(circle.norm(x, S1TVector(-2.0))) == pytest.approx(2.0)

    def test_parallel_transport_is_identity(self, circle):
        x, y = S1Point(0.1), S1Point(2.0)
        w = circle.parallel_transport(x, y, S1TVector(0.7, x))
        assert float(w.value) == pytest.approx(0.7)
        assert w.base is y

    @pytest.mark.parametrize("direction,expected", [(-0.3, -1.0), (2.0, 1.0), (0.0, 1.0)])
    def test_tangent_onb(self, circle, direction, expected):
        x = S1Point(0.5)
        basis, kappa = circle.tangent_onb(x, S1TVector(direction, x))
        assert [float(v.value) for v in basis] == [expected]
        assert basis[0].base is x
        np.testing.assert_array_equal(kappa, [0.0])

    def test_tangent_onb_towards_point(self, circle):
        basis, _ = circle.tangent_onb(S1Point(3.0), S1Point(-3.0))
        assert float(basis[0].value) == 1.0

    def test_opposite(self, circle):
        assert float(circle.opposite(S1Point(0.5)).value) == pytest.approx(0.5 - math.pi)

    def test_embed(self, circle):
        np.testing.assert_allclose(circle.embed(S1Point(math.pi / 2)).value, [0.0, 1.0], atol=1e-12)

    def test_add_noise_stays_in_range(self, circle, key):
        y = circle.add_noise(key, S1Point(3.1), 2.0)
        assert circle.validate_point(y)

    def test_zero_sigma_noise(self, circle, key):
        assert float(circle.add_noise(key, S1Point(1.0), 0.0).value) == pytest.approx(1.0)


class TestCircleValidation:
    """Validation of angles."""

    def test_valid_points(self, circle, key):
        assert circle.validate_point(S1Point(-math.pi))
        assert circle.validate_point(circle.random_point(key))

    def test_out_of_range(self, circle):
        with pytest.raises(InvalidPointError) as excinfo:
            circle.validate_point(S1Point(4.0))
        assert excinfo.value.constraint == "angle_range"

    def test_upper_boundary_is_excluded(self, circle):
        with pytest.raises(InvalidPointError):
            circle.validate_point(S1Point(math.pi))

    def test_non_scalar(self, circle):
        with pytest.raises(DimensionMismatchError):
            circle.validate_point(S1Point([0.0, 1.0]))

    def test_tangent(self, circle):
        assert circle.validate_tangent(S1Point(0.0), S1TVector(5.0))
        with pytest.raises(DimensionMismatchError):
            circle.validate_tangent(S1Point(0.0), S1TVector([1.0, 2.0]))
