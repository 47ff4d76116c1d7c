"""Implementation of the circle S^1 represented by angles.

Points are angles in [-π, π) and tangent vectors are real numbers, so all
arithmetic reduces to addition followed by the symmetric remainder modulo 2π.
The same manifold represented by unit vectors in R^2 is ``Sphere(1)``.
"""

import jax
import jax.numpy as jnp
import jax.random as jr
from jaxtyping import Array, ArrayLike, PRNGKeyArray

from ..core.type_system import Scalar, as_float_array
from .base import Manifold, MPoint, TVector, raw_value, register_pytree
from .errors import DimensionMismatchError, InvalidPointError
from .sphere import SnPoint


@jax.jit
def sym_rem(x: ArrayLike, period: ArrayLike = jnp.pi) -> Array:
    """Symmetric remainder of x with respect to the interval [-period, period).

    The remainder uses round-to-nearest (ties to even) instead of floor, i.e.
    ``x - 2T·round(x / 2T)``, so that ``sym_rem(3π) == -π``. The upper boundary
    ``T`` itself is mapped to ``-T``.

    Args:
        x: Real value(s) to reduce.
        period: Half width T of the interval, π by default.

    Returns:
        The reduced value(s) in [-T, T).

    Examples:
        >>> round(float(sym_rem(-6.0)), 6)  # 2π - 6
        0.283185
    """
    x = as_float_array(x)
    full = 2 * period
    remainder = x - full * jnp.round(x / full)
    remainder = jnp.where(remainder >= period, remainder - full, remainder)
    return jnp.where(remainder < -period, remainder + full, remainder)


@register_pytree
class S1Point(MPoint):
    """A point on the circle, represented by an angle in [-π, π)."""

    def __init__(self, value: ArrayLike) -> None:
        super().__init__(as_float_array(value))

    @property
    def manifold_dimension(self) -> int:
        return 1

    def __repr__(self) -> str:
        return f"S1({self.value})"


@register_pytree
class S1TVector(TVector):
    """A tangent vector to the circle, represented by a real value."""

    def __init__(self, value: ArrayLike, base: S1Point | None = None) -> None:
        super().__init__(as_float_array(value), base)

    def __repr__(self) -> str:
        return f"S1T({self.value})"


class Circle(Manifold):
    """The one-dimensional manifold S^1 represented by angles.

    Geodesics wrap around at ±π, the metric is the product of the real values,
    and parallel transport is the identity.
    """

    name = "1-Sphere as angles"
    abbreviation = "S1"

    def exp(self, x: S1Point, v: S1TVector, t: float = 1.0) -> S1Point:
        """Compute the exponential map (x + t*v) reduced to [-π, π)."""
        return S1Point(sym_rem(x.value + t * v.value))

    def log(self, x: S1Point, y: S1Point) -> S1TVector:
        """Compute the logarithmic map, the shortest signed angle (y - x) reduced to [-π, π)."""
        return S1TVector(sym_rem(y.value - x.value), x)

    def distance(self, x: S1Point, y: S1Point) -> Scalar:
        """Compute the distance |(y - x) mod 2π| of two angles."""
        return jnp.abs(sym_rem(y.value - x.value))

    def _inner(self, x: S1Point, u: S1TVector, v: S1TVector) -> Scalar:
        return u.value * v.value

    def norm(self, x: S1Point, v: S1TVector) -> Scalar:
        """Compute the norm of a tangent vector, its absolute value."""
        return jnp.abs(v.value)

    def parallel_transport(self, x: S1Point, y: S1Point, v: S1TVector) -> S1TVector:
        """Parallel transport is the identity in the angle representation."""
        return S1TVector(v.value, y)

    def egrad_to_rgrad(self, x: S1Point, egrad: ArrayLike | S1Point) -> S1TVector:
        """The Euclidean derivative with respect to the angle is the Riemannian gradient."""
        return S1TVector(raw_value(egrad), x)

    def zero_vector(self, x: S1Point) -> S1TVector:
        return S1TVector(jnp.zeros_like(x.value), x)

    def tangent_onb(self, x: S1Point, direction: S1TVector | S1Point) -> tuple[list[S1TVector], Array]:
        """Compute an orthonormal basis of the tangent space at x adapted to a direction.

        The basis is the sign of ξ (or of ``log(x, y)`` if a point y is given),
        or 1 for a zero direction. The circle is flat, so the eigenvalue of the
        curvature operator is 0.
        """
        if isinstance(direction, S1Point):
            direction = self.log(x, direction)
        sign = jnp.sign(direction.value)
        return [S1TVector(jnp.where(sign == 0, 1.0, sign), x)], jnp.zeros(1)

    def opposite(self, x: S1Point) -> S1Point:
        """Return the antipodal point (x + π) reduced to [-π, π)."""
        return S1Point(sym_rem(x.value + jnp.pi))

    def embed(self, x: S1Point) -> SnPoint:
        """Embed the angle as the unit vector (cos x, sin x) on ``Sphere(1)``."""
        return SnPoint(jnp.stack([jnp.cos(x.value), jnp.sin(x.value)]))

    def add_noise(self, key: PRNGKeyArray, x: S1Point, sigma: float) -> S1Point:
        """Add wrapped Gaussian noise with standard deviation sigma to an angle."""
        return S1Point(sym_rem(x.value + sigma * jr.normal(key, x.value.shape)))

    def random_point(self, key: PRNGKeyArray) -> S1Point:
        """Draw an angle uniformly from [-π, π)."""
        return S1Point(jr.uniform(key, (), minval=-jnp.pi, maxval=jnp.pi))

    def random_tangent(self, key: PRNGKeyArray, x: S1Point) -> S1TVector:
        """Draw a tangent vector from the standard normal distribution."""
        return S1TVector(jr.normal(key, ()), x)

    def validate_point(self, x: S1Point) -> bool:
        """Validate that x is a scalar angle within [-π, π)."""
        if jnp.ndim(x.value) != 0:
            raise DimensionMismatchError(
                f"The point {x.value} on the Circle must be a scalar angle", expected=(), actual=jnp.shape(x.value)
            )
        angle = float(x.value)
        if angle < -jnp.pi or angle >= jnp.pi:
            raise InvalidPointError(
                f"The point {x} is out of range for the Circle represented by angles in radians [-π, π)",
                value=x,
                constraint="angle_range",
            )
        return True

    def validate_tangent(self, x: S1Point, v: S1TVector) -> bool:
        """Validate that v is a scalar; every real value is a tangent vector."""
        self.validate_point(x)
        if jnp.ndim(v.value) != 0:
            raise DimensionMismatchError(
                f"The tangent vector {v.value} on the Circle must be a scalar",
                expected=(),
                actual=jnp.shape(v.value),
            )
        return True

    @property
    def typical_distance(self) -> float:
        """Typical distance on the circle: π/2."""
        return float(jnp.pi / 2)

    @property
    def dimension(self) -> int:
        return 1

    def __repr__(self) -> str:
        return "Circle()"
