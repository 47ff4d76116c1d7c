"""Implementation of the sphere manifold S^n with its Riemannian geometry.

This module provides operations for optimization on the unit sphere, a fundamental
manifold in Riemannian geometry with applications in directional statistics,
rotation representations, and constrained optimization.
"""

import jax
import jax.numpy as jnp
import jax.random as jr
from jaxtyping import Array, ArrayLike, PRNGKeyArray

from ..core.constants import NumericalConstants
from ..core.type_system import Scalar, as_float_array
from .base import Manifold, MPoint, TVector, raw_value, register_pytree
from .errors import DimensionMismatchError, InvalidPointError, InvalidTangentVectorError

_EPS = NumericalConstants.EPSILON


@register_pytree
class SnPoint(MPoint):
    """A point on the sphere S^n, stored as a unit vector in R^(n+1)."""

    def __init__(self, value: ArrayLike) -> None:
        super().__init__(as_float_array(value))

    @property
    def manifold_dimension(self) -> int:
        return int(self.value.shape[-1]) - 1


@register_pytree
class SnTVector(TVector):
    """A tangent vector to the sphere, stored as a vector in R^(n+1) orthogonal to its base."""

    def __init__(self, value: ArrayLike, base: SnPoint | None = None) -> None:
        super().__init__(as_float_array(value), base)


@jax.jit
def _exp(x: Array, v: Array, t: Array) -> Array:
    length = jnp.linalg.norm(v)
    # Tangent vectors shorter than machine precision leave the point unchanged
    is_small = length < _EPS
    safe_length = jnp.where(is_small, 1.0, length)
    moved = jnp.cos(t * length) * x + jnp.sin(t * length) / safe_length * v
    return jnp.where(is_small, x, moved)


@jax.jit
def _log(x: Array, y: Array) -> Array:
    scp = jnp.clip(jnp.dot(x, y), -1.0, 1.0)
    residual = y - scp * x
    residual_norm = jnp.linalg.norm(residual)
    # Coinciding (and antipodal) points have no well-defined direction
    is_small = residual_norm <= _EPS
    safe_norm = jnp.where(is_small, 1.0, residual_norm)
    return jnp.where(is_small, jnp.zeros_like(x), residual * jnp.arctan2(residual_norm, scp) / safe_norm)


@jax.jit
def _dist(x: Array, y: Array) -> Array:
    # arctan2 stays accurate for nearby points, where arccos(<x, y>) loses half the digits
    scp = jnp.dot(x, y)
    return jnp.arctan2(jnp.linalg.norm(y - scp * x), scp)


@jax.jit
def _transport(x: Array, y: Array, v: Array) -> Array:
    direction = _log(x, y)
    d = jnp.linalg.norm(direction)
    is_small = d < _EPS
    safe_d = jnp.where(is_small, 1.0, d)
    moved = v - jnp.dot(direction, v) / safe_d**2 * (direction + _log(y, x))
    return jnp.where(is_small, v, moved)


@jax.jit
def _proj(x: Array, v: Array) -> Array:
    return v - jnp.dot(x, v) * x


class Sphere(Manifold):
    """Sphere manifold S^n embedded in R^(n+1) with the canonical Riemannian metric.

    The n-dimensional sphere S^n consists of all unit vectors in R^(n+1), i.e.,
    all points x ∈ R^(n+1) such that ||x|| = 1.
    """

    def __init__(self, n: int = 2):
        """Initialize sphere manifold S^n.

        Args:
            n: Dimension of the sphere (default: 2 for S^2 embedded in R^3)

        Raises:
            ValueError: If n < 1 (sphere dimension must be positive)
        """
        if n < 1:
            raise ValueError(f"Sphere dimension must be positive, got {n}")
        self._n = n
        self._ambient_dim = n + 1
        self.name = f"{n}-Sphere"
        self.abbreviation = f"S{n}"

    def proj(self, x: SnPoint, v: ArrayLike) -> SnTVector:
        """Project an ambient vector onto the tangent space of the sphere at point x.

        The tangent space at x consists of all vectors orthogonal to x.
        The projection removes the component of v parallel to x.

        Args:
            x: Point on the sphere (unit vector).
            v: Vector in the ambient space R^(n+1).

        Returns:
            The orthogonal projection of v onto the tangent space at x.
        """
        return SnTVector(_proj(x.value, as_float_array(v)), x)

    def egrad_to_rgrad(self, x: SnPoint, egrad: ArrayLike | SnPoint) -> SnTVector:
        """Convert a Euclidean gradient in R^(n+1) to the Riemannian gradient at x."""
        return self.proj(x, raw_value(egrad))

    def exp(self, x: SnPoint, v: SnTVector, t: float = 1.0) -> SnPoint:
        """Compute the exponential map on the sphere.

        For the sphere, the exponential map corresponds to following a great circle
        in the direction of the tangent vector v. If ||v|| is below machine
        precision, x is returned unchanged.

        Args:
            x: Point on the sphere (unit vector).
            v: Tangent vector at x (orthogonal to x).
            t: Scaling of the tangent vector.

        Returns:
            The point on the sphere reached by following the geodesic from x in direction t*v.
        """
        return SnPoint(_exp(x.value, v.value, jnp.asarray(t, dtype=x.value.dtype)))

    def log(self, x: SnPoint, y: SnPoint) -> SnTVector:
        """Compute the logarithmic map on the sphere.

        For two points x and y on the sphere, this finds the tangent vector v at x
        such that following the geodesic in that direction for distance ||v|| reaches y.
        When the component of y orthogonal to x vanishes numerically, the exact zero
        vector is returned.

        Args:
            x: Starting point on the sphere (unit vector).
            y: Target point on the sphere (unit vector).

        Returns:
            The tangent vector at x that points toward y along the geodesic.
        """
        return SnTVector(_log(x.value, y.value), x)

    def retr(self, x: SnPoint, v: SnTVector, t: float = 1.0) -> SnPoint:
        """Compute the retraction on the sphere by normalization of x + t*v."""
        y = x.value + t * v.value
        return SnPoint(y / jnp.linalg.norm(y))

    def parallel_transport(self, x: SnPoint, y: SnPoint, v: SnTVector) -> SnTVector:
        """Parallel transport on the sphere from x to y along the connecting geodesic.

        Parallel transport preserves the inner product and the norm of the vector.

        Args:
            x: Starting point on the sphere (unit vector).
            y: Target point on the sphere (unit vector).
            v: Tangent vector at x to be transported.

        Returns:
            The transported vector in the tangent space at y.
        """
        return SnTVector(_transport(x.value, y.value, v.value), y)

    def _inner(self, x: SnPoint, u: SnTVector, v: SnTVector) -> Scalar:
        # The metric is the Euclidean inner product restricted to the tangent space
        return jnp.dot(u.value, v.value)

    def norm(self, x: SnPoint, v: SnTVector) -> Scalar:
        """Compute the norm of a tangent vector, the Euclidean norm of its value."""
        return jnp.linalg.norm(v.value)

    def distance(self, x: SnPoint, y: SnPoint) -> Scalar:
        """Compute the geodesic distance between points on the sphere.

        The geodesic distance is the arc length of the great circle connecting
        x and y, i.e. the angle between them.
        """
        return _dist(x.value, y.value)

    def zero_vector(self, x: SnPoint) -> SnTVector:
        return SnTVector(jnp.zeros_like(x.value), x)

    def tangent_onb(self, x: SnPoint, direction: SnTVector | SnPoint) -> tuple[list[SnTVector], Array]:
        """Compute an orthonormal basis of the tangent space at x adapted to a direction.

        The first basis vector is the normalized direction ξ, or ``log(x, y)`` if a
        point y is given. The eigenvalues κ of the curvature operator
        Ξ ↦ R(Ξ, ξ)ξ are 0 for the first basis vector and 1 for all others. A zero
        direction yields an arbitrary orthonormal basis.

        Args:
            x: Point on the sphere.
            direction: Tangent vector at x, or a point y on the sphere.

        Returns:
            The pair (basis, κ) of n tangent vectors at x and their eigenvalues.
        """
        if isinstance(direction, SnPoint):
            direction = self.log(x, direction)
        columns = jnp.column_stack([x.value, direction.value, jnp.eye(self._ambient_dim, dtype=x.value.dtype)])
        q, _ = jnp.linalg.qr(columns)
        # QR fixes the columns only up to sign; align the first two with x and the direction
        signs = jnp.sign(jnp.array([jnp.dot(q[:, 0], x.value), jnp.dot(q[:, 1], direction.value)]))
        signs = jnp.where(signs == 0, 1.0, signs)
        q = q.at[:, :2].multiply(signs)
        basis = [SnTVector(q[:, i], x) for i in range(1, self._ambient_dim)]
        kappa = jnp.concatenate([jnp.zeros(1), jnp.ones(self._n - 1)])
        return basis, kappa

    def random_point(self, key: PRNGKeyArray) -> SnPoint:
        """Generate a random point on the sphere.

        Points are sampled uniformly from the sphere using the standard normal
        distribution in the ambient space followed by normalization.
        """
        samples = jr.normal(key, (self._ambient_dim,))
        return SnPoint(samples / jnp.linalg.norm(samples))

    def random_tangent(self, key: PRNGKeyArray, x: SnPoint) -> SnTVector:
        """Generate a random tangent vector at point x.

        Tangent vectors are sampled from a normal distribution in the ambient
        space and then projected onto the tangent space at x.
        """
        return self.proj(x, jr.normal(key, x.value.shape))

    def _check_shape(self, value: Array, what: str) -> None:
        if value.shape != (self._ambient_dim,):
            raise DimensionMismatchError(
                f"The {what} {value} does not live in R^{self._ambient_dim}",
                expected=(self._ambient_dim,),
                actual=value.shape,
                value=value,
            )

    def validate_point(self, x: SnPoint, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> bool:
        """Validate that x is a unit vector of length n+1."""
        self._check_shape(x.value, "point")
        norm = float(jnp.linalg.norm(x.value))
        if abs(norm - 1.0) > atol:
            raise InvalidPointError(
                f"The point {x} is not on the {self.name}, its norm {norm} is not 1",
                value=x,
                constraint="unit_norm",
            )
        return True

    def validate_tangent(
        self, x: SnPoint, v: SnTVector, atol: float = NumericalConstants.VALIDATION_TOLERANCE
    ) -> bool:
        """Validate that v is orthogonal to the point x."""
        self.validate_point(x, atol)
        self._check_shape(v.value, "tangent vector")
        orthogonality_error = float(jnp.abs(jnp.dot(x.value, v.value)))
        if orthogonality_error > atol:
            raise InvalidTangentVectorError(
                f"The tangent vector {v} is not orthogonal to {x}, inner product {orthogonality_error}",
                value=v,
                constraint="orthogonality",
            )
        return True

    @property
    def typical_distance(self) -> float:
        """Typical distance on the sphere, half its circumference: π."""
        return float(jnp.pi)

    @property
    def dimension(self) -> int:
        """Dimension of the sphere (n for S^n)."""
        return self._n

    @property
    def ambient_dimension(self) -> int:
        """Ambient space dimension (n+1 for S^n)."""
        return self._ambient_dim

    def __repr__(self) -> str:
        return f"Sphere(n={self._n})"
