"""Abstract base classes for Riemannian manifold implementations.

This module defines the core interfaces for Riemannian manifolds, establishing
the contract that concrete manifold implementations must satisfy, together with
the point and tangent vector types the operations act on.
"""

import logging
from collections.abc import Callable
from typing import Any

import jax.numpy as jnp
from jax import tree_util
from jaxtyping import Array, PRNGKeyArray

from ..core.type_system import Scalar
from .errors import IncompatibleTangentSpaceError

logger = logging.getLogger(__name__)


class MPoint:
    """Abstract point on a manifold.

    Points are immutable wrappers around their raw value. Two points compare
    equal when they have the same type and identical values.
    """

    def __init__(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        """The raw value of the point."""
        return self._value

    @property
    def manifold_dimension(self) -> int:
        """Dimension of the manifold the point belongs to."""
        raise NotImplementedError("Subclasses must define the manifold dimension")

    def _values_equal(self, other: "MPoint") -> bool:
        return bool(jnp.shape(self.value) == jnp.shape(other.value) and jnp.array_equal(self.value, other.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MPoint) or type(self) is not type(other):
            return NotImplemented
        return self._values_equal(other)

    __hash__ = None  # type: ignore[assignment]

    def tree_flatten(self):
        """Flatten the point for JAX."""
        return (self._value,), None

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Unflatten the point for JAX without re-running input conversion."""
        point = object.__new__(cls)
        point._value = children[0]
        return point

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value})"


def raw_value(obj: Any) -> Any:
    """Return the raw value of a point or tangent vector, or obj itself for raw values."""
    if isinstance(obj, (MPoint, TVector)):
        return obj.value
    return obj


class TVector:
    """Abstract tangent vector.

    A tangent vector optionally remembers the point whose tangent space it
    belongs to. The base is never owned or modified by the vector; it only
    serves to detect inner products across different tangent spaces. A base of
    ``None`` means unknown and is compatible with every tangent space.
    """

    def __init__(self, value: Any, base: MPoint | None = None) -> None:
        self._value = value
        self._base = base

    @property
    def value(self) -> Any:
        """The raw value of the tangent vector."""
        return self._value

    @property
    def base(self) -> MPoint | None:
        """Base point of the tangent space, or ``None`` if unknown."""
        return self._base

    def with_base(self, base: MPoint | None) -> "TVector":
        """Return the same vector attached to another (or no) base point."""
        return type(self)(self._value, base)

    def _map(self, fn: Callable[[Array], Array]) -> "TVector":
        return type(self)(fn(self._value), self._base)

    def _zip(self, other: "TVector", fn: Callable[[Array, Array], Array]) -> "TVector":
        if not isinstance(other, type(self)):
            return NotImplemented
        base = self._base if self._base is not None else other.base
        return type(self)(fn(self._value, other.value), base)

    def __mul__(self, scalar: Any) -> "TVector":
        return self._map(lambda v: scalar * v)

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> "TVector":
        return self._map(lambda v: v / scalar)

    def __neg__(self) -> "TVector":
        return self._map(lambda v: -v)

    def __add__(self, other: "TVector") -> "TVector":
        return self._zip(other, lambda a, b: a + b)

    def __sub__(self, other: "TVector") -> "TVector":
        return self._zip(other, lambda a, b: a - b)

    def tree_flatten(self):
        """Flatten the tangent vector for JAX.

        Only the value is a leaf. The base is not carried through JAX
        transformations, so mapped or differentiated vectors come back with an
        unknown base instead of a transformed one.
        """
        return (self._value,), None

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Unflatten the tangent vector for JAX without re-running input conversion."""
        vector = object.__new__(cls)
        vector._value = children[0]
        vector._base = None
        return vector

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value})"


def check_tangent_bases(xi: TVector, nu: TVector) -> None:
    """Ensure two tangent vectors may be combined in an inner product.

    Args:
        xi: First tangent vector.
        nu: Second tangent vector.

    Raises:
        IncompatibleTangentSpaceError: If both bases are known and differ.
    """
    first, second = xi.base, nu.base
    if first is None or second is None or first is second:
        return
    if first != second:
        raise IncompatibleTangentSpaceError(
            f"Can not compute the inner product of tangent vectors from different tangent spaces "
            f"(bases {first!r} and {second!r})",
            first_base=first,
            second_base=second,
        )


class Manifold:
    """Abstract base class for Riemannian manifolds.

    This class defines the essential operations required for optimization on
    Riemannian manifolds. A manifold is pluggable into the solvers as soon as it
    implements them; nothing else is required.

    Attributes:
        name: Human readable name of the manifold.
        abbreviation: Short name used in representations of composite manifolds.
    """

    name: str = "Manifold"
    abbreviation: str = "M"

    def exp(self, x: MPoint, v: TVector, t: float = 1.0) -> MPoint:
        """Apply the exponential map to move from point x along tangent vector t*v.

        The exponential map takes a point x on the manifold and a tangent vector v at x,
        and returns the point on the manifold reached by following the geodesic in the
        direction of v for a distance of ||t*v||.

        Args:
            x: Point on the manifold.
            v: Tangent vector at x.
            t: Scaling of the tangent vector.

        Returns:
            The point reached by following the geodesic from x in direction v.
        """
        raise NotImplementedError("Subclasses must implement exponential map")

    def log(self, x: MPoint, y: MPoint) -> TVector:
        """Apply the logarithmic map to find the tangent vector that maps x to y.

        The logarithmic map is the inverse of the exponential map. It takes two points
        x and y on the manifold and returns the tangent vector v at x such that the
        exponential map of v at x gives y.

        Args:
            x: Starting point on the manifold.
            y: Target point on the manifold.

        Returns:
            The tangent vector v at x such that exp(x, v) = y.
        """
        raise NotImplementedError("Subclasses must implement logarithmic map")

    def retr(self, x: MPoint, v: TVector, t: float = 1.0) -> MPoint:
        """Apply a retraction to move from point x along tangent vector t*v.

        The default retraction is the exponential map.
        """
        return self.exp(x, v, t)

    def parallel_transport(self, x: MPoint, y: MPoint, v: TVector) -> TVector:
        """Parallel transport vector v from tangent space at x to tangent space at y.

        Args:
            x: Starting point on the manifold.
            y: Target point on the manifold.
            v: Tangent vector at x to be transported.

        Returns:
            The transported vector in the tangent space at y.
        """
        raise NotImplementedError("Subclasses must implement parallel transport")

    def dot(self, x: MPoint, u: TVector, v: TVector) -> Scalar:
        """Compute the Riemannian inner product between tangent vectors u and v at point x.

        Args:
            x: Point on the manifold.
            u: First tangent vector at x.
            v: Second tangent vector at x.

        Returns:
            The inner product <u, v>_x in the Riemannian metric.

        Raises:
            IncompatibleTangentSpaceError: If u and v have known, different base points.
        """
        check_tangent_bases(u, v)
        return self._inner(x, u, v)

    def _inner(self, x: MPoint, u: TVector, v: TVector) -> Scalar:
        raise NotImplementedError("Subclasses must implement Riemannian inner product")

    def norm(self, x: MPoint, v: TVector) -> Scalar:
        """Compute the norm of tangent vector v at point x."""
        return jnp.sqrt(self.dot(x, v, v))

    def distance(self, x: MPoint, y: MPoint) -> Scalar:
        """Compute the Riemannian distance between points x and y on the manifold.

        Args:
            x: First point on the manifold.
            y: Second point on the manifold.

        Returns:
            The geodesic distance between x and y.
        """
        return self.norm(x, self.log(x, y))

    def egrad_to_rgrad(self, x: MPoint, egrad: Any) -> TVector:
        """Convert a Euclidean gradient to the Riemannian gradient at x.

        Args:
            x: Point on the manifold.
            egrad: Euclidean gradient, either a raw value or the point-shaped
                cotangent returned by ``jax.grad`` of a cost on points.

        Returns:
            The Riemannian gradient in the tangent space at x.
        """
        raise NotImplementedError("Subclasses must implement the gradient conversion")

    def geodesic(self, x: MPoint, y: MPoint, t: float) -> MPoint:
        """Evaluate the geodesic from x (t=0) to y (t=1) at time t."""
        return self.exp(x, self.log(x, y), t)

    def zero_vector(self, x: MPoint) -> TVector:
        """Return the zero vector of the tangent space at x."""
        raise NotImplementedError("Subclasses must implement the zero tangent vector")

    def random_point(self, key: PRNGKeyArray) -> MPoint:
        """Generate a random point on the manifold.

        Args:
            key: JAX PRNG key.
        """
        raise NotImplementedError("Subclasses must implement random point generation")

    def random_tangent(self, key: PRNGKeyArray, x: MPoint) -> TVector:
        """Generate a random tangent vector at point x.

        Args:
            key: JAX PRNG key.
            x: Point on the manifold.
        """
        raise NotImplementedError("Subclasses must implement random tangent generation")

    def validate_point(self, x: MPoint) -> bool:
        """Validate that x is a valid point on the manifold.

        Returns:
            True if x is on the manifold.

        Raises:
            ValidationError: Naming the offending value and the violated constraint.
        """
        raise NotImplementedError("Point validation not implemented")

    def validate_tangent(self, x: MPoint, v: TVector) -> bool:
        """Validate that v is a valid tangent vector at point x.

        Returns:
            True if v is in the tangent space at x.

        Raises:
            ValidationError: Naming the offending value and the violated constraint.
        """
        raise NotImplementedError("Tangent vector validation not implemented")

    @property
    def typical_distance(self) -> float:
        """Characteristic length scale of the manifold, used as default step size scale."""
        raise NotImplementedError("Subclasses must define a typical distance")

    @property
    def dimension(self) -> int:
        """Intrinsic dimension of the manifold."""
        raise NotImplementedError("Subclasses must define manifold dimension")

    def __repr__(self) -> str:
        """String representation of the manifold."""
        return f"{self.__class__.__name__}()"


def manifold_dimension(obj: Manifold | MPoint) -> int:
    """Return the intrinsic dimension of a manifold or of the manifold a point lives on."""
    if isinstance(obj, Manifold):
        return obj.dimension
    if isinstance(obj, MPoint):
        return obj.manifold_dimension
    raise TypeError(f"Expected a Manifold or an MPoint, got {type(obj)}")


def register_pytree(cls):
    """Class decorator registering a point or tangent vector class as a JAX pytree node."""
    tree_util.register_pytree_node_class(cls)
    logger.debug(f"Registered {cls.__name__} as pytree node")
    return cls
