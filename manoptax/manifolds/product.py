"""Implementation of product manifolds M = M₁ x M₂ x ... x Mₖ.

This module provides the Product class for composing multiple manifolds
into a single product manifold, enabling optimization on composite spaces where
different components may belong to different manifolds.
"""

from collections.abc import Callable, Sequence
from typing import Any

import jax.numpy as jnp
import jax.random as jr
from jaxtyping import Array, PRNGKeyArray

from ..core.type_system import Scalar
from .base import Manifold, MPoint, TVector, raw_value, register_pytree
from .errors import check_component_count


@register_pytree
class ProductPoint(MPoint):
    """A point on a product manifold, an ordered tuple of component points."""

    def __init__(self, components: Sequence[MPoint]) -> None:
        super().__init__(tuple(components))

    @property
    def manifold_dimension(self) -> int:
        return sum(component.manifold_dimension for component in self.value)

    def _values_equal(self, other: MPoint) -> bool:
        return len(self.value) == len(other.value) and all(
            a == b for a, b in zip(self.value, other.value, strict=True)
        )

    def __getitem__(self, index: int) -> MPoint:
        return self.value[index]

    def __len__(self) -> int:
        return len(self.value)

    def __repr__(self) -> str:
        return f"Prod[{', '.join(repr(component) for component in self.value)}]"


@register_pytree
class ProductTVector(TVector):
    """A tangent vector on a product manifold, an ordered tuple of component tangent vectors."""

    def __init__(self, components: Sequence[TVector], base: ProductPoint | None = None) -> None:
        super().__init__(tuple(components), base)

    def _map(self, fn: Callable[[Array], Array]) -> "ProductTVector":
        return ProductTVector(tuple(component._map(fn) for component in self.value), self.base)

    def _zip(self, other: TVector, fn: Callable[[Array, Array], Array]) -> "ProductTVector":
        if not isinstance(other, ProductTVector):
            return NotImplemented
        check_component_count(len(self.value), len(other.value), "second tangent vector", other)
        base = self.base if self.base is not None else other.base
        return ProductTVector(tuple(a._zip(b, fn) for a, b in zip(self.value, other.value, strict=True)), base)

    def __getitem__(self, index: int) -> TVector:
        return self.value[index]

    def __len__(self) -> int:
        return len(self.value)

    def __repr__(self) -> str:
        return f"ProdT[{', '.join(repr(component) for component in self.value)}]"


class Product(Manifold):
    """Product manifold M = M₁ x M₂ x ... x Mₖ.

    A product manifold combines multiple manifolds into a single manifold where
    points are tuples of points from each component manifold, and operations
    are performed component-wise. The metric is the sum of the component metrics.

    For manifolds M₁, M₂, ..., Mₖ with dimensions d₁, d₂, ..., dₖ:
    - The product manifold M = M₁ x M₂ x ... x Mₖ has dimension Σᵢ dᵢ
    - Points are ``ProductPoint`` tuples with one entry per component manifold
    - Distances and norms combine the components as √(Σᵢ dᵢ²)
    """

    name = "Product"

    def __init__(self, manifolds: Sequence[Manifold]):
        """Initialize product manifold from component manifolds.

        Args:
            manifolds: Sequence of component manifolds to combine.

        Raises:
            ValueError: If manifolds is empty.
            TypeError: If any element in manifolds is not a Manifold instance.
        """
        manifolds = tuple(manifolds)
        if not manifolds:
            raise ValueError("Product manifold requires at least one component manifold")

        for i, manifold in enumerate(manifolds):
            if not isinstance(manifold, Manifold):
                raise TypeError(f"Component {i} is not a Manifold instance: {type(manifold)}")

        self.manifolds = manifolds
        self.abbreviation = f"Prod({', '.join(m.abbreviation for m in manifolds)})"

    def _points(self, x: ProductPoint, what: str = "point") -> tuple[MPoint, ...]:
        check_component_count(len(self.manifolds), len(x.value), what, x)
        return x.value

    def _vectors(self, v: ProductTVector, what: str = "tangent vector") -> tuple[TVector, ...]:
        check_component_count(len(self.manifolds), len(v.value), what, v)
        return v.value

    @property
    def dimension(self) -> int:
        """Intrinsic dimension of the product manifold (sum of component dimensions)."""
        return sum(manifold.dimension for manifold in self.manifolds)

    def exp(self, x: ProductPoint, v: ProductTVector, t: float = 1.0) -> ProductPoint:
        """Apply component-wise exponential map on the product manifold.

        For product manifold M = M₁ x M₂ x ... x Mₖ:
        exp_x(tv) = (exp_x₁(tv₁), exp_x₂(tv₂), ..., exp_xₖ(tvₖ))
        """
        return ProductPoint(
            m.exp(xc, vc, t) for m, xc, vc in zip(self.manifolds, self._points(x), self._vectors(v), strict=True)
        )

    def log(self, x: ProductPoint, y: ProductPoint) -> ProductTVector:
        """Apply component-wise logarithmic map on the product manifold.

        For product manifold M = M₁ x M₂ x ... x Mₖ:
        log_x(y) = (log_x₁(y₁), log_x₂(y₂), ..., log_xₖ(yₖ))
        """
        components = (
            m.log(xc, yc) for m, xc, yc in zip(self.manifolds, self._points(x), self._points(y), strict=True)
        )
        return ProductTVector(components, x)

    def retr(self, x: ProductPoint, v: ProductTVector, t: float = 1.0) -> ProductPoint:
        """Apply the component retractions."""
        return ProductPoint(
            m.retr(xc, vc, t) for m, xc, vc in zip(self.manifolds, self._points(x), self._vectors(v), strict=True)
        )

    def _inner(self, x: ProductPoint, u: ProductTVector, v: ProductTVector) -> Scalar:
        """Compute inner product as sum of component inner products.

        For product manifold M = M₁ x M₂ x ... x Mₖ:
        <u, v>_x = Σᵢ <uᵢ, vᵢ>_xᵢ
        """
        total_inner = jnp.array(0.0)
        for m, xc, uc, vc in zip(self.manifolds, self._points(x), self._vectors(u), self._vectors(v), strict=True):
            total_inner = total_inner + m.dot(xc, uc, vc)
        return total_inner

    def norm(self, x: ProductPoint, v: ProductTVector) -> Scalar:
        """Compute the norm as Euclidean composition of component norms."""
        total_sq = jnp.array(0.0)
        for m, xc, vc in zip(self.manifolds, self._points(x), self._vectors(v), strict=True):
            total_sq = total_sq + m.norm(xc, vc) ** 2
        return jnp.sqrt(total_sq)

    def distance(self, x: ProductPoint, y: ProductPoint) -> Scalar:
        """Compute distance as Euclidean composition of component distances.

        For product manifold M = M₁ x M₂ x ... x Mₖ:
        d(x, y) = √(Σᵢ dᵢ(xᵢ, yᵢ)²)
        """
        total_dist_sq = jnp.array(0.0)
        for m, xc, yc in zip(self.manifolds, self._points(x), self._points(y, "second point"), strict=True):
            total_dist_sq = total_dist_sq + m.distance(xc, yc) ** 2
        return jnp.sqrt(total_dist_sq)

    def parallel_transport(self, x: ProductPoint, y: ProductPoint, v: ProductTVector) -> ProductTVector:
        """Apply the component parallel transports."""
        components = (
            m.parallel_transport(xc, yc, vc)
            for m, xc, yc, vc in zip(
                self.manifolds, self._points(x), self._points(y, "second point"), self._vectors(v), strict=True
            )
        )
        return ProductTVector(components, y)

    def egrad_to_rgrad(self, x: ProductPoint, egrad: Any) -> ProductTVector:
        """Convert the component Euclidean gradients to Riemannian gradients."""
        egrads = raw_value(egrad)
        check_component_count(len(self.manifolds), len(egrads), "Euclidean gradient", egrad)
        components = (
            m.egrad_to_rgrad(xc, gc) for m, xc, gc in zip(self.manifolds, self._points(x), egrads, strict=True)
        )
        return ProductTVector(components, x)

    def zero_vector(self, x: ProductPoint) -> ProductTVector:
        components = (m.zero_vector(xc) for m, xc in zip(self.manifolds, self._points(x), strict=True))
        return ProductTVector(components, x)

    def random_point(self, key: PRNGKeyArray) -> ProductPoint:
        """Generate a random point by sampling each component manifold independently."""
        subkeys = jr.split(key, len(self.manifolds))
        return ProductPoint(m.random_point(subkey) for m, subkey in zip(self.manifolds, subkeys, strict=True))

    def random_tangent(self, key: PRNGKeyArray, x: ProductPoint) -> ProductTVector:
        """Generate a random tangent vector by sampling each component tangent space independently."""
        subkeys = jr.split(key, len(self.manifolds))
        components = (
            m.random_tangent(subkey, xc)
            for m, xc, subkey in zip(self.manifolds, self._points(x), subkeys, strict=True)
        )
        return ProductTVector(components, x)

    def validate_point(self, x: ProductPoint) -> bool:
        """Validate the number of components and every component point."""
        for m, xc in zip(self.manifolds, self._points(x), strict=True):
            m.validate_point(xc)
        return True

    def validate_tangent(self, x: ProductPoint, v: ProductTVector) -> bool:
        """Validate that point, tangent vector and manifold list have equal length and valid components."""
        for m, xc, vc in zip(self.manifolds, self._points(x), self._vectors(v), strict=True):
            m.validate_tangent(xc, vc)
        return True

    @property
    def typical_distance(self) -> float:
        """Typical distance √(k · Σᵢ typical_distanceᵢ²) of the k component manifolds."""
        return float(jnp.sqrt(len(self.manifolds) * sum(m.typical_distance**2 for m in self.manifolds)))

    def __repr__(self) -> str:
        """String representation of the product manifold."""
        component_reprs = [repr(manifold) for manifold in self.manifolds]
        return f"Product({' x '.join(component_reprs)})"
