"""Riemannian manifold implementations for optimization."""

from .base import Manifold, MPoint, TVector, check_tangent_bases, manifold_dimension
from .circle import Circle, S1Point, S1TVector, sym_rem
from .errors import (
    DimensionMismatchError,
    IncompatibleTangentSpaceError,
    InvalidPointError,
    InvalidTangentVectorError,
    ManifoldError,
    ValidationError,
)
from .product import Product, ProductPoint, ProductTVector
from .sphere import SnPoint, SnTVector, Sphere


def create_sphere(n: int = 2) -> Sphere:
    """Create a sphere manifold S^n with dimension validation.

    Args:
        n: The dimension of the sphere (default: 2 for S^2)

    Returns:
        Sphere: A sphere manifold instance

    Raises:
        ValueError: If dimension is not a positive integer
        TypeError: If n is not an integer

    Examples:
        >>> sphere = create_sphere(3)  # Creates S^3
        >>> sphere = create_sphere()   # Creates S^2 (default)
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"Sphere dimension must be an integer, got {type(n)}")
    if n <= 0:
        raise ValueError(f"Sphere dimension must be positive, got {n}")
    return Sphere(n=n)


def create_circle() -> Circle:
    """Create the circle S^1 represented by angles in [-π, π)."""
    return Circle()


def create_product(*manifolds: Manifold) -> Product:
    """Create a product manifold from its component manifolds.

    Args:
        *manifolds: Component manifolds, in order.

    Returns:
        Product: The product manifold M₁ x M₂ x ... x Mₖ

    Raises:
        ValueError: If no manifold is given
        TypeError: If a component is not a Manifold

    Examples:
        >>> product = create_product(create_sphere(2), create_circle())
        >>> product.dimension
        3
    """
    return Product(manifolds)


__all__ = [
    "Circle",
    "DimensionMismatchError",
    "IncompatibleTangentSpaceError",
    "InvalidPointError",
    "InvalidTangentVectorError",
    "MPoint",
    "Manifold",
    "ManifoldError",
    "Product",
    "ProductPoint",
    "ProductTVector",
    "S1Point",
    "S1TVector",
    "SnPoint",
    "SnTVector",
    "Sphere",
    "TVector",
    "ValidationError",
    "check_tangent_bases",
    "create_circle",
    "create_product",
    "create_sphere",
    "manifold_dimension",
    "sym_rem",
]
