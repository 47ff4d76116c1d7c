"""Problems for gradient based algorithms."""

import dataclasses
from collections.abc import Callable
from typing import Any

import jax

from ..manifolds.base import Manifold, MPoint, TVector
from .base import Problem


@dataclasses.dataclass(frozen=True)
class GradientProblem(Problem):
    """Specify a problem for gradient based algorithms.

    Attributes:
        manifold: The manifold M.
        cost: The cost function F: M → R to minimize.
        gradient: The Riemannian gradient ∇F: M → TM of the cost function.
    """

    gradient: Callable[[MPoint], TVector]

    def get_gradient(self, x: MPoint) -> TVector:
        """Evaluate the gradient at x."""
        return self.gradient(x)

    @classmethod
    def from_cost(cls, manifold: Manifold, cost: Callable[[MPoint], Any]) -> "GradientProblem":
        """Build a problem whose gradient is derived from the cost by automatic differentiation.

        The cost has to be written with ``jax.numpy`` operations on the point values.
        Its Euclidean gradient is converted to the Riemannian gradient by the
        manifold's ``egrad_to_rgrad``.

        Args:
            manifold: The manifold M.
            cost: The cost function F: M → R.

        Returns:
            A GradientProblem with an automatically derived gradient.
        """
        euclidean_gradient = jax.grad(cost)

        def gradient(x: MPoint) -> TVector:
            return manifold.egrad_to_rgrad(x, euclidean_gradient(x))

        return cls(manifold, cost, gradient)
