"""Problems for proximal point algorithms."""

import dataclasses
import operator
from collections.abc import Callable, Sequence
from typing import Any

from ..manifolds.base import Manifold, MPoint
from .base import IndexOutOfRangeError, Problem

ProximalMap = Callable[[float, MPoint], MPoint]


@dataclasses.dataclass(frozen=True, init=False)
class ProximalProblem(Problem):
    """Specify a problem for proximal point algorithms.

    The cost is a sum F = F₁ + ... + Fₘ and the problem holds the proximal map
    (λ, x) ↦ prox_{λFₖ}(x) of every summand.

    Attributes:
        manifold: The manifold M.
        cost: The cost function F: M → R to minimize.
        proximal_maps: The proximal maps of the summands, indexed 1..m.
    """

    proximal_maps: tuple[ProximalMap, ...]

    def __init__(self, manifold: Manifold, cost: Callable[[MPoint], Any], proximal_maps: Sequence[ProximalMap]):
        object.__setattr__(self, "manifold", manifold)
        object.__setattr__(self, "cost", cost)
        object.__setattr__(self, "proximal_maps", tuple(proximal_maps))

    @property
    def num_proximal_maps(self) -> int:
        """Number m of proximal maps."""
        return len(self.proximal_maps)

    def get_proximal_map(self, lam: float, x: MPoint, k: int) -> MPoint:
        """Evaluate the k-th proximal map with parameter lam at x.

        Args:
            lam: Parameter λ of the proximal map.
            x: Point to evaluate the proximal map at.
            k: Index of the summand, 1-based.

        Returns:
            The point prox_{λFₖ}(x).

        Raises:
            IndexOutOfRangeError: If k is not within [1, m].
        """
        try:
            index = operator.index(k)
        except TypeError:
            raise IndexOutOfRangeError(k, self.num_proximal_maps) from None
        if not 1 <= index <= self.num_proximal_maps:
            raise IndexOutOfRangeError(k, self.num_proximal_maps)
        return self.proximal_maps[index - 1](lam, x)
