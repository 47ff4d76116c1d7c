"""Base class and errors of optimization problems on manifolds."""

import dataclasses
from collections.abc import Callable
from typing import Any

from ..manifolds.base import Manifold, MPoint


class ProblemError(Exception):
    """Base exception for errors raised by problem descriptors."""

    pass


class IndexOutOfRangeError(ProblemError, IndexError):
    """Exception for summand indices outside of the valid range [1, m]."""

    def __init__(self, index: Any, size: int):
        """Initialize IndexOutOfRangeError with the offending index and the number of summands."""
        super().__init__(f"Index {index} is out of range, expected an index in [1, {size}]")
        self.index = index
        self.size = size


@dataclasses.dataclass(frozen=True)
class Problem:
    """A manifold together with a cost function to minimize on it.

    Problems are immutable and carry no per-run state, so one problem may be
    reused by several (independent) solver runs.

    Attributes:
        manifold: The manifold M the cost is defined on.
        cost: The cost function F: M → R.
    """

    manifold: Manifold
    cost: Callable[[MPoint], Any]

    def get_cost(self, x: MPoint) -> Any:
        """Evaluate the cost function at x."""
        return self.cost(x)
