"""Problem descriptors binding a manifold to a cost and its derivative information."""

from .base import IndexOutOfRangeError, Problem, ProblemError
from .gradient import GradientProblem
from .proximal import ProximalMap, ProximalProblem

__all__ = [
    "GradientProblem",
    "IndexOutOfRangeError",
    "Problem",
    "ProblemError",
    "ProximalMap",
    "ProximalProblem",
]
