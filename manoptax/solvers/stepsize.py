"""Step size policies for gradient based solvers.

A step size policy is called once per iteration with the problem, the options
and the 1-based iteration number and returns the step size of that iteration.
Policies may keep history between calls, e.g. the last accepted step size of a
line search.
"""

import logging

from ..problems.gradient import GradientProblem
from .options import GradientDescentOptions

logger = logging.getLogger(__name__)


class Stepsize:
    """Base class of step size policies."""

    def __call__(self, problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> float:
        raise NotImplementedError("Subclasses must implement the step size computation")

    def reset(self) -> None:
        """Forget the history of a previous run."""


class ConstantStepsize(Stepsize):
    """The same step size in every iteration."""

    def __init__(self, stepsize: float) -> None:
        if stepsize <= 0:
            raise ValueError(f"Step size must be positive, got {stepsize}")
        self.stepsize = stepsize

    def __call__(self, problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> float:
        return self.stepsize

    def __repr__(self) -> str:
        return f"ConstantStepsize({self.stepsize})"


class DecreasingStepsize(Stepsize):
    """A decreasing step size sequence.

    The step size of iteration i is ``(length - i·subtrahend) · factor^i / i^exponent``.
    With the defaults this is the harmonic sequence 1/i.

    Args:
        length: Initial length.
        factor: Multiplicative decay per iteration.
        subtrahend: Amount subtracted from the length per iteration.
        exponent: Exponent of the polynomial decay.
    """

    def __init__(
        self, length: float = 1.0, factor: float = 1.0, subtrahend: float = 0.0, exponent: float = 1.0
    ) -> None:
        self.length = length
        self.factor = factor
        self.subtrahend = subtrahend
        self.exponent = exponent

    def __call__(self, problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> float:
        i = max(iteration, 1)
        return (self.length - i * self.subtrahend) * self.factor**i / i**self.exponent

    def __repr__(self) -> str:
        return (
            f"DecreasingStepsize(length={self.length}, factor={self.factor}, "
            f"subtrahend={self.subtrahend}, exponent={self.exponent})"
        )


class ArmijoLinesearch(Stepsize):
    """Backtracking line search with the Armijo sufficient decrease condition.

    The step size is multiplied by ``contraction_factor`` until
    ``F(R_x(-s∇F(x))) <= F(x) - sufficient_decrease · s · ||∇F(x)||²``.
    The first search starts at ``initial_stepsize``; later searches start one
    expansion above the last accepted step size, ``last_stepsize / contraction_factor``,
    capped at ``initial_stepsize``. The line search uses the retraction stored in
    the options and evaluates the gradient stored there, so the solver has to
    compute the gradient first.

    Args:
        initial_stepsize: Largest step size, tried first in the first iteration.
        contraction_factor: Factor in (0, 1) shrinking rejected step sizes.
        sufficient_decrease: Armijo constant in (0, 1).
        min_stepsize: Step sizes below this value are accepted without further contraction.
    """

    def __init__(
        self,
        initial_stepsize: float = 1.0,
        contraction_factor: float = 0.95,
        sufficient_decrease: float = 0.1,
        min_stepsize: float = 1e-12,
    ) -> None:
        if not 0 < contraction_factor < 1:
            raise ValueError(f"contraction_factor must be in (0, 1), got {contraction_factor}")
        if not 0 < sufficient_decrease < 1:
            raise ValueError(f"sufficient_decrease must be in (0, 1), got {sufficient_decrease}")
        self.initial_stepsize = initial_stepsize
        self.contraction_factor = contraction_factor
        self.sufficient_decrease = sufficient_decrease
        self.min_stepsize = min_stepsize
        self.last_stepsize = initial_stepsize

    def reset(self) -> None:
        self.last_stepsize = self.initial_stepsize

    def __call__(self, problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> float:
        manifold = problem.manifold
        x, gradient = options.x, options.gradient
        if gradient is None:
            raise ValueError("ArmijoLinesearch requires the gradient at the current iterate")
        cost = float(problem.get_cost(x))
        gradient_norm_sq = float(manifold.norm(x, gradient)) ** 2
        stepsize = min(self.initial_stepsize, self.last_stepsize / self.contraction_factor)
        while stepsize > self.min_stepsize:
            candidate = options.retraction(x, -stepsize * gradient)
            if float(problem.get_cost(candidate)) <= cost - self.sufficient_decrease * stepsize * gradient_norm_sq:
                break
            stepsize *= self.contraction_factor
        else:
            logger.warning(f"Armijo line search reached the minimal step size {self.min_stepsize}")
        self.last_stepsize = stepsize
        return stepsize

    def __repr__(self) -> str:
        return (
            f"ArmijoLinesearch(initial_stepsize={self.initial_stepsize}, "
            f"contraction_factor={self.contraction_factor}, sufficient_decrease={self.sufficient_decrease})"
        )
