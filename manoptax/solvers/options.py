"""Mutable per-run state of the solvers.

An options object is created at the start of a run, owned exclusively by that
run and updated in place by every solver step. Its final iterate is the result
of the run.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..core.prng import KeyStream
from ..manifolds.base import MPoint, TVector

if TYPE_CHECKING:
    from .eval_order import EvalOrder
    from .stepsize import Stepsize
    from .stopping import StoppingCriterion


class Options:
    """State shared by all solvers.

    Attributes:
        x: Current iterate.
        x_old: Iterate before the last step.
        stopping_criterion: Criterion deciding when the run ends.
        last_stepsize: Step size (or proximal parameter) used in the last step.
    """

    def __init__(self, x0: MPoint, stopping_criterion: "StoppingCriterion") -> None:
        self.x = x0
        self.x_old = x0
        self.stopping_criterion = stopping_criterion
        self.last_stepsize: float | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(x={self.x!r})"


class GradientDescentOptions(Options):
    """State of gradient descent.

    Attributes:
        gradient: Gradient at the iterate the last step started from.
        retraction: Map (x, v) ↦ y used to move along tangent vectors.
        stepsize: Policy computing the step size of every iteration.
    """

    def __init__(
        self,
        x0: MPoint,
        stopping_criterion: "StoppingCriterion",
        stepsize: "Stepsize",
        retraction: Callable[..., MPoint],
    ) -> None:
        super().__init__(x0, stopping_criterion)
        self.gradient: TVector | None = None
        self.stepsize = stepsize
        self.retraction = retraction


class CyclicProximalPointOptions(Options):
    """State of the cyclic proximal point algorithm.

    Attributes:
        lam: Sequence i ↦ λᵢ of proximal parameters.
        evaluation_order: Policy ordering the proximal maps in every cycle.
        order: Current 1-based evaluation order of the proximal maps.
        keys: Random key source for stochastic evaluation orders.
    """

    def __init__(
        self,
        x0: MPoint,
        stopping_criterion: "StoppingCriterion",
        lam: Callable[[int], Any],
        evaluation_order: "EvalOrder",
        keys: KeyStream,
    ) -> None:
        super().__init__(x0, stopping_criterion)
        self.lam = lam
        self.evaluation_order = evaluation_order
        self.order: tuple[int, ...] = ()
        self.keys = keys
