"""Riemannian steepest descent."""

from collections.abc import Callable, Iterable
from typing import Any

from ..core.constants import SolverDefaults
from ..manifolds.base import Manifold, MPoint, TVector
from ..problems.gradient import GradientProblem
from .debug import DebugAction
from .engine import solve
from .options import GradientDescentOptions
from .record import RecordAction
from .stepsize import ConstantStepsize, Stepsize
from .stopping import StopAfterIteration, StoppingCriterion, StopWhenAny, StopWhenGradientNormLess


def initialize_solver(problem: GradientProblem, options: GradientDescentOptions) -> None:
    options.x_old = options.x
    options.gradient = None
    options.stepsize.reset()


def do_solver_step(problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> None:
    """Move from x along the negative gradient with the step size of this iteration.

    The gradient is stored in the options before the step size policy is asked,
    so line searches can use it.
    """
    x = options.x
    options.gradient = problem.get_gradient(x)
    stepsize = options.stepsize(problem, options, iteration)
    options.last_stepsize = stepsize
    options.x_old = x
    options.x = options.retraction(x, -stepsize * options.gradient)


def default_stopping_criterion() -> StoppingCriterion:
    return StopWhenAny(
        StopAfterIteration(SolverDefaults.GRADIENT_MAX_ITERATIONS),
        StopWhenGradientNormLess(SolverDefaults.GRADIENT_TOLERANCE),
    )


def steepest_descent(
    manifold: Manifold,
    cost: Callable[[MPoint], Any],
    gradient: Callable[[MPoint], TVector] | None,
    x0: MPoint,
    *,
    stepsize: Stepsize | None = None,
    retraction: Callable[[MPoint, TVector], MPoint] | None = None,
    stopping_criterion: StoppingCriterion | None = None,
    debug: DebugAction | Iterable[DebugAction] | None = None,
    record: RecordAction | Iterable[RecordAction] | None = None,
):
    """Minimize a cost with Riemannian gradient descent.

    Every iteration evaluates the gradient ∇F(x), asks the step size policy for
    a step size s and moves to ``retraction(x, -s∇F(x))``.

    Args:
        manifold: The manifold M.
        cost: The cost function F: M → R.
        gradient: The Riemannian gradient of F. If ``None``, it is derived from the
            cost by automatic differentiation.
        x0: Initial point.
        stepsize: Step size policy, by default ``ConstantStepsize(1.0)``.
        retraction: Map (x, v) ↦ y, by default the exponential map of the manifold.
        stopping_criterion: By default stop after 200 iterations or when the
            gradient norm is less than 1e-8.
        debug: Debug actions printing the progress.
        record: Record actions collecting a trace of the run.

    Returns:
        The final iterate, or the pair ``(x, trace)`` if record actions were given.
    """
    if gradient is None:
        problem = GradientProblem.from_cost(manifold, cost)
    else:
        problem = GradientProblem(manifold, cost, gradient)
    options = GradientDescentOptions(
        x0,
        default_stopping_criterion() if stopping_criterion is None else stopping_criterion,
        ConstantStepsize(SolverDefaults.STEPSIZE) if stepsize is None else stepsize,
        manifold.exp if retraction is None else retraction,
    )
    result = solve(problem, options, initialize_solver, do_solver_step, debug, record)
    return result.output()
