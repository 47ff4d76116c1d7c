"""Cyclic proximal point algorithm.

For a cost F = F₁ + ... + Fₘ every iteration applies the proximal maps of all
summands once, in the order given by the evaluation order policy, with the
proximal parameter λᵢ of iteration i.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from jaxtyping import PRNGKeyArray

from ..core.constants import SolverDefaults
from ..core.prng import KeyStream, as_key_stream
from ..manifolds.base import Manifold, MPoint
from ..problems.proximal import ProximalMap, ProximalProblem
from .debug import DebugAction
from .engine import solve
from .eval_order import EvalOrder, LinearEvalOrder
from .options import CyclicProximalPointOptions
from .record import RecordAction
from .stopping import StopAfterIteration, StoppingCriterion, StopWhenAny, StopWhenChangeLess


def initialize_solver(problem: ProximalProblem, options: CyclicProximalPointOptions) -> None:
    """Reset the last iterate and draw the initial evaluation order."""
    options.x_old = options.x
    count = problem.num_proximal_maps
    options.order = options.evaluation_order.update(count, 0, tuple(range(1, count + 1)), options.keys())


def do_solver_step(problem: ProximalProblem, options: CyclicProximalPointOptions, iteration: int) -> None:
    """Apply one cycle of proximal maps."""
    options.x_old = options.x
    lam = options.lam(iteration)
    options.last_stepsize = lam
    x = options.x
    for k in options.order:
        x = problem.get_proximal_map(lam, x, k)
    options.x = x
    options.order = options.evaluation_order.update(
        problem.num_proximal_maps, iteration, options.order, options.keys()
    )


def default_stopping_criterion() -> StoppingCriterion:
    return StopWhenAny(
        StopAfterIteration(SolverDefaults.MAX_ITERATIONS),
        StopWhenChangeLess(SolverDefaults.CHANGE_TOLERANCE),
    )


def cyclic_proximal_point(
    manifold: Manifold,
    cost: Callable[[MPoint], Any],
    proximal_maps: Sequence[ProximalMap],
    x0: MPoint,
    *,
    evaluation_order: EvalOrder | None = None,
    stopping_criterion: StoppingCriterion | None = None,
    lam: Callable[[int], Any] | None = None,
    key: KeyStream | int | PRNGKeyArray | None = None,
    debug: DebugAction | Iterable[DebugAction] | None = None,
    record: RecordAction | Iterable[RecordAction] | None = None,
):
    """Minimize a sum of functions with the cyclic proximal point algorithm.

    Args:
        manifold: The manifold M.
        cost: The cost function F: M → R, used by cost based observers.
        proximal_maps: Proximal maps (λ, x) ↦ prox_{λFₖ}(x) of the summands of F.
        x0: Initial point.
        evaluation_order: Order of the proximal maps in every cycle, by default
            ``LinearEvalOrder()``.
        stopping_criterion: By default stop after 5000 iterations or when the change
            of the iterate is less than 1e-8.
        lam: Sequence i ↦ λᵢ, square summable but not summable. Defaults to
            ``i ↦ typical_distance / i``.
        key: Seed, PRNG key or ``KeyStream`` for random evaluation orders.
        debug: Debug actions printing the progress.
        record: Record actions collecting a trace of the run.

    Returns:
        The final iterate, or the pair ``(x, trace)`` if record actions were given.
    """
    problem = ProximalProblem(manifold, cost, proximal_maps)
    if lam is None:
        typical_distance = manifold.typical_distance

        def lam(i: int) -> float:
            return typical_distance / i

    options = CyclicProximalPointOptions(
        x0,
        default_stopping_criterion() if stopping_criterion is None else stopping_criterion,
        lam,
        LinearEvalOrder() if evaluation_order is None else evaluation_order,
        as_key_stream(key, SolverDefaults.SEED),
    )
    result = solve(problem, options, initialize_solver, do_solver_step, debug, record)
    return result.output()
