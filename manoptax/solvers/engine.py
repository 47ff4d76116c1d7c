"""The iterate-until-stop loop shared by all solvers.

A solver is given by two functions acting on its options: ``initialize``
prepares the options for the run and ``step`` performs one iteration in place.
The engine checks the stopping criterion at the top of every iteration and
notifies the debug and record observers after every step, including a priming
call at iteration 0 and a final call when the run stops.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from ..problems.base import Problem
from .debug import DebugAction
from .options import Options
from .record import RecordAction, RecordTrace
from .results import SolverResult

logger = logging.getLogger(__name__)


class Observer(Protocol):
    """Interface of debug and record actions."""

    def __call__(self, problem: Problem, options: Options, iteration: int) -> None: ...

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None: ...


def _as_tuple(actions) -> tuple:
    if actions is None:
        return ()
    if isinstance(actions, (DebugAction, RecordAction)):
        return (actions,)
    return tuple(actions)


def solve(
    problem: Problem,
    options: Options,
    initialize: Callable[[Problem, Options], None],
    step: Callable[[Problem, Options, int], None],
    debug: DebugAction | Iterable[DebugAction] | None = (),
    record: RecordAction | Iterable[RecordAction] | None = (),
) -> SolverResult:
    """Run a solver until its stopping criterion fires.

    Args:
        problem: The problem to solve, only read during the run.
        options: The options of the run, updated in place.
        initialize: Prepares the options before the first iteration.
        step: Performs iteration i, called with i = 1, 2, ...
        debug: Debug actions observing the run.
        record: Record actions observing the run.

    Returns:
        SolverResult with the final iterate, the number of iterations, the stop
        reason and, if record actions were given, the recorded trace.
    """
    debug_actions = _as_tuple(debug)
    record_actions = _as_tuple(record)
    observers: tuple[Observer, ...] = (*debug_actions, *record_actions)

    logger.debug(f"Starting {options.__class__.__name__} run on {problem.manifold!r}")
    initialize(problem, options)
    iteration = 0
    for observer in observers:
        observer(problem, options, iteration)

    while True:
        stop, reason = options.stopping_criterion(problem, options, iteration)
        if stop:
            break
        iteration += 1
        step(problem, options, iteration)
        for observer in observers:
            observer(problem, options, iteration)

    for observer in observers:
        observer.finalize(problem, options, iteration)
    logger.info(f"Solver stopped after {iteration} iterations: {reason}")

    trace = RecordTrace.from_actions(record_actions, reason, iteration) if record_actions else None
    return SolverResult(options.x, iteration, reason, trace)
