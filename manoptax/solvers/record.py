"""Record observers collecting quantities of a solver run.

A record action is called by the engine with the problem, the options and the
iteration number. For iterations > 0 it appends its quantity to
``recorded_values``; a call with iteration <= 0 resets the values, so one
action can be reused over several independent runs.
"""

import dataclasses
from typing import Any

from ..problems.base import Problem
from .options import Options


class RecordAction:
    """Base class of record actions.

    Attributes:
        name: Key of the recorded values in the trace of a run.
        recorded_values: Values recorded since the last reset.
    """

    name = "value"

    def __init__(self) -> None:
        self.recorded_values: list[Any] = []

    def value(self, problem: Problem, options: Options) -> Any:
        """Return the quantity to record for the current state."""
        raise NotImplementedError("Subclasses must implement value")

    def record_or_reset(self, value: Any, iteration: int) -> None:
        """Append value for positive iterations, clear the values otherwise."""
        if iteration > 0:
            self.recorded_values.append(value)
        else:
            self.recorded_values = []

    def __call__(self, problem: Problem, options: Options, iteration: int) -> None:
        value = self.value(problem, options) if iteration > 0 else None
        self.record_or_reset(value, iteration)

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None:
        """Hook called once when the run stops."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RecordIteration(RecordAction):
    """Record the iteration numbers."""

    name = "iteration"

    def __call__(self, problem: Problem, options: Options, iteration: int) -> None:
        self.record_or_reset(iteration, iteration)


class RecordIterate(RecordAction):
    """Record the iterates."""

    name = "iterate"

    def value(self, problem: Problem, options: Options) -> Any:
        return options.x


class RecordCost(RecordAction):
    """Record the cost at the iterates."""

    name = "cost"

    def value(self, problem: Problem, options: Options) -> float:
        return float(problem.get_cost(options.x))


class RecordChange(RecordAction):
    """Record the distance between consecutive iterates."""

    name = "change"

    def value(self, problem: Problem, options: Options) -> float:
        return float(problem.manifold.distance(options.x_old, options.x))


class RecordGradient(RecordAction):
    """Record the gradients evaluated in the steps."""

    name = "gradient"

    def value(self, problem: Problem, options: Options) -> Any:
        return getattr(options, "gradient", None)


class RecordGradientNorm(RecordAction):
    """Record the norms of the gradients evaluated in the steps."""

    name = "gradient_norm"

    def value(self, problem: Problem, options: Options) -> float | None:
        gradient = getattr(options, "gradient", None)
        if gradient is None:
            return None
        return float(problem.manifold.norm(options.x_old, gradient))


class RecordStepsize(RecordAction):
    """Record the step sizes (or proximal parameters) of the steps."""

    name = "stepsize"

    def value(self, problem: Problem, options: Options) -> float | None:
        if options.last_stepsize is None:
            return None
        return float(options.last_stepsize)


@dataclasses.dataclass
class RecordTrace:
    """Recorded quantities of one solver run.

    Attributes:
        values: Recorded values per record action, keyed by the action name.
        stop_reason: Human readable reason the run stopped.
        iterations: Number of iterations performed.
    """

    values: dict[str, list[Any]]
    stop_reason: str
    iterations: int

    def __getitem__(self, name: str) -> list[Any]:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    @classmethod
    def from_actions(cls, actions: "tuple[RecordAction, ...]", stop_reason: str, iterations: int) -> "RecordTrace":
        """Collect the values of record actions, numbering repeated names as ``name_2``, ``name_3``, ..."""
        values: dict[str, list[Any]] = {}
        for action in actions:
            key, n = action.name, 1
            while key in values:
                n += 1
                key = f"{action.name}_{n}"
            values[key] = list(action.recorded_values)
        return cls(values, stop_reason, iterations)
