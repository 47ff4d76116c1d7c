"""Debug observers printing the progress of a solver run.

Debug actions are called by the engine with the problem, the options and the
iteration number: once at iteration 0 before the first step, after every step
and, through ``finalize``, once when the run stops. They only read the options.
Their text is emitted through ``print_fn``, by default the ``manoptax.debug``
logger at INFO level.
"""

import logging
from collections.abc import Callable

from ..problems.base import Problem
from .options import Options

debug_logger = logging.getLogger("manoptax.debug")


class DebugAction:
    """Base class of debug actions.

    Args:
        prefix: Text put in front of the formatted value.
        print_fn: Function receiving the text of every call that produces output.
    """

    default_prefix = ""

    def __init__(self, prefix: str | None = None, print_fn: Callable[[str], None] | None = None) -> None:
        self.prefix = self.default_prefix if prefix is None else prefix
        self.print_fn = debug_logger.info if print_fn is None else print_fn

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        """Return the text for this call, or an empty string for no output."""
        raise NotImplementedError("Subclasses must implement format")

    def __call__(self, problem: Problem, options: Options, iteration: int) -> None:
        text = self.format(problem, options, iteration)
        if text:
            self.print_fn(text)

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None:
        """Hook called once when the run stops."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(prefix={self.prefix!r})"


class DebugIteration(DebugAction):
    """Print the iteration number."""

    default_prefix = "# "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration <= 0:
            return ""
        return f"{self.prefix}{iteration}"


class DebugIterate(DebugAction):
    """Print the current iterate."""

    default_prefix = "x: "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration <= 0:
            return ""
        return f"{self.prefix}{options.x!r}"


class DebugCost(DebugAction):
    """Print the cost at the current iterate."""

    default_prefix = "F(x): "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration <= 0:
            return ""
        return f"{self.prefix}{float(problem.get_cost(options.x))}"


class DebugChange(DebugAction):
    """Print the distance between the last two iterates."""

    default_prefix = "Last Change: "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration <= 0:
            return ""
        return f"{self.prefix}{float(problem.manifold.distance(options.x_old, options.x))}"


class DebugGradient(DebugAction):
    """Print the gradient evaluated in the last step."""

    default_prefix = "Gradient: "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        gradient = getattr(options, "gradient", None)
        if iteration <= 0 or gradient is None:
            return ""
        return f"{self.prefix}{gradient!r}"


class DebugGradientNorm(DebugAction):
    """Print the norm of the gradient evaluated in the last step."""

    default_prefix = "Norm of the Gradient: "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        gradient = getattr(options, "gradient", None)
        if iteration <= 0 or gradient is None:
            return ""
        return f"{self.prefix}{float(problem.manifold.norm(options.x_old, gradient))}"


class DebugStepsize(DebugAction):
    """Print the step size (or proximal parameter) used in the last step."""

    default_prefix = "s: "

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration <= 0 or options.last_stepsize is None:
            return ""
        return f"{self.prefix}{float(options.last_stepsize)}"


class DebugStoppingCriterion(DebugAction):
    """Print the reason the run stopped, once at the end of the run."""

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        return ""

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None:
        reason = options.stopping_criterion.reason
        if reason:
            self.print_fn(f"{self.prefix}{reason}")


class DebugGroup(DebugAction):
    """Print the output of several actions on one line.

    Args:
        actions: Actions whose output is joined.
        separator: Text between the outputs of two actions.
        print_fn: Function receiving the joined text.
    """

    def __init__(
        self, *actions: DebugAction, separator: str = " | ", print_fn: Callable[[str], None] | None = None
    ) -> None:
        super().__init__("", print_fn)
        self.actions = actions
        self.separator = separator

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        texts = (action.format(problem, options, iteration) for action in self.actions)
        return self.separator.join(text for text in texts if text)

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None:
        for action in self.actions:
            action.finalize(problem, options, iteration)

    def __repr__(self) -> str:
        return f"DebugGroup({', '.join(repr(a) for a in self.actions)})"


class DebugEvery(DebugAction):
    """Only let every ``every``-th iteration of the wrapped action through.

    Args:
        action: The wrapped action.
        every: Positive period in iterations.
    """

    def __init__(self, action: DebugAction, every: int) -> None:
        if every < 1:
            raise ValueError(f"every must be a positive integer, got {every}")
        super().__init__("", action.print_fn)
        self.action = action
        self.every = every

    def format(self, problem: Problem, options: Options, iteration: int) -> str:
        if iteration % self.every != 0:
            return ""
        return self.action.format(problem, options, iteration)

    def finalize(self, problem: Problem, options: Options, iteration: int) -> None:
        self.action.finalize(problem, options, iteration)

    def __repr__(self) -> str:
        return f"DebugEvery({self.action!r}, every={self.every})"
