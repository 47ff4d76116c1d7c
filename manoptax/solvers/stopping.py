"""Stopping criteria for the solver engine.

A stopping criterion is called at the top of every iteration with the problem,
the options and the number of iterations performed so far, and returns a pair
``(stop, reason)``. The reason is an empty string as long as the run continues.
"""

from ..problems.base import Problem
from .options import Options


class StoppingCriterion:
    """Base class of stopping criteria.

    Attributes:
        reason: Reason reported by the last call that stopped, empty otherwise.
    """

    def __init__(self) -> None:
        self.reason = ""

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        """Decide whether to stop, returning the pair ``(stop, reason)``."""
        raise NotImplementedError("Subclasses must implement the stopping test")

    def __call__(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        stop, reason = self.check(problem, options, iteration)
        self.reason = reason if stop else ""
        return stop, self.reason


class StopAfterIteration(StoppingCriterion):
    """Stop once the number of iterations reaches ``max_iterations``."""

    def __init__(self, max_iterations: int) -> None:
        super().__init__()
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")
        self.max_iterations = max_iterations

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        if iteration >= self.max_iterations:
            return True, f"The algorithm reached its maximal number of iterations ({self.max_iterations})."
        return False, ""

    def __repr__(self) -> str:
        return f"StopAfterIteration({self.max_iterations})"


class StopWhenChangeLess(StoppingCriterion):
    """Stop once the manifold distance between the last two iterates drops below ``tolerance``."""

    def __init__(self, tolerance: float) -> None:
        super().__init__()
        self.tolerance = tolerance

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        if iteration <= 0:
            return False, ""
        change = float(problem.manifold.distance(options.x_old, options.x))
        if change < self.tolerance:
            return True, (
                f"The algorithm performed a step with a change ({change}) less than {self.tolerance}."
            )
        return False, ""

    def __repr__(self) -> str:
        return f"StopWhenChangeLess({self.tolerance})"


class StopWhenGradientNormLess(StoppingCriterion):
    """Stop once the norm of the last evaluated gradient drops below ``tolerance``."""

    def __init__(self, tolerance: float) -> None:
        super().__init__()
        self.tolerance = tolerance

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        gradient = getattr(options, "gradient", None)
        if iteration <= 0 or gradient is None:
            return False, ""
        # The gradient was evaluated at x_old, the start of the last step
        gradient_norm = float(problem.manifold.norm(options.x_old, gradient))
        if gradient_norm < self.tolerance:
            return True, (
                f"The algorithm reached approximately critical point; "
                f"the gradient norm ({gradient_norm}) is less than {self.tolerance}."
            )
        return False, ""

    def __repr__(self) -> str:
        return f"StopWhenGradientNormLess({self.tolerance})"


class StopWhenCostLess(StoppingCriterion):
    """Stop once the cost at the current iterate drops below ``threshold``."""

    def __init__(self, threshold: float) -> None:
        super().__init__()
        self.threshold = threshold

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        if iteration <= 0:
            return False, ""
        cost = float(problem.get_cost(options.x))
        if cost < self.threshold:
            return True, f"The algorithm reached a cost function value ({cost}) less than {self.threshold}."
        return False, ""

    def __repr__(self) -> str:
        return f"StopWhenCostLess({self.threshold})"


class StopWhenAny(StoppingCriterion):
    """Stop as soon as one of the given criteria stops; reasons of all stopping criteria are joined."""

    def __init__(self, *criteria: StoppingCriterion) -> None:
        super().__init__()
        if not criteria:
            raise ValueError("StopWhenAny requires at least one stopping criterion")
        self.criteria = criteria

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        results = [criterion(problem, options, iteration) for criterion in self.criteria]
        reasons = [reason for stop, reason in results if stop]
        return bool(reasons), "\n".join(reasons)

    def __repr__(self) -> str:
        return f"StopWhenAny({', '.join(repr(c) for c in self.criteria)})"


class StopWhenAll(StoppingCriterion):
    """Stop only when all of the given criteria stop."""

    def __init__(self, *criteria: StoppingCriterion) -> None:
        super().__init__()
        if not criteria:
            raise ValueError("StopWhenAll requires at least one stopping criterion")
        self.criteria = criteria

    def check(self, problem: Problem, options: Options, iteration: int) -> tuple[bool, str]:
        results = [criterion(problem, options, iteration) for criterion in self.criteria]
        if all(stop for stop, _ in results):
            return True, "\n".join(reason for _, reason in results)
        return False, ""

    def __repr__(self) -> str:
        return f"StopWhenAll({', '.join(repr(c) for c in self.criteria)})"

