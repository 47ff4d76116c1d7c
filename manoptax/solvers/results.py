"""Result of a run of the solver engine."""

import dataclasses
from typing import Any

from .record import RecordTrace


@dataclasses.dataclass
class SolverResult:
    """Outcome of a solver run.

    Attributes:
        x: Final iterate.
        iterations: Number of iterations performed.
        stop_reason: Human readable reason reported by the stopping criterion.
        record: Recorded trace of the run, ``None`` without record actions.
    """

    x: Any
    iterations: int
    stop_reason: str
    record: RecordTrace | None = None

    @property
    def niter(self) -> int:
        """Alias for iterations."""
        return self.iterations

    def output(self) -> Any:
        """Return ``x``, or the pair ``(x, record)`` when the run was recorded."""
        if self.record is None:
            return self.x
        return self.x, self.record
