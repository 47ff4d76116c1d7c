"""Tests for the shared solver loop."""

import logging

import pytest

from manoptax.manifolds import Circle, IncompatibleTangentSpaceError, S1Point, S1TVector
from manoptax.problems import Problem
from manoptax.solvers import (
    DebugAction,
    Options,
    RecordAction,
    RecordIteration,
    SolverResult,
    StopAfterIteration,
    solve,
)


class CallLog(DebugAction):
    """Debug action remembering every call."""

    def __init__(self):
        super().__init__(print_fn=lambda text: None)
        self.calls = []

    def format(self, problem, options, iteration):
        self.calls.append(("call", iteration))
        return ""

    def finalize(self, problem, options, iteration):
        self.calls.append(("finalize", iteration))


@pytest.fixture
def circle():
    return Circle()


@pytest.fixture
def problem(circle):
    return Problem(circle, lambda x: circle.distance(x, S1Point(0.0)))


def halve(problem, options, iteration):
    options.x_old = options.x
    options.x = S1Point(options.x.value / 2)


def initialize(problem, options):
    options.x_old = options.x


def test_loop_order(problem):
    observer = CallLog()
    result = solve(problem, Options(S1Point(1.0), StopAfterIteration(3)), initialize, halve, debug=observer)
    assert observer.calls == [("call", 0), ("call", 1), ("call", 2), ("call", 3), ("finalize", 3)]
    assert isinstance(result, SolverResult)
    assert result.iterations == 3
    assert result.niter == 3
    assert float(result.x.value) == pytest.approx(0.125)
    assert result.record is None
    assert result.output() is result.x


def test_zero_iterations(problem):
    x0 = S1Point(1.0)
    result = solve(problem, Options(x0, StopAfterIteration(0)), initialize, halve)
    assert result.x is x0
    assert result.iterations == 0


def test_record_trace(problem):
    record = RecordIteration()
    result = solve(problem, Options(S1Point(1.0), StopAfterIteration(4)), initialize, halve, record=[record])
    assert result.record["iteration"] == [1, 2, 3, 4]
    assert result.record.iterations == 4
    assert "maximal number of iterations" in result.record.stop_reason
    x, trace = result.output()
    assert trace is result.record


def test_record_is_reset_between_runs(problem):
    record = RecordIteration()
    for _ in range(2):
        result = solve(problem, Options(S1Point(1.0), StopAfterIteration(2)), initialize, halve, record=record)
    assert result.record["iteration"] == [1, 2]


def test_errors_propagate(circle, problem):
    def mismatched_step(problem, options, iteration):
        circle.dot(options.x, S1TVector(1.0, S1Point(0.1)), S1TVector(1.0, S1Point(0.2)))

    with pytest.raises(IncompatibleTangentSpaceError):
        solve(problem, Options(S1Point(1.0), StopAfterIteration(5)), initialize, mismatched_step)


def test_stop_is_logged(problem, caplog):
    with caplog.at_level(logging.INFO, logger="manoptax.solvers.engine"):
        solve(problem, Options(S1Point(1.0), StopAfterIteration(2)), initialize, halve)
    assert "Solver stopped after 2 iterations" in caplog.text


def test_observers_do_not_change_the_result(problem):
    class Reader(RecordAction):
        name = "x"

        def value(self, problem, options):
            return options.x

    plain = solve(problem, Options(S1Point(1.0), StopAfterIteration(3)), initialize, halve)
    observed = solve(problem, Options(S1Point(1.0), StopAfterIteration(3)), initialize, halve, record=Reader())
    assert plain.x == observed.x
    assert observed.record["x"][-1] is observed.x
