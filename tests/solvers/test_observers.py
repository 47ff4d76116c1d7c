"""Tests for debug and record observers."""

import logging

import pytest

from manoptax.manifolds import Circle, S1Point, S1TVector
from manoptax.problems import GradientProblem
from manoptax.solvers import (
    ConstantStepsize,
    DebugChange,
    DebugCost,
    DebugEvery,
    DebugGradient,
    DebugGradientNorm,
    DebugGroup,
    DebugIterate,
    DebugIteration,
    DebugStepsize,
    DebugStoppingCriterion,
    GradientDescentOptions,
    RecordChange,
    RecordCost,
    RecordGradient,
    RecordGradientNorm,
    RecordIterate,
    RecordIteration,
    RecordStepsize,
    RecordTrace,
    StopAfterIteration,
)


@pytest.fixture
def circle():
    return Circle()


@pytest.fixture
def problem(circle):
    target = S1Point(0.0)
    return GradientProblem(
        circle,
        lambda x: circle.distance(x, target) ** 2,
        lambda x: -2.0 * circle.log(x, target),
    )


@pytest.fixture
def options(circle):
    options = GradientDescentOptions(S1Point(0.5), StopAfterIteration(1), ConstantStepsize(0.25), circle.exp)
    options.x_old = S1Point(1.0)
    options.gradient = S1TVector(2.0, options.x_old)
    options.last_stepsize = 0.25
    return options


class TestDebugActions:
    """Formatting and emission of debug output."""

    @pytest.mark.parametrize(
        "action,expected",
        [
            (DebugIteration(), "# 3"),
            (DebugIterate(), "x: S1(0.5)"),
            (DebugCost(), "F(x): 0.25"),
            (DebugChange(), "Last Change: 0.5"),
            (DebugGradient(), "Gradient: S1T(2.0)"),
            (DebugGradientNorm(), "Norm of the Gradient: 2.0"),
            (DebugStepsize(), "s: 0.25"),
        ],
    )
    def test_format(self, problem, options, action, expected):
        assert action.format(problem, options, 3) == expected

    @pytest.mark.parametrize(
        "action",
        [DebugIteration(), DebugIterate(), DebugCost(), DebugChange(), DebugGradientNorm(), DebugStepsize()],
    )
    def test_no_output_before_first_iteration(self, problem, options, action):
        lines = []
        action.print_fn = lines.append
        action(problem, options, 0)
        assert lines == []

    def test_print_fn_and_prefix(self, problem, options):
        lines = []
        action = DebugIteration(prefix="it ", print_fn=lines.append)
        action(problem, options, 1)
        action(problem, options, 2)
        assert lines == ["it 1", "it 2"]

    def test_default_emitter_is_logging(self, problem, options, caplog):
        with caplog.at_level(logging.INFO, logger="manoptax.debug"):
            DebugIteration()(problem, options, 7)
        assert "# 7" in caplog.text

    def test_stopping_criterion_reports_at_finalize(self, problem, options):
        lines = []
        action = DebugStoppingCriterion(print_fn=lines.append)
        options.stopping_criterion(problem, options, 1)
        action(problem, options, 1)
        assert lines == []
        action.finalize(problem, options, 1)
        assert len(lines) == 1
        assert "maximal number of iterations" in lines[0]

    def test_group(self, problem, options):
        lines = []
        group = DebugGroup(DebugIteration(), DebugStepsize(), print_fn=lines.append)
        group(problem, options, 0)
        group(problem, options, 2)
        assert lines == ["# 2 | s: 0.25"]

    def test_every(self, problem, options):
        lines = []
        action = DebugEvery(DebugIteration(print_fn=lines.append), 2)
        for i in range(0, 6):
            action(problem, options, i)
        assert lines == ["# 2", "# 4"]
        with pytest.raises(ValueError):
            DebugEvery(DebugIteration(), 0)


class TestRecordActions:
    """Appending and resetting recorded values."""

    def test_values(self, problem, options):
        actions = [
            RecordIteration(),
            RecordIterate(),
            RecordCost(),
            RecordChange(),
            RecordGradient(),
            RecordGradientNorm(),
            RecordStepsize(),
        ]
        for action in actions:
            action(problem, options, 1)
        values = [action.recorded_values[0] for action in actions]
        assert values[0] == 1
        assert values[1] is options.x
        assert values[2] == pytest.approx(0.25)
        assert values[3] == pytest.approx(0.5)
        assert values[4] is options.gradient
        assert values[5] == pytest.approx(2.0)
        assert values[6] == pytest.approx(0.25)

    def test_nonpositive_iteration_resets(self, problem, options):
        action = RecordIteration()
        for i in (1, 2, 3):
            action(problem, options, i)
        assert action.recorded_values == [1, 2, 3]
        action(problem, options, 0)
        assert action.recorded_values == []
        action(problem, options, 1)
        assert action.recorded_values == [1]

    def test_record_or_reset(self):
        action = RecordCost()
        action.record_or_reset(1.5, 2)
        action.record_or_reset(0.5, -1)
        assert action.recorded_values == []

    def test_gradient_norm_without_gradient(self, problem, options):
        options.gradient = None
        action = RecordGradientNorm()
        action(problem, options, 1)
        assert action.recorded_values == [None]

    def test_trace_numbers_repeated_names(self):
        first, second = RecordCost(), RecordCost()
        first.recorded_values = [1.0]
        second.recorded_values = [2.0]
        trace = RecordTrace.from_actions((first, second, RecordIteration()), "done", 1)
        assert trace["cost"] == [1.0]
        assert trace["cost_2"] == [2.0]
        assert "iteration" in trace
        assert trace.stop_reason == "done"
