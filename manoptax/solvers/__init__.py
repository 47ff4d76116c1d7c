"""Solvers, their options and the policies and observers configuring them."""

from .cyclic_proximal_point import cyclic_proximal_point
from .debug import (
    DebugAction,
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
)
from .engine import solve
from .eval_order import EvalOrder, FixedRandomEvalOrder, LinearEvalOrder, RandomEvalOrder
from .gradient_descent import steepest_descent
from .options import CyclicProximalPointOptions, GradientDescentOptions, Options
from .record import (
    RecordAction,
    RecordChange,
    RecordCost,
    RecordGradient,
    RecordGradientNorm,
    RecordIterate,
    RecordIteration,
    RecordStepsize,
    RecordTrace,
)
from .results import SolverResult
from .stepsize import ArmijoLinesearch, ConstantStepsize, DecreasingStepsize, Stepsize
from .stopping import (
    StopAfterIteration,
    StoppingCriterion,
    StopWhenAll,
    StopWhenAny,
    StopWhenChangeLess,
    StopWhenCostLess,
    StopWhenGradientNormLess,
)

__all__ = [
    "ArmijoLinesearch",
    "ConstantStepsize",
    "CyclicProximalPointOptions",
    "DebugAction",
    "DebugChange",
    "DebugCost",
    "DebugEvery",
    "DebugGradient",
    "DebugGradientNorm",
    "DebugGroup",
    "DebugIterate",
    "DebugIteration",
    "DebugStepsize",
    "DebugStoppingCriterion",
    "DecreasingStepsize",
    "EvalOrder",
    "FixedRandomEvalOrder",
    "GradientDescentOptions",
    "LinearEvalOrder",
    "Options",
    "RandomEvalOrder",
    "RecordAction",
    "RecordChange",
    "RecordCost",
    "RecordGradient",
    "RecordGradientNorm",
    "RecordIterate",
    "RecordIteration",
    "RecordStepsize",
    "RecordTrace",
    "SolverResult",
    "StopAfterIteration",
    "StopWhenAll",
    "StopWhenAny",
    "StopWhenChangeLess",
    "StopWhenCostLess",
    "StopWhenGradientNormLess",
    "Stepsize",
    "StoppingCriterion",
    "cyclic_proximal_point",
    "solve",
    "steepest_descent",
]
