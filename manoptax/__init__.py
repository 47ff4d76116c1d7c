"""manoptax: optimization on Riemannian manifolds with JAX.

A small framework for optimization on Riemannian manifolds: a manifold
interface with pluggable implementations, problem descriptors binding a
manifold to a cost, and a generic solver engine driving gradient descent and
the cyclic proximal point algorithm.

**Supported Manifolds:**
- **Sphere** (S^n): Unit vectors in R^(n+1) with the canonical metric
- **Circle** (S^1): Angles in [-π, π)
- **Product** (M₁ x ... x Mₖ): Componentwise composition of manifolds

**Quick Start:**
    >>> import manoptax as mx
    >>> sphere = mx.create_sphere(2)
    >>> target = mx.SnPoint([0.0, 0.0, 1.0])
    >>> x0 = mx.SnPoint([1.0, 0.0, 0.0])
    >>> x = mx.steepest_descent(
    ...     sphere,
    ...     lambda x: sphere.distance(x, target) ** 2,
    ...     lambda x: -2.0 * sphere.log(x, target),
    ...     x0,
    ...     stepsize=mx.ConstantStepsize(0.5),
    ... )
    >>> round(float(sphere.distance(x, target)), 6)
    0.0
"""

__version__ = "0.1.0"

import logging

import jax

from .core import KeyStream, NumericalConstants, SolverDefaults
from .manifolds import (
    Circle,
    DimensionMismatchError,
    IncompatibleTangentSpaceError,
    InvalidPointError,
    InvalidTangentVectorError,
    Manifold,
    ManifoldError,
    MPoint,
    Product,
    ProductPoint,
    ProductTVector,
    S1Point,
    S1TVector,
    SnPoint,
    SnTVector,
    Sphere,
    TVector,
    ValidationError,
    create_circle,
    create_product,
    create_sphere,
    manifold_dimension,
    sym_rem,
)
from .problems import GradientProblem, IndexOutOfRangeError, ProblemError, ProximalProblem
from .solvers import (
    ArmijoLinesearch,
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
    DecreasingStepsize,
    FixedRandomEvalOrder,
    LinearEvalOrder,
    RandomEvalOrder,
    RecordChange,
    RecordCost,
    RecordGradient,
    RecordGradientNorm,
    RecordIterate,
    RecordIteration,
    RecordStepsize,
    RecordTrace,
    SolverResult,
    StopAfterIteration,
    StopWhenAll,
    StopWhenAny,
    StopWhenChangeLess,
    StopWhenCostLess,
    StopWhenGradientNormLess,
    cyclic_proximal_point,
    solve,
    steepest_descent,
)

logger = logging.getLogger(__name__)


def enable_x64() -> None:
    """Enable 64-bit floating point arithmetic in JAX.

    The tolerances in ``NumericalConstants`` assume double precision, so this is
    called when manoptax is imported.

    Example:
        >>> import manoptax as mx
        >>> mx.enable_x64()
    """
    jax.config.update("jax_enable_x64", True)
    logger.debug("manoptax enabled 64-bit floating point arithmetic")


enable_x64()

__all__ = [
    "ArmijoLinesearch",
    "Circle",
    "ConstantStepsize",
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
    "DimensionMismatchError",
    "FixedRandomEvalOrder",
    "GradientProblem",
    "IncompatibleTangentSpaceError",
    "IndexOutOfRangeError",
    "InvalidPointError",
    "InvalidTangentVectorError",
    "KeyStream",
    "LinearEvalOrder",
    "MPoint",
    "Manifold",
    "ManifoldError",
    "NumericalConstants",
    "ProblemError",
    "Product",
    "ProductPoint",
    "ProductTVector",
    "ProximalProblem",
    "RandomEvalOrder",
    "RecordChange",
    "RecordCost",
    "RecordGradient",
    "RecordGradientNorm",
    "RecordIterate",
    "RecordIteration",
    "RecordStepsize",
    "RecordTrace",
    "S1Point",
    "S1TVector",
    "SnPoint",
    "SnTVector",
    "SolverDefaults",
    "SolverResult",
    "Sphere",
    "StopAfterIteration",
    "StopWhenAll",
    "StopWhenAny",
    "StopWhenChangeLess",
    "StopWhenCostLess",
    "StopWhenGradientNormLess",
    "TVector",
    "ValidationError",
    "create_circle",
    "create_product",
    "create_sphere",
    "cyclic_proximal_point",
    "enable_x64",
    "manifold_dimension",
    "solve",
    "steepest_descent",
]
