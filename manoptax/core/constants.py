"""Configuration constants for manoptax.

This module defines the numerical constants and solver defaults used throughout
the library to ensure consistent behavior and eliminate magic numbers.
"""

import jax.numpy as jnp


class NumericalConstants:
    """Numerical constants for stability and tolerance in manifold operations.

    These constants guard divisions by near-zero norms and define the tolerance
    used when validating points and tangent vectors.
    """

    EPSILON: float = float(jnp.finfo(jnp.float64).eps)
    """Machine epsilon of double precision, threshold for the near-zero norm branches."""

    VALIDATION_TOLERANCE: float = 1e-10
    """Tolerance for validating points and tangent vectors on manifolds."""


class SolverDefaults:
    """Default configuration of the solvers.

    The cyclic proximal point defaults stop after ``MAX_ITERATIONS`` iterations or
    once the iterate changes by less than ``CHANGE_TOLERANCE`` in the manifold
    distance, whichever happens first.
    """

    MAX_ITERATIONS: int = 5000
    """Iteration cap of the cyclic proximal point algorithm."""

    CHANGE_TOLERANCE: float = 1e-8
    """Minimal change between two iterates before the cyclic proximal point algorithm stops."""

    GRADIENT_MAX_ITERATIONS: int = 200
    """Iteration cap of gradient descent."""

    GRADIENT_TOLERANCE: float = 1e-8
    """Gradient norm below which gradient descent stops."""

    STEPSIZE: float = 1.0
    """Constant step size used by gradient descent when none is given."""

    SEED: int = 42
    """Seed of the key stream created when a solver needs randomness and none is given."""
