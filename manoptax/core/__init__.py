"""Core constants, type aliases and random key handling for manoptax."""

from .constants import NumericalConstants, SolverDefaults
from .prng import KeyStream, as_key_stream

__all__ = [
    "KeyStream",
    "NumericalConstants",
    "SolverDefaults",
    "as_key_stream",
]
