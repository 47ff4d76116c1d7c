"""Evaluation order policies of the cyclic proximal point algorithm.

An evaluation order is a 1-based permutation of the proximal map indices. The
policy is asked for a new order once at initialization (iteration 0) and after
every cycle.
"""

import jax.random as jr
from jaxtyping import PRNGKeyArray


class EvalOrder:
    """Base class of evaluation order policies."""

    def update(self, count: int, iteration: int, order: tuple[int, ...], key: PRNGKeyArray) -> tuple[int, ...]:
        """Return the evaluation order for the next cycle.

        Args:
            count: Number m of proximal maps.
            iteration: Number of cycles performed so far, 0 at initialization.
            order: Current order, a permutation of 1..m.
            key: Random key for stochastic policies.

        Returns:
            A permutation of 1..m.
        """
        raise NotImplementedError("Subclasses must implement the order update")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _random_permutation(count: int, key: PRNGKeyArray) -> tuple[int, ...]:
    return tuple(int(k) + 1 for k in jr.permutation(key, count))


class LinearEvalOrder(EvalOrder):
    """Keep the current order, initially 1, ..., m, in every cycle."""

    def update(self, count: int, iteration: int, order: tuple[int, ...], key: PRNGKeyArray) -> tuple[int, ...]:
        if len(order) != count:
            return tuple(range(1, count + 1))
        return tuple(order)


class RandomEvalOrder(EvalOrder):
    """Draw a new random order for every cycle."""

    def update(self, count: int, iteration: int, order: tuple[int, ...], key: PRNGKeyArray) -> tuple[int, ...]:
        return _random_permutation(count, key)


class FixedRandomEvalOrder(EvalOrder):
    """Draw one random order at initialization and keep it for all cycles."""

    def update(self, count: int, iteration: int, order: tuple[int, ...], key: PRNGKeyArray) -> tuple[int, ...]:
        if iteration <= 0 or len(order) != count:
            return _random_permutation(count, key)
        return tuple(order)
