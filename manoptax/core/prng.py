"""Explicit random key state for the stochastic parts of manoptax.

JAX random functions are pure and need a key for every draw. ``KeyStream`` holds
the current key and hands out fresh subkeys, in the spirit of ``flax.nnx.Rngs``,
so that components such as random evaluation orders can be reseeded for
reproducible runs.
"""

import jax
import jax.random as jr
from jaxtyping import Array, PRNGKeyArray


class KeyStream:
    """Stateful source of JAX PRNG keys.

    Examples:
        >>> keys = KeyStream(0)
        >>> k1, k2 = keys(), keys()
        >>> keys.reset(0)
        >>> bool((jr.key_data(keys()) == jr.key_data(k1)).all())
        True
    """

    def __init__(self, seed: int | PRNGKeyArray = 0) -> None:
        """Initialize the stream from an integer seed or an existing key.

        Args:
            seed: Integer seed or a JAX PRNG key.
        """
        self._key: Array = self._as_key(seed)
        self.seed = seed

    @staticmethod
    def _as_key(seed: int | PRNGKeyArray) -> Array:
        if isinstance(seed, int):
            return jr.key(seed)
        if isinstance(seed, jax.Array):
            return seed
        raise TypeError(f"Seed must be an int or a JAX PRNG key, got {type(seed)}")

    def reset(self, seed: int | PRNGKeyArray | None = None) -> None:
        """Restart the stream, optionally with a new seed."""
        if seed is not None:
            self.seed = seed
        self._key = self._as_key(self.seed)

    def next(self) -> Array:
        """Return a fresh subkey and advance the stream."""
        self._key, subkey = jr.split(self._key)
        return subkey

    def split(self, num: int) -> tuple[Array, ...]:
        """Return ``num`` fresh subkeys and advance the stream."""
        keys = jr.split(self._key, num + 1)
        self._key = keys[0]
        return tuple(keys[1:])

    def __call__(self) -> Array:
        return self.next()

    def __repr__(self) -> str:
        return f"KeyStream(seed={self.seed!r})"


def as_key_stream(keys: "KeyStream | int | PRNGKeyArray | None", default_seed: int) -> KeyStream:
    """Normalize the ``key`` option accepted by the solvers into a ``KeyStream``."""
    if keys is None:
        return KeyStream(default_seed)
    if isinstance(keys, KeyStream):
        return keys
    return KeyStream(keys)
