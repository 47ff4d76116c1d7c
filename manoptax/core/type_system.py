"""Type aliases for the JAX arrays stored inside points and tangent vectors.

Points and tangent vectors are small wrapper classes (see
:mod:`manoptax.manifolds.base`); the aliases here describe the raw values they hold.
"""

import jax.numpy as jnp
from jaxtyping import Array, ArrayLike, Float

# Type aliases for the values wrapped by manifold objects
PointValue = Float[Array, "..."]
"""Type alias for the raw value of a point on a manifold."""

TangentValue = Float[Array, "..."]
"""Type alias for the raw value of a tangent vector."""

Scalar = Float[Array, ""]
"""Type alias for scalar results such as distances and inner products."""


def as_float_array(value: ArrayLike) -> Array:
    """Convert a value to a floating point JAX array.

    Integer input is promoted to the default floating point type so that angles
    like ``S1Point(3)`` behave like ``S1Point(3.0)``.

    Examples:
        >>> as_float_array([1, 0, 0]).dtype
        dtype('float64')
    """
    array = jnp.asarray(value)
    if not jnp.issubdtype(array.dtype, jnp.floating):
        array = array.astype(jnp.result_type(float))
    return array
