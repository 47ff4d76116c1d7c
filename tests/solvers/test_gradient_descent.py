"""Tests for Riemannian steepest descent."""

import jax.numpy as jnp
import pytest

from manoptax.manifolds import Circle, Product, ProductPoint, ProductTVector, S1Point, SnPoint, Sphere
from manoptax.solvers import (
    ArmijoLinesearch,
    ConstantStepsize,
    DebugGradientNorm,
    DecreasingStepsize,
    RecordGradientNorm,
    RecordIterate,
    StopAfterIteration,
    StopWhenAny,
    StopWhenCostLess,
    StopWhenGradientNormLess,
    steepest_descent,
)


@pytest.fixture
def sphere():
    return Sphere(2)


@pytest.fixture
def target():
    return SnPoint([0.0, 0.0, 1.0])


@pytest.fixture
def x0():
    return SnPoint([1.0, 0.0, 0.0])


def squared_distance(manifold, target):
    def cost(x):
        return manifold.distance(x, target) ** 2

    def gradient(x):
        return -2.0 * manifold.log(x, target)

    return cost, gradient


def test_distance_is_non_increasing_for_small_steps(sphere, target, x0):
    cost, gradient = squared_distance(sphere, target)
    x, trace = steepest_descent(
        sphere,
        cost,
        gradient,
        x0,
        stepsize=ConstantStepsize(0.1),
        stopping_criterion=StopAfterIteration(50),
        record=RecordIterate(),
    )
    distances = [float(sphere.distance(x0, target))] + [float(sphere.distance(y, target)) for y in trace["iterate"]]
    assert all(later <= earlier for earlier, later in zip(distances, distances[1:]))
    assert distances[-1] < 1e-4
    assert trace.iterations == 50


def test_default_configuration_converges():
    circle = Circle()
    cost, gradient = squared_distance(circle, S1Point(0.0))
    x, trace = steepest_descent(
        circle, cost, gradient, S1Point(1.0), stepsize=ConstantStepsize(0.25), record=RecordGradientNorm()
    )
    assert abs(float(x.value)) < 1e-8
    assert "gradient norm" in trace.stop_reason
    assert trace.iterations < 200
    assert trace["gradient_norm"][-1] < 1e-8


def test_unit_step_reaches_target_in_one_step(sphere, target, x0):
    cost, gradient = squared_distance(sphere, target)
    x = steepest_descent(
        sphere, cost, gradient, x0, stepsize=ConstantStepsize(0.5), stopping_criterion=StopAfterIteration(1)
    )
    assert float(sphere.distance(x, target)) < 1e-6


def test_gradient_from_automatic_differentiation(sphere, target, x0):
    x = steepest_descent(
        sphere,
        lambda x: -jnp.dot(x.value, target.value),
        None,
        x0,
        stepsize=ArmijoLinesearch(),
        stopping_criterion=StopWhenAny(StopAfterIteration(100), StopWhenGradientNormLess(1e-10)),
    )
    assert float(jnp.dot(x.value, target.value)) == pytest.approx(1.0, abs=1e-10)


def test_custom_retraction(sphere, target, x0):
    cost, gradient = squared_distance(sphere, target)
    x = steepest_descent(
        sphere,
        cost,
        gradient,
        x0,
        stepsize=DecreasingStepsize(length=0.45, factor=0.99, exponent=0.0),
        retraction=sphere.retr,
        stopping_criterion=StopWhenAny(StopAfterIteration(500), StopWhenCostLess(1e-6)),
    )
    assert float(cost(x)) < 1e-6
    assert sphere.validate_point(x)


def test_product_manifold(sphere):
    circle = Circle()
    product = Product([sphere, circle])
    target = ProductPoint([SnPoint([0.0, 0.0, 1.0]), S1Point(3.0)])
    cost, gradient = squared_distance(product, target)
    x = steepest_descent(
        product,
        cost,
        gradient,
        ProductPoint([SnPoint([0.0, 1.0, 0.0]), S1Point(-3.0)]),
        stepsize=ConstantStepsize(0.25),
    )
    assert float(product.distance(x, target)) < 1e-6
    assert product.validate_point(x)


def test_debug_gradient_norm(sphere, target, x0):
    cost, gradient = squared_distance(sphere, target)
    lines = []
    steepest_descent(
        sphere,
        cost,
        gradient,
        x0,
        stepsize=ConstantStepsize(0.1),
        stopping_criterion=StopAfterIteration(3),
        debug=DebugGradientNorm(print_fn=lines.append),
    )
    assert len(lines) == 3
    prefix, value = lines[0].split(": ")
    assert prefix == "Norm of the Gradient"
    assert float(value) == pytest.approx(float(jnp.pi))


def test_product_tangent_vectors_scale():
    x = ProductPoint([S1Point(0.0)])
    v = ProductTVector([Circle().log(S1Point(0.0), S1Point(1.0))], x)
    assert float((-0.5 * v)[0].value) == pytest.approx(-0.5)
