# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from swarmopt.common import testing
from . import corefuncs


def test_registry() -> None:
    testing.assert_set_equal(corefuncs.registry, ["sphere", "rosenbrock", "griewank", "rastrigin", "ackley"])
    testing.assert_set_equal(corefuncs.BOUNDS, corefuncs.registry)
    for lower, upper in corefuncs.BOUNDS.values():
        assert lower < upper


@testing.parametrized(
    sphere=("sphere", np.zeros(4), 0.0),
    sphere_ones=("sphere", np.ones(4), 4.0),
    rosenbrock=("rosenbrock", np.ones(3), 0.0),
    rosenbrock_zeros=("rosenbrock", np.zeros(3), 2.0),
    griewank=("griewank", np.zeros(5), 0.0),
    rastrigin=("rastrigin", np.zeros(5), 0.0),
    rastrigin_ones=("rastrigin", np.ones(2), 2.0),
    ackley=("ackley", np.zeros(5), 0.0),
)
def test_known_values(name: str, x: np.ndarray, expected: float) -> None:
    value = corefuncs.registry[name](x)
    assert isinstance(value, float)
    assert value == pytest.approx(expected, abs=1e-10)


@testing.parametrized(**{name: (name,) for name in ["sphere", "rosenbrock", "griewank", "rastrigin", "ackley"]})
def test_functions_are_deterministic_and_positive(name: str) -> None:
    func = corefuncs.registry[name]
    lower, upper = corefuncs.BOUNDS[name]
    x = np.random.RandomState(12).uniform(lower, upper, size=7)
    assert func(x) == func(x.copy())
    assert func(x) > 0


def test_rosenbrock_dimension() -> None:
    with pytest.raises(ValueError):
        corefuncs.rosenbrock(np.array([1.0]))
