# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from swarmopt.common import testing
from . import boundaries
from .config import Configuration


def test_clamp() -> None:
    policy = boundaries.Clamp([0.0, -1.0], [1.0, 1.0])
    positions = np.array([[-0.5, 0.0], [0.5, 3.0], [1.0, -1.0]])
    velocities = np.array([[-1.0, 2.0], [0.1, 4.0], [0.2, -0.3]])
    outside = policy(positions, velocities)
    np.testing.assert_array_equal(outside, [[True, False], [False, True], [False, False]])
    np.testing.assert_array_equal(positions, [[0.0, 0.0], [0.5, 1.0], [1.0, -1.0]])
    np.testing.assert_array_equal(velocities, [[0.0, 2.0], [0.1, 0.0], [0.2, -0.3]])


@testing.parametrized(
    below=(-0.5, 9.5),
    far_below=(-23.0, 7.0),
    above=(10.5, 0.5),
    far_above=(37.0, 7.0),
    inside=(3.0, 3.0),
)
def test_periodic(value: float, expected: float) -> None:
    policy = boundaries.Periodic([0.0], [10.0])
    positions = np.array([[value]])
    velocities = np.array([[1.0]])
    policy(positions, velocities)
    assert positions[0, 0] == pytest.approx(expected)
    assert velocities[0, 0] == (1.0 if value == expected else 0.0)


def test_periodic_consistency() -> None:
    lower, upper = np.array([-5.12, 0.0]), np.array([5.12, 1.0])
    policy = boundaries.Periodic(lower, upper)
    rng = np.random.RandomState(12)
    positions = rng.uniform(-100, 100, size=(200, 2))
    original = positions.copy()
    velocities = np.ones((200, 2))
    outside = policy(positions, velocities)
    testing.assert_in_box(positions, lower, upper)
    np.testing.assert_array_equal(velocities[outside], 0.0)
    np.testing.assert_array_equal(positions[~outside], original[~outside])
    # corrected coordinates differ from the original one by a multiple of the range
    span = np.broadcast_to(upper - lower, original.shape)[outside]
    ratio = (original[outside] - positions[outside]) / span
    np.testing.assert_allclose(ratio, np.round(ratio), atol=1e-6)


def test_periodic_empty_range() -> None:
    with pytest.raises(ValueError):
        boundaries.Periodic([0.0, 1.0], [1.0, 1.0])


def test_clamp_empty_range() -> None:
    policy = boundaries.Clamp([1.0], [1.0])
    positions = np.array([[0.0], [2.0], [1.0]])
    policy(positions, np.ones((3, 1)))
    np.testing.assert_array_equal(positions, [[1.0], [1.0], [1.0]])


@testing.parametrized(
    clamp=("clamp", boundaries.Clamp),
    periodic=("periodic", boundaries.Periodic),
)
def test_registry(name: str, cls: type) -> None:
    config = Configuration(2, -1, 1, boundary=name)
    policy = boundaries.registry.resolve(name).from_config(config)
    assert isinstance(policy, cls)
    assert repr(policy) == f"{cls.__name__}(lower=[-1.0, -1.0], upper=[1.0, 1.0])"
