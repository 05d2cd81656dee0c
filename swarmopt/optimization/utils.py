# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import warnings
from numbers import Real
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors


def make_random_state(random_state: tp.RandomLike = None) -> np.random.RandomState:
    """Random source the solver pulls all its draws from.

    Parameters
    ----------
    random_state: None, int or np.random.RandomState
        an existing random state is used as is (and will be consumed), an int
        seeds a new one, and None creates a new one from a random seed.
    """
    if isinstance(random_state, np.random.RandomState):
        return random_state
    if random_state is None:
        random_state = np.random.randint(2 ** 32, dtype=np.uint32)
    if not isinstance(random_state, (int, np.integer)):
        raise TypeError(f"random_state must be None, an int or a np.random.RandomState (got {random_state!r})")
    return np.random.RandomState(random_state)


def sanitize_loss(loss: tp.Any) -> tp.FloatLoss:
    """Converts the output of an objective function to float, with NaN and
    infinite values replaced by +inf so that they never improve a best.
    """
    if not isinstance(loss, (Real, float, np.ndarray)) or np.size(loss) != 1:
        # using "float" along "Real" because mypy does not understand "Real" for now
        raise TypeError(f"Objective functions must return a scalar float (got {loss!r} of type {type(loss)})")
    loss = float(np.asarray(loss, dtype=float).reshape(()))
    if not np.isfinite(loss):
        warnings.warn(f"Objective function returned {loss}, which is handled as +inf", errors.NumericAnomalyWarning)
        return float("inf")
    return loss
