# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import swarmopt.common.typing as tp
from swarmopt.common.decorators import Registry
from .config import Configuration


class InertiaSchedule:
    """Provides the inertia weight w applied to the previous velocity at a given step"""

    name = ""

    @classmethod
    def from_config(cls, config: Configuration) -> "InertiaSchedule":
        raise NotImplementedError

    def __call__(self, step: int) -> float:
        raise NotImplementedError


registry: Registry[tp.Type[InertiaSchedule]] = Registry("inertia schedule")


@registry.register
class ConstantInertia(InertiaSchedule):
    """Same inertia weight at every step"""

    name = "constant"

    def __init__(self, weight: float) -> None:
        self.weight = weight

    @classmethod
    def from_config(cls, config: Configuration) -> InertiaSchedule:
        return cls(config.inertia_weight)

    def __call__(self, step: int) -> float:
        return self.weight

    def __repr__(self) -> str:
        return f"ConstantInertia(weight={self.weight})"


@registry.register
class LinearDecreasingInertia(InertiaSchedule):
    """Inertia weight decreasing linearly from w_max (step 0) to w_min, reached after
    3/4 of the budget of steps, and constant afterwards.
    This favors exploration at the beginning of the run and refinement at the end.

    Parameters
    ----------
    w_max: float
        inertia weight at step 0
    w_min: float
        inertia weight at the end of the decay stage and afterwards
    max_steps: int
        budget of steps of the run
    """

    name = "linear_decreasing"

    def __init__(self, w_max: float, w_min: float, max_steps: int) -> None:
        self.w_max = w_max
        self.w_min = w_min
        self.max_steps = max_steps
        self.decay_stage = (3 * max_steps) // 4

    @classmethod
    def from_config(cls, config: Configuration) -> InertiaSchedule:
        return cls(config.w_max, config.w_min, config.max_steps)

    def __call__(self, step: int) -> float:
        # budgets of 0 or 1 step have no decay stage
        if step > self.decay_stage or not self.decay_stage:
            return self.w_min
        return self.w_min + (self.w_max - self.w_min) * (self.decay_stage - step) / self.decay_stage

    def __repr__(self) -> str:
        return f"LinearDecreasingInertia(w_max={self.w_max}, w_min={self.w_min}, max_steps={self.max_steps})"
