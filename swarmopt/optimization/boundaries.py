# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common.decorators import Registry
from .config import Configuration


class BoundaryPolicy:
    """Brings back in the box the coordinates which left it after a position update.
    Positions and velocities are modified in place, and the velocity component of
    every corrected coordinate is set to 0.

    Parameters
    ----------
    lower: np.ndarray
        lower bounds of the box, one per dimension
    upper: np.ndarray
        upper bounds of the box, one per dimension
    """

    name = ""

    def __init__(self, lower: tp.ArrayLike, upper: tp.ArrayLike) -> None:
        self.lower = np.asarray(lower, dtype=float)
        self.upper = np.asarray(upper, dtype=float)

    @classmethod
    def from_config(cls, config: Configuration) -> "BoundaryPolicy":
        return cls(config.lower, config.upper)

    def __call__(self, positions: np.ndarray, velocities: np.ndarray) -> np.ndarray:
        """Corrects positions and velocities (arrays of shape (num_particles, dimension))
        in place and returns the boolean mask of corrected coordinates
        """
        below = positions < self.lower
        above = positions > self.upper
        lower = np.broadcast_to(self.lower, positions.shape)
        upper = np.broadcast_to(self.upper, positions.shape)
        corrected_below, corrected_above = self._correct(positions, lower, upper)
        np.copyto(positions, corrected_below, where=below)
        np.copyto(positions, corrected_above, where=above)
        outside = below | above
        velocities[outside] = 0.0
        return outside

    def _correct(
        self, positions: np.ndarray, lower: np.ndarray, upper: np.ndarray
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Returns the values to use for coordinates below and above the box"""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(lower={self.lower.tolist()}, upper={self.upper.tolist()})"


registry: Registry[tp.Type[BoundaryPolicy]] = Registry("boundary policy")


@registry.register
class Clamp(BoundaryPolicy):
    """Coordinates out of the box are set to the bound they crossed"""

    name = "clamp"

    def _correct(
        self, positions: np.ndarray, lower: np.ndarray, upper: np.ndarray
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        return lower, upper


@registry.register
class Periodic(BoundaryPolicy):
    """Coordinates out of the box wrap around to the other side, the box being
    considered as periodic with period upper - lower in each dimension
    """

    name = "periodic"

    def __init__(self, lower: tp.ArrayLike, upper: tp.ArrayLike) -> None:
        super().__init__(lower, upper)
        if np.any(self.upper <= self.lower):
            raise ValueError("Periodic boundaries require lower < upper in every dimension")

    def _correct(
        self, positions: np.ndarray, lower: np.ndarray, upper: np.ndarray
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        span = upper - lower
        with np.errstate(invalid="ignore"):
            wrapped_below = upper - np.fmod(lower - positions, span)
            wrapped_above = lower + np.fmod(positions - upper, span)
        # rounding errors may push the wrapped values an ulp outside of the box
        return np.clip(wrapped_below, lower, upper), np.clip(wrapped_above, lower, upper)
