# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import warnings
from numbers import Real
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from swarmopt.common import tools


MAX_SWARM_SIZE = 100  # safety limit on the number of particles
DEFAULT_INERTIA = 0.7298  # Clerc's constriction coefficient


def suggested_swarm_size(dimension: int) -> int:
    """Swarm size heuristic 10 + 2 * sqrt(dimension) rounded to the nearest int, capped at MAX_SWARM_SIZE"""
    if dimension <= 0:
        raise errors.ConfigurationError(f"dimension must be strictly positive (got {dimension})")
    return min(MAX_SWARM_SIZE, int(round(10.0 + 2.0 * math.sqrt(dimension))))


class Configuration:
    """Immutable set of parameters of a particle swarm run.

    Parameters
    ----------
    dimension: int
        number of variables of the objective function
    lower: float or sequence of floats
        lower bound of the search box, broadcast to all dimensions if scalar
    upper: float or sequence of floats
        upper bound of the search box, broadcast to all dimensions if scalar
    swarm_size: int
        number of particles, defaults to suggested_swarm_size(dimension).
        Values above MAX_SWARM_SIZE are capped.
    goal: float
        the run stops as soon as the best error is lower or equal to this value
    max_steps: int
        maximum number of update steps
    cognitive: float
        coefficient of the attraction toward the particle personal best
    social: float
        coefficient of the attraction toward the best informant
    w_max: float
        initial inertia weight of the "linear_decreasing" schedule
    w_min: float
        final inertia weight of the "linear_decreasing" schedule
    inertia_weight: float
        inertia weight of the "constant" schedule
    inertia: str
        inertia schedule, "constant" or "linear_decreasing"
    topology: str
        neighborhood topology, "global", "ring" or "random"
    neighborhood_size: int
        number of informed particles drawn for each particle by the "random" topology
    boundary: str
        boundary policy, "clamp" or "periodic"
    report_interval: int
        observers are called every report_interval steps (0 disables them)

    Note
    ----
    Attributes cannot be modified after initialization, use :code:`spawn`
    to create an updated copy.
    """

    # pylint: disable=too-many-instance-attributes,too-many-arguments,too-many-locals
    def __init__(
        self,
        dimension: int,
        lower: tp.BoundValue,
        upper: tp.BoundValue,
        *,
        swarm_size: tp.Optional[int] = None,
        goal: float = 1e-5,
        max_steps: int = 100000,
        cognitive: float = 1.496,
        social: float = 1.496,
        w_max: float = DEFAULT_INERTIA,
        w_min: float = 0.3,
        inertia_weight: float = DEFAULT_INERTIA,
        inertia: str = "linear_decreasing",
        topology: str = "ring",
        neighborhood_size: int = 5,
        boundary: str = "clamp",
        report_interval: int = 1000,
    ) -> None:
        if not isinstance(dimension, (int, np.integer)) or dimension <= 0:
            raise errors.ConfigurationError(f"dimension must be a strictly positive int (got {dimension!r})")
        self.dimension = int(dimension)
        self.lower = self._broadcast(lower, "lower")
        self.upper = self._broadcast(upper, "upper")
        if np.any(self.lower > self.upper):
            dims = np.flatnonzero(self.lower > self.upper).tolist()
            raise errors.ConfigurationError(f"lower bound is above upper bound for dimension(s) {dims}")
        if swarm_size is None:
            swarm_size = suggested_swarm_size(self.dimension)
        if not isinstance(swarm_size, (int, np.integer)) or swarm_size <= 0:
            raise errors.ConfigurationError(f"swarm_size must be a strictly positive int (got {swarm_size!r})")
        if swarm_size > MAX_SWARM_SIZE:
            warnings.warn(
                f"swarm_size={swarm_size} is capped to the maximum of {MAX_SWARM_SIZE}",
                errors.SwarmSizeCappedWarning,
            )
            swarm_size = MAX_SWARM_SIZE
        self.swarm_size = int(swarm_size)
        if not isinstance(goal, Real) or math.isnan(goal):
            raise errors.ConfigurationError(f"goal must be a float and cannot be NaN (got {goal!r})")
        self.goal = float(goal)
        if not isinstance(max_steps, (int, np.integer)) or max_steps < 0:
            raise errors.ConfigurationError(f"max_steps must be a non-negative int (got {max_steps!r})")
        self.max_steps = int(max_steps)
        for name, value in [("cognitive", cognitive), ("social", social)]:
            if not isinstance(value, Real) or not value > 0:
                raise errors.ConfigurationError(f"{name} coefficient must be strictly positive (got {value})")
        self.cognitive = float(cognitive)
        self.social = float(social)
        for name, value in [("w_max", w_max), ("w_min", w_min), ("inertia_weight", inertia_weight)]:
            if not isinstance(value, Real) or not math.isfinite(value):
                raise errors.ConfigurationError(f"{name} must be a finite float (got {value!r})")
        self.w_max = float(w_max)
        self.w_min = float(w_min)
        self.inertia_weight = float(inertia_weight)
        self.inertia = self._choice(inertia, "inertia", ("constant", "linear_decreasing"))
        self.topology = self._choice(topology, "topology", ("global", "ring", "random"))
        if not isinstance(neighborhood_size, (int, np.integer)) or neighborhood_size < 0:
            raise errors.ConfigurationError(f"neighborhood_size must be a non-negative int (got {neighborhood_size!r})")
        self.neighborhood_size = int(neighborhood_size)
        self.boundary = self._choice(boundary, "boundary", ("clamp", "periodic"))
        if self.boundary == "periodic" and np.any(self.lower == self.upper):
            raise errors.ConfigurationError("periodic boundary requires lower < upper for every dimension")
        if not isinstance(report_interval, (int, np.integer)) or report_interval < 0:
            raise errors.ConfigurationError(f"report_interval must be a non-negative int (got {report_interval!r})")
        self.report_interval = int(report_interval)
        self._frozen = True

    def _broadcast(self, bound: tp.BoundValue, name: str) -> np.ndarray:
        try:
            array = np.array(np.broadcast_to(np.asarray(bound, dtype=float), (self.dimension,)))
        except ValueError as e:
            raise errors.ConfigurationError(
                f"{name} bound must be a scalar or have {self.dimension} elements (got {bound!r})"
            ) from e
        except MemoryError as e:
            raise errors.ResourceExhaustionError(f"Could not allocate {name} bound of dimension {self.dimension}") from e
        if not np.all(np.isfinite(array)):
            raise errors.ConfigurationError(f"{name} bound must be finite (got {bound!r})")
        array.flags.writeable = False
        return array

    @staticmethod
    def _choice(value: str, name: str, choices: tp.Tuple[str, ...]) -> str:
        if value not in choices:
            raise errors.ConfigurationError(f'Unknown {name} "{value}", choose among: {", ".join(choices)}')
        return value

    def __setattr__(self, name: str, value: tp.Any) -> None:
        if getattr(self, "_frozen", False):
            raise errors.FrozenConfigurationError(
                f"Cannot set attribute {name} of a frozen Configuration, use spawn({name}=...) instead"
            )
        super().__setattr__(name, value)

    def options(self) -> tp.Dict[str, tp.Any]:
        """Keyword options of the configuration (everything but dimension and bounds)"""
        return {x: y for x, y in self.__dict__.items() if x not in ("dimension", "lower", "upper") and not x.startswith("_")}

    def spawn(self, **changes: tp.Any) -> "Configuration":
        """Returns a new configuration with updated parameters"""
        kwargs: tp.Dict[str, tp.Any] = dict(dimension=self.dimension, lower=self.lower, upper=self.upper)
        kwargs.update(self.options())
        kwargs.update(changes)
        return Configuration(**kwargs)

    def __eq__(self, other: tp.Any) -> bool:
        if not isinstance(other, Configuration):
            return False
        return (
            self.dimension == other.dimension
            and np.array_equal(self.lower, other.lower)
            and np.array_equal(self.upper, other.upper)
            and self.options() == other.options()
        )

    def __repr__(self) -> str:
        diff = tools.different_from_defaults(instance=self, instance_dict=self.options())
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        bounds = f"lower={self.lower.tolist()}, upper={self.upper.tolist()}"
        return f"Configuration(dimension={self.dimension}, {bounds}{', ' if params else ''}{params})"
