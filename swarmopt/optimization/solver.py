# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from . import utils
from . import inertia as inertias
from . import topologies
from . import boundaries
from . import callbacks as swarmcallbacks
from .config import Configuration
from .swarm import SwarmState


logger = logging.getLogger(__name__)
_SolverCallBack = tp.Callable[["SwarmSolver"], None]


class Result:
    """Best point found by a run.

    Parameters
    ----------
    dimension: int
        dimension of the search space

    Attributes
    ----------
    best_position: np.ndarray
        best position found so far (written in place by the solver)
    best_error: float
        objective value at best_position, lower is better
    status: str
        "goal_reached" or "exhausted" once the run is over
    num_steps: int
        number of update steps performed
    num_evaluations: int
        number of calls to the objective function
    """

    def __init__(self, dimension: int) -> None:
        self.best_position = np.full(dimension, np.nan)
        self.best_error = float("inf")
        self.status = "initializing"
        self.num_steps = 0
        self.num_evaluations = 0

    @property
    def goal_reached(self) -> bool:
        return self.status == "goal_reached"

    def __repr__(self) -> str:
        return (
            f"Result(best_error={self.best_error}, best_position={self.best_position.tolist()}, "
            f"status={self.status!r}, num_steps={self.num_steps}, num_evaluations={self.num_evaluations})"
        )


class SwarmSolver:
    """Particle swarm minimization of a function within a box.

    A swarm is spread uniformly in the box, then at each step every particle
    is attracted both toward its personal best and toward the best personal best
    of its informants (as defined by the topology), with an inertia depending
    on the step. Out of box coordinates are handled by the boundary policy.
    The run stops when the goal is reached or the budget of steps is exhausted.

    Parameters
    ----------
    config: Configuration
        parameters of the run
    random_state: None, int or np.random.RandomState
        source of all random draws. Use an int seed (or a seeded RandomState)
        for reproducible runs.

    Note
    ----
    - Observers can be registered with :code:`register_callback`, they are provided
      with the solver itself and can read its :code:`step`, :code:`inertia`,
      :code:`best_error`, :code:`best_position`, :code:`swarm` and :code:`topology`.
    - Informants are computed once per step before any particle moves, then the
      global best is updated following the particle order, first index winning ties.
    - Reference:
      J. Kennedy and R. Eberhart, Particle swarm optimization,
      Proceedings of ICNN'95, 1995, pp. 1942-1948.
    """

    def __init__(self, config: Configuration, random_state: tp.RandomLike = None) -> None:
        if not isinstance(config, Configuration):
            raise TypeError(f"config must be a Configuration instance (got {type(config)})")
        self.config = config
        self.random_state = utils.make_random_state(random_state)
        self._inertia_schedule = inertias.registry.resolve(config.inertia).from_config(config)
        self._boundary = boundaries.registry.resolve(config.boundary).from_config(config)
        self._callbacks: tp.Dict[str, tp.List[_SolverCallBack]] = {}
        # run state, only available while minimizing
        self.status = "initializing"
        self.step = 0
        self.inertia = float("nan")
        self.swarm: tp.Optional[SwarmState] = None
        self.topology: tp.Optional[topologies.Topology] = None
        self._result: tp.Optional[Result] = None

    @property
    def best_error(self) -> float:
        return float("inf") if self._result is None else self._result.best_error

    @property
    def best_position(self) -> np.ndarray:
        if self._result is None:
            raise RuntimeError("No run in progress")
        return self._result.best_position

    def __repr__(self) -> str:
        return f"SwarmSolver({self.config!r})"

    def register_callback(self, name: str, callback: _SolverCallBack) -> None:
        """Add a callback method called with the solver as only argument.

        Parameters
        ----------
        name: str
            when to call the callback, either :code:`step` (every report_interval
            steps of the configuration) or :code:`finish` (once at the end of the run)
        callback: callable
            a callable taking the solver as parameter
        """
        assert name in ["step", "finish"], f'Only "step" and "finish" events can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _call(self, name: str) -> None:
        for callback in self._callbacks.get(name, []):
            callback(self)

    def minimize(
        self,
        objective_function: tp.ObjectiveFunction,
        args: tp.Tuple[tp.Any, ...] = (),
        result: tp.Optional[Result] = None,
        verbosity: int = 0,
    ) -> Result:
        """Minimization procedure

        Parameters
        ----------
        objective_function: callable
            function to minimize, called as :code:`objective_function(x, *args)` with
            x a copy of a position (1-D array) and returning a float. NaN and
            infinite values are handled as +inf.
        args: tuple
            additional arguments provided to the objective function
        result: Result
            optional result to fill (its best_position array is written in place)
        verbosity: int
            0: silent, 1: progress bar on stdout every report_interval steps

        Returns
        -------
        Result
            the best point found and why the run stopped
        """
        config = self.config
        if result is None:
            result = Result(config.dimension)
        elif result.best_position.shape != (config.dimension,):
            raise errors.ConfigurationError(
                f"Result best_position has shape {result.best_position.shape} instead of ({config.dimension},)"
            )
        printer: tp.Optional[swarmcallbacks.ProgressPrinter] = None
        if verbosity:
            printer = swarmcallbacks.ProgressPrinter()
            self.register_callback("step", printer)
            self.register_callback("finish", printer.finish)

        def func(x: np.ndarray) -> float:
            return utils.sanitize_loss(objective_function(x, *args))

        logger.debug("Starting %s with %s", self.__class__.__name__, config)
        result.best_error = float("inf")
        result.num_steps = result.num_evaluations = 0
        self._result = result
        self.status = result.status = "initializing"
        self.step = 0
        self.inertia = float("nan")
        try:
            self.swarm = swarm = SwarmState.sample(config, self.random_state)
            swarm.evaluate(func)
            swarm.reset_personal_bests()
            result.num_evaluations = swarm.num_particles
            index = int(np.argmin(swarm.fitness))  # first index on ties
            result.best_error = float(swarm.fitness[index])
            result.best_position[:] = swarm.positions[index]
            self.topology = topology = topologies.registry.resolve(config.topology).from_config(config, self.random_state)
            self.status = result.status = "stepping"
            improved = False
            for step in range(config.max_steps):
                self.step = step
                if result.best_error <= config.goal:
                    break
                self.inertia = self._inertia_schedule(step)
                informants = topology.informants(swarm, result.best_position, improved)
                improved = False
                swarm.move(self.inertia, informants, config.cognitive, config.social, self.random_state)
                self._boundary(swarm.positions, swarm.velocities)
                swarm.evaluate(func)
                swarm.update_personal_bests()
                for i, loss in enumerate(swarm.fitness):
                    if loss < result.best_error:
                        result.best_error = float(loss)
                        result.best_position[:] = swarm.positions[i]
                        improved = True
                result.num_steps = step + 1
                result.num_evaluations += swarm.num_particles
                if config.report_interval and not step % config.report_interval:
                    self._call("step")
            else:
                self.step = config.max_steps
            self.status = result.status = "goal_reached" if result.best_error <= config.goal else "exhausted"
            if result.goal_reached:
                logger.info("Goal reached at step %s (error=%.3e)", self.step, result.best_error)
            else:
                logger.info("Budget of %s steps exhausted (error=%.3e)", config.max_steps, result.best_error)
            self._call("finish")
        finally:
            self.swarm = None
            self.topology = None
            self._result = None
            if printer is not None:
                self._callbacks["step"].remove(printer)
                self._callbacks["finish"].remove(printer.finish)
        return result


def solve(
    objective_function: tp.ObjectiveFunction,
    config: Configuration,
    args: tp.Tuple[tp.Any, ...] = (),
    random_state: tp.RandomLike = None,
    result: tp.Optional[Result] = None,
    verbosity: int = 0,
) -> Result:
    """Minimizes the objective function with a particle swarm.
    See SwarmSolver for details on the parameters.
    """
    return SwarmSolver(config, random_state=random_state).minimize(
        objective_function, args=args, result=result, verbosity=verbosity
    )
