# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from .config import Configuration


class SwarmState:
    """Positions, velocities and personal bests of all the particles of a swarm.

    All arrays are stored row-major, with one row per particle. The index of a
    particle never changes during a run (topologies address particles by index).

    Parameters
    ----------
    num_particles: int
        number of particles in the swarm
    dimension: int
        dimension of the search space

    Attributes
    ----------
    positions: np.ndarray
        (num_particles, dimension) current positions
    velocities: np.ndarray
        (num_particles, dimension) current velocities
    best_positions: np.ndarray
        (num_particles, dimension) personal best positions
    fitness: np.ndarray
        (num_particles,) fitness at the current positions
    best_fitness: np.ndarray
        (num_particles,) fitness at the personal best positions
    """

    def __init__(self, num_particles: int, dimension: int) -> None:
        shape = (num_particles, dimension)
        try:
            self.positions = np.zeros(shape, dtype=float)
            self.velocities = np.zeros(shape, dtype=float)
            self.best_positions = np.zeros(shape, dtype=float)
            self.fitness = np.full(num_particles, np.inf)
            self.best_fitness = np.full(num_particles, np.inf)
        except MemoryError as e:
            raise errors.ResourceExhaustionError(f"Could not allocate a swarm of shape {shape}") from e

    @property
    def num_particles(self) -> int:
        return self.positions.shape[0]

    @property
    def dimension(self) -> int:
        return self.positions.shape[1]

    @classmethod
    def sample(cls, config: Configuration, random_state: np.random.RandomState) -> "SwarmState":
        """Creates a swarm uniformly spread in the search box of the configuration.
        For each coordinate, two uniform draws a and b are performed: the particle
        starts at a with a velocity (a - b) / 2.
        """
        swarm = cls(config.swarm_size, config.dimension)
        shape = (config.swarm_size, config.dimension)
        try:
            swarm.positions[...] = random_state.uniform(config.lower, config.upper, size=shape)
            # velocities temporarily hold the second draw
            swarm.velocities[...] = random_state.uniform(config.lower, config.upper, size=shape)
        except MemoryError as e:
            raise errors.ResourceExhaustionError(f"Could not sample a swarm of shape {shape}") from e
        swarm.best_positions[...] = swarm.positions
        np.subtract(swarm.positions, swarm.velocities, out=swarm.velocities)
        swarm.velocities /= 2.0
        return swarm

    def evaluate(self, func: tp.Callable[[np.ndarray], float]) -> np.ndarray:
        """Evaluates all particles at their current positions, in particle order.
        The function is provided with a copy of each position.
        """
        for i in range(self.num_particles):
            self.fitness[i] = func(self.positions[i].copy())
        return self.fitness

    def reset_personal_bests(self) -> None:
        """Sets the personal bests to the current positions and fitness (initialization)"""
        self.best_positions[...] = self.positions
        self.best_fitness[...] = self.fitness

    def update_personal_bests(self) -> np.ndarray:
        """Replaces the personal bests which are strictly improved by the current
        fitness, and returns the mask of improved particles
        """
        improved = self.fitness < self.best_fitness
        self.best_fitness[improved] = self.fitness[improved]
        self.best_positions[improved] = self.positions[improved]
        return improved

    def move(
        self,
        inertia: float,
        informants: np.ndarray,
        cognitive: float,
        social: float,
        random_state: np.random.RandomState,
    ) -> None:
        """Updates velocities and positions of all particles
        v <- w * v + rho1 * (pbest - x) + rho2 * (informant - x), then x <- x + v
        with rho1 = cognitive * U(0, 1) and rho2 = social * U(0, 1) drawn independently
        for each particle and each coordinate.
        """
        if informants.shape != self.positions.shape:
            raise ValueError(f"Informants have shape {informants.shape} but swarm has shape {self.positions.shape}")
        rho1 = cognitive * random_state.uniform(0.0, 1.0, size=self.positions.shape)
        rho2 = social * random_state.uniform(0.0, 1.0, size=self.positions.shape)
        self.velocities = (
            inertia * self.velocities
            + rho1 * (self.best_positions - self.positions)
            + rho2 * (informants - self.positions)
        )
        self.positions = self.positions + self.velocities

    def __repr__(self) -> str:
        return f"SwarmState(num_particles={self.num_particles}, dimension={self.dimension})"
