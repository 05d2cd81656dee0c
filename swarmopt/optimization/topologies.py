# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Neighborhood topologies, defining which particles inform which others.
Reference for the random topology: M. Clerc, "Back to random topology", 2007.
http://clerc.maurice.free.fr/pso/random_topology.pdf
"""

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common.decorators import Registry
from .config import Configuration
from .swarm import SwarmState


class InformantGraph:
    """Directed "informs" relation over particle indices, stored as a dense
    boolean matrix: :code:`adjacency[i, j]` is True if particle i is consulted
    when computing the best informant of particle j.

    Parameters
    ----------
    adjacency: np.ndarray
        (num_particles, num_particles) boolean matrix
    """

    def __init__(self, adjacency: np.ndarray) -> None:
        adjacency = np.asarray(adjacency, dtype=bool)
        if adjacency.ndim != 2 or adjacency.shape[0] != adjacency.shape[1]:
            raise ValueError(f"Adjacency matrix must be square (got shape {adjacency.shape})")
        self.adjacency = adjacency

    @property
    def num_particles(self) -> int:
        return self.adjacency.shape[0]

    @classmethod
    def ring(cls, num_particles: int) -> "InformantGraph":
        """Each particle informs itself and both its circular neighbors"""
        adjacency = np.zeros((num_particles, num_particles), dtype=bool)
        for i in range(num_particles):
            for j in (i - 1, i, i + 1):
                adjacency[i, j % num_particles] = True
        return cls(adjacency)

    @classmethod
    def random(
        cls, num_particles: int, neighborhood_size: int, random_state: np.random.RandomState
    ) -> "InformantGraph":
        """Each particle informs itself, plus neighborhood_size uniformly drawn
        particles (draws may repeat, or hit the particle itself)
        """
        adjacency = np.zeros((num_particles, num_particles), dtype=bool)
        for i in range(num_particles):
            adjacency[i, i] = True
            adjacency[i, random_state.randint(num_particles, size=neighborhood_size)] = True
        return cls(adjacency)

    def informers(self, index: int) -> np.ndarray:
        """Indices of the particles informing the given particle, in ascending order"""
        return np.flatnonzero(self.adjacency[:, index])

    def best_informers(self, fitness: np.ndarray) -> np.ndarray:
        """For each particle, index of its informer with the lowest fitness.
        Informers are scanned in ascending order and only a strictly lower
        fitness replaces the candidate, so ties go to the smallest index.
        """
        best = np.empty(self.num_particles, dtype=int)
        for j in range(self.num_particles):
            informers = self.informers(j)
            best[j] = informers[np.argmin(fitness[informers])]  # argmin returns the first minimum
        return best

    def copy(self) -> "InformantGraph":
        return InformantGraph(self.adjacency.copy())

    def __eq__(self, other: tp.Any) -> bool:
        return isinstance(other, InformantGraph) and np.array_equal(self.adjacency, other.adjacency)

    def __repr__(self) -> str:
        return f"InformantGraph(num_particles={self.num_particles}, num_links={int(self.adjacency.sum())})"


class Topology:
    """Base class for neighborhood topologies.
    Once per step and before any particle moves, :code:`informants` provides
    for each particle the position of its best informant.

    Parameters
    ----------
    num_particles: int
        number of particles in the swarm
    """

    name = ""
    graph: tp.Optional[InformantGraph] = None

    def __init__(self, num_particles: int) -> None:
        self.num_particles = num_particles

    @classmethod
    def from_config(cls, config: Configuration, random_state: np.random.RandomState) -> "Topology":
        return cls(config.swarm_size)  # pylint: disable=unused-argument

    def informants(self, swarm: SwarmState, best_position: np.ndarray, improved: bool) -> np.ndarray:
        """Returns a (num_particles, dimension) array holding the position of the best
        informant of each particle.

        Parameters
        ----------
        swarm: SwarmState
            the swarm, with personal bests as they were at the start of the step
        best_position: np.ndarray
            the global best position found so far
        improved: bool
            whether the global best was improved during the previous step
        """
        raise NotImplementedError

    def _graph_informants(self, swarm: SwarmState) -> np.ndarray:
        assert self.graph is not None
        return swarm.best_positions[self.graph.best_informers(swarm.best_fitness)]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(num_particles={self.num_particles})"


registry: Registry[tp.Type[Topology]] = Registry("topology")


@registry.register
class GlobalTopology(Topology):
    """Every particle is informed by the global best (no graph is materialized).
    Converges fast, with a risk of premature convergence.
    """

    name = "global"

    def informants(self, swarm: SwarmState, best_position: np.ndarray, improved: bool) -> np.ndarray:
        return np.tile(best_position, (swarm.num_particles, 1))


@registry.register
class RingTopology(Topology):
    """Each particle is informed by itself and both its circular neighbors.
    The graph is built once and never changes.
    """

    name = "ring"

    def __init__(self, num_particles: int) -> None:
        super().__init__(num_particles)
        self.graph = InformantGraph.ring(num_particles)

    def informants(self, swarm: SwarmState, best_position: np.ndarray, improved: bool) -> np.ndarray:
        return self._graph_informants(swarm)


@registry.register
class RandomTopology(Topology):
    """Each particle informs itself and neighborhood_size random particles.
    The graph is drawn again each time a step ends without improving the
    global best (and for the first step).

    Parameters
    ----------
    num_particles: int
        number of particles in the swarm
    neighborhood_size: int
        number of random links drawn for each particle
    random_state: np.random.RandomState
        random source for drawing the links
    """

    name = "random"

    def __init__(self, num_particles: int, neighborhood_size: int, random_state: np.random.RandomState) -> None:
        super().__init__(num_particles)
        self.neighborhood_size = neighborhood_size
        self.random_state = random_state
        self.num_rewirings = 0
        self.rewired = False  # whether the graph was drawn again at the last call

    @classmethod
    def from_config(cls, config: Configuration, random_state: np.random.RandomState) -> "Topology":
        return cls(config.swarm_size, config.neighborhood_size, random_state)

    def rewire(self) -> None:
        self.graph = InformantGraph.random(self.num_particles, self.neighborhood_size, self.random_state)
        self.num_rewirings += 1

    def informants(self, swarm: SwarmState, best_position: np.ndarray, improved: bool) -> np.ndarray:
        self.rewired = self.graph is None or not improved
        if self.rewired:
            self.rewire()
        return self._graph_informants(swarm)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(num_particles={self.num_particles}, neighborhood_size={self.neighborhood_size})"
