# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from swarmopt.common import errors
from swarmopt.common import testing
from . import topologies
from .config import Configuration
from .swarm import SwarmState


def _make_swarm(best_fitness: list) -> SwarmState:
    swarm = SwarmState(len(best_fitness), 1)
    swarm.best_fitness[...] = best_fitness
    swarm.best_positions[:, 0] = np.arange(len(best_fitness))  # position encodes the index
    return swarm


def test_informant_graph_square() -> None:
    with pytest.raises(ValueError):
        topologies.InformantGraph(np.zeros((3, 2)))


@testing.parametrized(
    one=(1,),
    two=(2,),
    three=(3,),
    many=(17,),
)
def test_ring_graph(num_particles: int) -> None:
    graph = topologies.InformantGraph.ring(num_particles)
    for j in range(num_particles):
        expected = sorted({(j - 1) % num_particles, j, (j + 1) % num_particles})
        np.testing.assert_array_equal(graph.informers(j), expected)
    if num_particles >= 3:
        np.testing.assert_array_equal(graph.adjacency.sum(axis=0), [3] * num_particles)


def test_random_graph() -> None:
    graph = topologies.InformantGraph.random(10, 3, np.random.RandomState(12))
    assert graph.num_particles == 10
    assert all(graph.adjacency[i, i] for i in range(10))
    # self link plus at most 3 distinct drawn targets
    assert np.all(graph.adjacency.sum(axis=1) <= 4)
    assert np.all(graph.adjacency.sum(axis=1) >= 1)
    graph0 = topologies.InformantGraph.random(10, 0, np.random.RandomState(12))
    np.testing.assert_array_equal(graph0.adjacency, np.eye(10, dtype=bool))


def test_best_informers_ties() -> None:
    graph = topologies.InformantGraph(np.ones((4, 4), dtype=bool))
    np.testing.assert_array_equal(graph.best_informers(np.array([3.0, 1.0, 0.5, 0.5])), [2, 2, 2, 2])
    graph = topologies.InformantGraph.ring(4)
    # particle 0 is informed by 3, 0 and 1, scanned in ascending order
    np.testing.assert_array_equal(graph.best_informers(np.array([1.0, 1.0, 2.0, 1.0])), [0, 0, 1, 0])


def test_graph_copy_and_equality() -> None:
    graph = topologies.InformantGraph.ring(5)
    other = graph.copy()
    assert graph == other
    other.adjacency[0, 3] = True
    assert graph != other
    assert repr(graph) == "InformantGraph(num_particles=5, num_links=15)"


def test_global_topology() -> None:
    topology = topologies.GlobalTopology(3)
    assert topology.graph is None
    informants = topology.informants(_make_swarm([1.0, 2.0, 3.0]), np.array([12.0]), improved=False)
    np.testing.assert_array_equal(informants, [[12.0]] * 3)


def test_ring_topology_is_static() -> None:
    topology = topologies.RingTopology(5)
    graph = topology.graph
    assert graph is not None
    reference = graph.copy()
    swarm = _make_swarm([5.0, 4.0, 0.0, 3.0, 1.0])
    for improved in [False, True, False]:
        informants = topology.informants(swarm, np.array([0.0]), improved)
        np.testing.assert_array_equal(informants[:, 0], [4, 2, 2, 2, 4])
    assert topology.graph == reference


def test_random_topology_rewiring() -> None:
    topology = topologies.RandomTopology(6, 2, np.random.RandomState(12))
    assert topology.graph is None
    swarm = _make_swarm([1.0] * 6)
    sequence = [(False, True), (True, False), (False, True), (False, True), (True, False)]
    for improved, rewired in sequence:
        graph = topology.graph
        topology.informants(swarm, np.array([0.0]), improved)
        assert topology.rewired == rewired
        if not rewired:
            assert topology.graph is graph
    assert topology.num_rewirings == 3


def test_random_topology_informants() -> None:
    topology = topologies.RandomTopology(4, 0, np.random.RandomState(12))
    swarm = _make_swarm([1.0, 0.0, 2.0, 3.0])
    informants = topology.informants(swarm, np.array([0.0]), improved=False)
    # no random link: every particle only informs itself
    np.testing.assert_array_equal(informants[:, 0], [0, 1, 2, 3])


@testing.parametrized(
    global_=("global", topologies.GlobalTopology),
    ring=("ring", topologies.RingTopology),
    random=("random", topologies.RandomTopology),
)
def test_registry(name: str, cls: type) -> None:
    config = Configuration(2, 0, 1, topology=name, swarm_size=7)
    topology = topologies.registry.resolve(name).from_config(config, np.random.RandomState(12))
    assert isinstance(topology, cls)
    assert topology.num_particles == 7


def test_registry_unknown() -> None:
    with pytest.raises(errors.ConfigurationError):
        topologies.registry.resolve("blublu")
