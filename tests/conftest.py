"""Shared fixtures for the relief allocation tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from models import Location, ReliefNetwork
from scenarios import build_scenario
from shortest_paths import ShortestPathGraph


@pytest.fixture
def line_graph() -> ShortestPathGraph:
    """A-B weight 5, B-C weight 3, no direct A-C road."""
    graph = ShortestPathGraph(3)
    graph.add_edge(0, 1, 5)
    graph.add_edge(1, 2, 3)
    return graph


@pytest.fixture
def flood_network() -> ReliefNetwork:
    return build_scenario("FLOOD")


@pytest.fixture
def island_network() -> ReliefNetwork:
    return build_scenario("ISLAND")


@pytest.fixture
def two_location_network() -> ReliefNetwork:
    net = ReliefNetwork(name="pair")
    net.add_location(Location("Depot", supply=10, demand=0))
    net.add_location(Location("Village", supply=0, demand=7))
    net.add_edge(0, 1, 4)
    return net


@pytest.fixture
def make_random_graph():
    """Factory for seeded random graphs (zero weights and parallel edges allowed)."""

    def _make(seed: int, n_locations: int = 8, n_edges: int = 12) -> ShortestPathGraph:
        rng = np.random.default_rng(seed)
        graph = ShortestPathGraph(n_locations)
        for _ in range(n_edges):
            u, v = rng.choice(n_locations, size=2, replace=False)
            graph.add_edge(int(u), int(v), int(rng.integers(0, 20)))
        return graph

    return _make
