# shortest_paths.py
"""
Shortest Travel Distances for Relief Networks

Stores the road network as a weighted undirected adjacency list and answers
shortest-distance queries with Dijkstra's algorithm:
1. Single-source distances from one location
2. All-pairs distance matrix (one search per location, optionally threaded)
3. scipy.sparse.csgraph cross-check of the all-pairs matrix

Edge weights must be non-negative. Unreachable pairs carry UNREACHABLE.
"""

import heapq
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Tuple

import numpy as np
from scipy.sparse.csgraph import csgraph_from_dense, shortest_path

from models import ReliefNetwork

logger = logging.getLogger(__name__)

UNREACHABLE = math.inf


class ShortestPathGraph:
    """Weighted undirected graph over locations 0..n_locations-1."""

    def __init__(self, n_locations: int):
        if n_locations <= 0:
            raise ValueError(f"Graph needs at least one location, got {n_locations}")
        self.n_locations = n_locations
        # adj[u] holds (neighbor, weight) pairs; parallel edges are kept
        self.adj: List[List[Tuple[int, int]]] = [[] for _ in range(n_locations)]
        self._edges: List[Tuple[int, int, int]] = []

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < self.n_locations:
            raise ValueError(f"Location index {idx} out of range [0, {self.n_locations})")

    def add_edge(self, u: int, v: int, weight: int) -> None:
        """Add an undirected edge. Parallel edges are not deduplicated."""
        self._check_index(u)
        self._check_index(v)
        if weight < 0:
            raise ValueError(f"Edge {u}-{v} has negative weight {weight}")

        self.adj[u].append((v, weight))
        self.adj[v].append((u, weight))
        self._edges.append((u, v, weight))

    def neighbors(self, u: int) -> List[Tuple[int, int]]:
        self._check_index(u)
        return list(self.adj[u])

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yield each undirected edge once, in insertion order."""
        return iter(self._edges)

    def single_source_distances(self, src: int) -> np.ndarray:
        """
        Dijkstra from a single source.

        Args:
            src: Source location index

        Returns:
            Length-n array of shortest distances, UNREACHABLE where no path exists
        """
        self._check_index(src)

        dist = np.full(self.n_locations, UNREACHABLE)
        dist[src] = 0
        heap = [(0, src)]

        while heap:
            d, u = heapq.heappop(heap)
            if d > dist[u]:
                continue  # stale entry, u already settled closer
            for v, weight in self.adj[u]:
                candidate = d + weight
                if candidate < dist[v]:
                    dist[v] = candidate
                    heapq.heappush(heap, (candidate, v))

        return dist

    def all_pairs_distances(self, max_workers: Optional[int] = None) -> np.ndarray:
        """
        Run single_source_distances from every location.

        Args:
            max_workers: Thread count for the independent searches (None or 1 = sequential)

        Returns:
            n x n distance matrix, matrix[i][j] == matrix[j][i], zero diagonal
        """
        sources = range(self.n_locations)

        if max_workers is not None and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                rows = list(executor.map(self.single_source_distances, sources))
        else:
            rows = [self.single_source_distances(src) for src in sources]

        logger.info("Computed %dx%d distance matrix over %d edges",
                    self.n_locations, self.n_locations, len(self._edges))
        return np.vstack(rows)


# =============================================================================
# CONSTRUCTION AND CROSS-CHECK
# =============================================================================

def build_graph(network: ReliefNetwork) -> ShortestPathGraph:
    """Build the shortest-path graph for a network's locations and edges."""
    graph = ShortestPathGraph(len(network.locations))
    for edge in network.edges:
        graph.add_edge(edge.source, edge.target, edge.weight)
    return graph


def scipy_distance_matrix(graph: ShortestPathGraph) -> np.ndarray:
    """
    All-pairs distances computed independently with scipy.sparse.csgraph.

    Parallel edges collapse to their lightest weight. Zero-weight edges stay
    edges because the null value of the dense form is infinity.
    """
    n = graph.n_locations
    dense = np.full((n, n), np.inf)
    for u, v, weight in graph.edges():
        if weight < dense[u, v]:
            dense[u, v] = weight
            dense[v, u] = weight

    sparse = csgraph_from_dense(dense, null_value=np.inf)
    return shortest_path(sparse, method="D", directed=False)
