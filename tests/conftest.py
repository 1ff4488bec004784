"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from pathlib import Path

import numpy as np
import pytest

from tilesearch.graph import Tile, TileGraph, grid_graph


def random_graph(seed: int, node_count: int = 8, edge_probability: float = 0.3) -> TileGraph:
    """Random directed graph over int nodes with integer costs in [0, 9]."""
    rng = np.random.default_rng(seed)
    graph = TileGraph()
    for node in range(node_count):
        graph.add_node(node)
    for source in range(node_count):
        for target in range(node_count):
            if source != target and rng.random() < edge_probability:
                graph.add_connection(source, target, int(rng.integers(0, 10)))
    return graph


def brute_force_costs(graph: TileGraph) -> tuple[list, np.ndarray]:
    """All-pairs shortest path costs (Floyd-Warshall); inf where unreachable."""
    nodes = graph.nodes
    index = {node: i for i, node in enumerate(nodes)}
    dist = np.full((len(nodes), len(nodes)), np.inf)
    np.fill_diagonal(dist, 0.0)
    for connection in graph.edges():
        i, j = index[connection.source], index[connection.target]
        dist[i, j] = min(dist[i, j], connection.cost)
    for k in range(len(nodes)):
        dist = np.minimum(dist, dist[:, k, None] + dist[None, k, :])
    return nodes, dist


def path_cost(graph: TileGraph, start, nodes: list) -> float:
    """Sum of edge costs walking nodes from start."""
    total = 0.0
    previous = start
    for node in nodes:
        total += graph.cost(previous, node)
        previous = node
    return total


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def maps_dir(project_root: Path) -> Path:
    """Return the bundled maps directory."""
    return project_root / "maps"


@pytest.fixture
def grid3() -> TileGraph:
    """3x3 obstacle-free grid with unit edge costs."""
    return grid_graph(3, 3)


@pytest.fixture
def corners() -> tuple[Tile, Tile]:
    """Opposite corners of the 3x3 grid."""
    return Tile(0, 0), Tile(2, 2)


@pytest.fixture
def reopening_graph() -> tuple[TileGraph, dict[str, float]]:
    """
    Graph plus an inconsistent heuristic that forces a re-opening.

    A is first closed via S->A (4), then B offers S->B->A (2).
    """
    graph = TileGraph()
    graph.add_connection("S", "A", 4)
    graph.add_connection("S", "B", 1)
    graph.add_connection("B", "A", 1)
    graph.add_connection("A", "G", 10)
    estimates = {"S": 0.0, "A": 0.0, "B": 10.0, "G": 0.0}
    return graph, estimates


@pytest.fixture
def make_random_graph():
    """Factory for random directed graphs."""
    return random_graph


@pytest.fixture
def shortest_costs():
    """All-pairs brute-force reference."""
    return brute_force_costs


@pytest.fixture
def walk_cost():
    """Cost of walking a node list from a start node."""
    return path_cost
