"""
msgpack snapshots of a TileGraph.

A snapshot stores nodes once and connections as (source index, target index,
cost) triples, so large grids stay compact:

    {
        "version": 1,
        "node_type": "tile" | "raw",
        "nodes": [[col, row, scale], ...] | [node, ...],
        "connections": [[source_idx, target_idx, cost], ...],
    }

"raw" snapshots hold nodes msgpack can encode directly (ints, strings).
"""

from __future__ import annotations

import logging
from pathlib import Path

import msgpack

from tilesearch.graph.grid import Tile
from tilesearch.graph.model import TileGraph

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def graph_to_dict(graph: TileGraph) -> dict:
    """Convert a graph to the snapshot structure."""
    nodes = graph.nodes
    is_tile = bool(nodes) and all(isinstance(node, Tile) for node in nodes)
    index = {node: i for i, node in enumerate(nodes)}

    if is_tile:
        encoded_nodes = [[node.col, node.row, node.scale] for node in nodes]
    else:
        encoded_nodes = list(nodes)

    return {
        "version": SNAPSHOT_VERSION,
        "node_type": "tile" if is_tile else "raw",
        "nodes": encoded_nodes,
        "connections": [
            [index[c.source], index[c.target], c.cost] for c in graph.edges()
        ],
    }


def graph_from_dict(data: dict) -> TileGraph:
    """
    Rebuild a graph from the snapshot structure.

    Raises:
        ValueError: On an unsupported version or node type, or a bad node index
    """
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version {version!r}")

    node_type = data.get("node_type")
    if node_type == "tile":
        nodes = [Tile(int(col), int(row), float(scale)) for col, row, scale in data["nodes"]]
    elif node_type == "raw":
        nodes = [tuple(node) if isinstance(node, list) else node for node in data["nodes"]]
    else:
        raise ValueError(f"Unknown snapshot node type {node_type!r}")

    graph = TileGraph()
    for node in nodes:
        graph.add_node(node)

    for source_idx, target_idx, cost in data["connections"]:
        if not (0 <= source_idx < len(nodes) and 0 <= target_idx < len(nodes)):
            raise ValueError(f"Connection references missing node ({source_idx}, {target_idx})")
        graph.add_connection(nodes[source_idx], nodes[target_idx], cost)

    return graph


def save_graph(graph: TileGraph, path: str | Path) -> Path:
    """Write graph to path as a msgpack snapshot."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Saving graph snapshot to {path}...")
    with open(path, "wb") as f:
        msgpack.pack(graph_to_dict(graph), f)
    logger.info(f"Saved {graph.node_count():,} nodes, {graph.edge_count():,} connections")
    return path


def load_graph(path: str | Path) -> TileGraph:
    """Load a msgpack snapshot written by save_graph()."""
    path = Path(path)
    logger.info(f"Loading graph snapshot from {path}...")
    with open(path, "rb") as f:
        data = msgpack.load(f)
    graph = graph_from_dict(data)
    logger.info(f"Loaded {graph.node_count():,} nodes, {graph.edge_count():,} connections")
    return graph
