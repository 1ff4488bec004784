"""
Graph module.

Provides the graph the search engine walks over:
- Connection / Graph / TileGraph: weighted directed adjacency
- Tile, grid_graph, parse_tile_map: grid construction
- save_graph / load_graph: msgpack snapshots
"""

from tilesearch.graph.grid import (
    Tile,
    TileMap,
    graph_from_occupancy,
    grid_graph,
    load_tile_map,
    parse_tile_map,
    random_occupancy,
)
from tilesearch.graph.model import Connection, Graph, TileGraph
from tilesearch.graph.snapshot import load_graph, save_graph

__all__ = [
    "Connection",
    "Graph",
    "TileGraph",
    "Tile",
    "TileMap",
    "graph_from_occupancy",
    "grid_graph",
    "load_tile_map",
    "parse_tile_map",
    "random_occupancy",
    "load_graph",
    "save_graph",
]
