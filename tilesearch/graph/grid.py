"""
Tile grids: the Tile node type and builders that turn occupancy arrays and
ASCII maps into TileGraphs.

Occupancy arrays are indexed [row, col]; a truthy cell is a wall.

Usage:
    from tilesearch.graph.grid import grid_graph, load_tile_map

    graph = grid_graph(width=3, height=3)
    tile_map = load_tile_map("maps/maze.txt")
    graph = tile_map.to_graph()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from tilesearch.config import (
    DEFAULT_TILE_SCALE,
    MAP_FLOOR_CHARS,
    MAP_GOAL_CHAR,
    MAP_START_CHAR,
    MAP_WALL_CHARS,
)
from tilesearch.graph.model import TileGraph

logger = logging.getLogger(__name__)

# Neighbor order: right, down, left, up
ORTHOGONAL_STEPS = ((0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass(frozen=True)
class Tile:
    """
    A grid cell used as a search node.

    Attributes:
        col: Column index
        row: Row index
        scale: Distance between adjacent tile centres
    """

    col: int
    row: int
    scale: float = DEFAULT_TILE_SCALE

    @property
    def x(self) -> float:
        """Planar x coordinate of the tile centre."""
        return self.col * self.scale

    @property
    def y(self) -> float:
        """Planar y coordinate of the tile centre."""
        return self.row * self.scale

    def __repr__(self) -> str:
        return f"Tile({self.col}, {self.row})"


def graph_from_occupancy(occupancy: np.ndarray, scale: float = DEFAULT_TILE_SCALE) -> TileGraph:
    """
    Build a 4-connected graph over the free cells of an occupancy array.

    Every free cell becomes a Tile; adjacent free cells are joined in both
    directions with cost equal to scale. Walls are left out of the graph.
    """
    grid = np.asarray(occupancy, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"Occupancy grid must be 2-D, got shape {grid.shape}")

    rows, cols = grid.shape
    graph = TileGraph()

    for row, col in np.argwhere(~grid):
        row, col = int(row), int(col)
        tile = Tile(col, row, scale)
        graph.add_node(tile)
        for d_row, d_col in ORTHOGONAL_STEPS:
            n_row, n_col = row + d_row, col + d_col
            if 0 <= n_row < rows and 0 <= n_col < cols and not grid[n_row, n_col]:
                graph.add_connection(tile, Tile(n_col, n_row, scale), scale)

    logger.debug(f"Built grid graph {cols}x{rows}: {graph.stats()}")
    return graph


def grid_graph(width: int, height: int, scale: float = DEFAULT_TILE_SCALE) -> TileGraph:
    """Build an obstacle-free width x height grid graph."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    return graph_from_occupancy(np.zeros((height, width), dtype=bool), scale)


def random_occupancy(
    width: int,
    height: int,
    wall_density: float,
    seed: int | None = None,
    keep_free: tuple[tuple[int, int], ...] = (),
) -> np.ndarray:
    """
    Random occupancy array with roughly wall_density of its cells walled.

    Args:
        width: Number of columns
        height: Number of rows
        wall_density: Probability that a cell is a wall (0..1)
        seed: Random seed for reproducibility
        keep_free: (col, row) cells that are never walled (e.g. start, goal)
    """
    if not 0.0 <= wall_density <= 1.0:
        raise ValueError(f"wall_density must be in [0, 1], got {wall_density}")

    rng = np.random.default_rng(seed)
    grid = rng.random((height, width)) < wall_density
    for col, row in keep_free:
        grid[row, col] = False
    return grid


@dataclass
class TileMap:
    """
    A parsed ASCII map.

    Attributes:
        occupancy: Boolean [row, col] array, True for walls
        start: Start tile, if the map marks one
        goal: Goal tile, if the map marks one
        scale: Tile scale used for coordinates and edge costs
    """

    occupancy: np.ndarray
    start: Tile | None = None
    goal: Tile | None = None
    scale: float = DEFAULT_TILE_SCALE

    @property
    def width(self) -> int:
        return int(self.occupancy.shape[1])

    @property
    def height(self) -> int:
        return int(self.occupancy.shape[0])

    def is_wall(self, col: int, row: int) -> bool:
        return bool(self.occupancy[row, col])

    def tile(self, col: int, row: int) -> Tile:
        """Tile at (col, row) with this map's scale."""
        return Tile(col, row, self.scale)

    def to_graph(self) -> TileGraph:
        return graph_from_occupancy(self.occupancy, self.scale)


def parse_tile_map(text: str, scale: float = DEFAULT_TILE_SCALE) -> TileMap:
    """
    Parse an ASCII map.

    '#' or 'X' is a wall, '.' or ' ' is floor, 'S' marks the start and 'G'
    the goal. Short lines are padded with floor.

    Raises:
        ValueError: On unknown characters, an empty map, or repeated S/G markers
    """
    lines = [line.rstrip("\n") for line in text.strip("\n").splitlines()]
    if not lines or not any(lines):
        raise ValueError("Tile map is empty")

    width = max(len(line) for line in lines)
    occupancy = np.zeros((len(lines), width), dtype=bool)
    start: Tile | None = None
    goal: Tile | None = None

    for row, line in enumerate(lines):
        for col, char in enumerate(line):
            if char in MAP_WALL_CHARS:
                occupancy[row, col] = True
            elif char not in MAP_FLOOR_CHARS:
                raise ValueError(f"Unknown map character {char!r} at row {row}, col {col}")
            elif char == MAP_START_CHAR:
                if start is not None:
                    raise ValueError("Tile map has more than one start marker")
                start = Tile(col, row, scale)
            elif char == MAP_GOAL_CHAR:
                if goal is not None:
                    raise ValueError("Tile map has more than one goal marker")
                goal = Tile(col, row, scale)

    return TileMap(occupancy=occupancy, start=start, goal=goal, scale=scale)


def load_tile_map(path: str | Path, scale: float = DEFAULT_TILE_SCALE) -> TileMap:
    """Read and parse an ASCII map file."""
    path = Path(path)
    logger.info(f"Loading tile map from {path}...")
    with open(path, encoding="utf-8") as f:
        tile_map = parse_tile_map(f.read(), scale)
    logger.info(f"Loaded {tile_map.width}x{tile_map.height} map")
    return tile_map
