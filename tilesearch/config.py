"""
Configuration constants for the tilesearch project.

All paths, defaults, and tunable parameters are defined here.
Environment overrides are read from the process environment (and a local
.env file, if present) - nothing here is required to be set.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of tilesearch/
PROJECT_ROOT = Path(__file__).parent.parent

# Sample ASCII tile maps
MAPS_DIR = PROJECT_ROOT / "maps"

# Individual map file paths
MAZE_MAP_PATH = MAPS_DIR / "maze.txt"
OPEN_MAP_PATH = MAPS_DIR / "open.txt"
WALLED_MAP_PATH = MAPS_DIR / "walled.txt"

# Default map used by the CLI when no --map is given
DEFAULT_MAP_PATH = MAZE_MAP_PATH

# Graph snapshots written by save_graph()
SNAPSHOT_DIR = PROJECT_ROOT / "data"

# =============================================================================
# Grid Configuration
# =============================================================================

# Distance between adjacent tile centres. Uniform edge cost equals this value.
DEFAULT_TILE_SCALE = 1.0

# Tile map characters
MAP_WALL_CHARS = frozenset("#X")
MAP_FLOOR_CHARS = frozenset(".SG ")
MAP_START_CHAR = "S"
MAP_GOAL_CHAR = "G"

# =============================================================================
# Heuristic Configuration
# =============================================================================

# Tie-break weight for the cross-product heuristic:
# h(n) = manhattan(n) + WEIGHT * |cross(goal->n, goal->start)|
# Empirical value tuned on square grids; it makes the heuristic inadmissible.
CROSS_PRODUCT_WEIGHT = float(os.environ.get("TILESEARCH_CROSS_PRODUCT_WEIGHT", "0.001"))

# Heuristic used by Algorithm.a_star() when none is given
DEFAULT_HEURISTIC = "manhattan"

# =============================================================================
# Benchmark Configuration
# =============================================================================

# Grid sizes used by scripts/benchmark.py
BENCHMARK_GRID_SIZES = (16, 32, 64)

# Fraction of tiles turned into walls in random benchmark grids
BENCHMARK_WALL_DENSITY = 0.25

# Seed for reproducible benchmark grids
BENCHMARK_SEED = 7

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("TILESEARCH_LOG_LEVEL", "INFO")

# =============================================================================
# Validation Helpers
# =============================================================================

def validate_map_files() -> dict[str, bool]:
    """Check which bundled map files exist."""
    return {
        "maze": MAZE_MAP_PATH.exists(),
        "open": OPEN_MAP_PATH.exists(),
        "walled": WALLED_MAP_PATH.exists(),
    }


def get_missing_map_files() -> list[str]:
    """Return list of missing map file names."""
    status = validate_map_files()
    return [name for name, exists in status.items() if not exists]
