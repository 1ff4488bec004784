#!/usr/bin/env python3
"""
tilesearch CLI - Run one search on a tile map and print the result.

Usage:
    python scripts/search.py
    python scripts/search.py --map maps/open.txt --algorithm astar --heuristic manhattan
    python scripts/search.py --map maps/maze.txt --algorithm astar --heuristic cross-product --weight 0.01
    python scripts/search.py --width 20 --height 10 --walls 0.3 --seed 4 --show-search
    python scripts/search.py --map maps/maze.txt --replay --delay 0.05

Algorithms:
    dijkstra    - Uniform-cost search
    astar       - A* (use --heuristic to pick the estimate)

Heuristics:
    zero          - No estimate (same ordering as Dijkstra)
    manhattan     - |dx| + |dy| (admissible on 4-connected grids)
    cross-product - Manhattan biased toward the start-goal line (not admissible)

Map legend:
    #  wall     S  start    G  goal
    *  path     o  closed   +  still open
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tilesearch.config import DEFAULT_MAP_PATH, LOG_LEVEL  # noqa: E402
from tilesearch.graph import Tile, TileMap, load_tile_map, random_occupancy  # noqa: E402
from tilesearch.search import (  # noqa: E402
    Algorithm,
    NodeActivated,
    NodeClosed,
    NodeOpened,
    SearchEngine,
    SearchOptions,
    SearchResult,
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find a path on a tile map with Dijkstra or A*",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--map",
        type=Path,
        default=None,
        help=f"ASCII map file (default: {DEFAULT_MAP_PATH.name} unless --width/--height are given)",
    )
    parser.add_argument("--width", type=int, default=None, help="Width of a random grid")
    parser.add_argument("--height", type=int, default=None, help="Height of a random grid")
    parser.add_argument(
        "--walls",
        type=float,
        default=0.2,
        help="Wall density for random grids (default: 0.2)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for random grids")
    parser.add_argument(
        "--algorithm",
        type=str,
        default="dijkstra",
        choices=["dijkstra", "astar"],
        help="Search algorithm (default: dijkstra)",
    )
    parser.add_argument(
        "--heuristic",
        type=str,
        default="manhattan",
        choices=["zero", "manhattan", "cross-product"],
        help="Heuristic for --algorithm astar (default: manhattan)",
    )
    parser.add_argument(
        "--weight",
        type=float,
        default=None,
        help="Cross-product weight for --heuristic cross-product",
    )
    parser.add_argument(
        "--show-search",
        action="store_true",
        help="Mark closed and open tiles on the printed map",
    )
    parser.add_argument(
        "--replay",
        action="store_true",
        help="Redraw the map after every search step",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.02,
        help="Seconds between frames for --replay (default: 0.02)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def build_map(args: argparse.Namespace) -> TileMap:
    """Load the requested map or generate a random one."""
    if args.width or args.height:
        width = args.width or args.height
        height = args.height or args.width
        start, goal = (0, 0), (width - 1, height - 1)
        occupancy = random_occupancy(width, height, args.walls, seed=args.seed, keep_free=(start, goal))
        return TileMap(occupancy=occupancy, start=Tile(*start), goal=Tile(*goal))

    tile_map = load_tile_map(args.map or DEFAULT_MAP_PATH)
    if tile_map.start is None or tile_map.goal is None:
        raise ValueError("Map must mark a start (S) and a goal (G)")
    return tile_map


def render(
    tile_map: TileMap,
    path_tiles: set[Tile] = frozenset(),
    closed: set[Tile] = frozenset(),
    opened: set[Tile] = frozenset(),
) -> str:
    """Draw the map with search markings."""
    lines = []
    for row in range(tile_map.height):
        chars = []
        for col in range(tile_map.width):
            tile = tile_map.tile(col, row)
            if tile_map.is_wall(col, row):
                chars.append("#")
            elif tile == tile_map.start:
                chars.append("S")
            elif tile == tile_map.goal:
                chars.append("G")
            elif tile in path_tiles:
                chars.append("*")
            elif tile in closed:
                chars.append("o")
            elif tile in opened:
                chars.append("+")
            else:
                chars.append(".")
        lines.append("".join(chars))
    return "\n".join(lines)


def replay(tile_map: TileMap, engine: SearchEngine, delay: float) -> SearchResult:
    """Step through the search, redrawing after every event."""
    run = engine.start(tile_map.start, tile_map.goal)
    closed: set[Tile] = set()
    opened: set[Tile] = set()

    try:
        for event in run:
            if isinstance(event, NodeOpened):
                opened.add(event.node)
            elif isinstance(event, NodeClosed):
                opened.discard(event.node)
                closed.add(event.node)
            elif isinstance(event, NodeActivated):
                opened.discard(event.node)
            else:
                continue
            print("\033[H\033[J" + render(tile_map, closed=closed, opened=opened))
            time.sleep(delay)
    except KeyboardInterrupt:
        run.cancel()

    return run.result


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Set up logging
    log_level = logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        tile_map = build_map(args)
        heuristic_kwargs = {"weight": args.weight} if args.weight is not None else {}
        if heuristic_kwargs and args.heuristic != "cross-product":
            raise ValueError("--weight only applies to --heuristic cross-product")
        algorithm = Algorithm.from_name(args.algorithm, args.heuristic, **heuristic_kwargs)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n" + "=" * 60)
    print("tilesearch")
    print("=" * 60)
    print(f"  Map:       {tile_map.width}x{tile_map.height}")
    print(f"  Start:     {tile_map.start}")
    print(f"  Goal:      {tile_map.goal}")
    print(f"  Algorithm: {algorithm.describe()}")
    print("=" * 60 + "\n")

    engine = SearchEngine(tile_map.to_graph(), algorithm, SearchOptions(record_trace=True))

    if args.replay:
        result = replay(tile_map, engine, args.delay)
    else:
        result = engine.search(tile_map.start, tile_map.goal)

    closed = {e.node for e in result.trace if isinstance(e, NodeClosed)} if args.show_search else set()
    opened = {e.node for e in result.trace if isinstance(e, NodeOpened)} - closed if args.show_search else set()
    path_tiles = set(result.path.nodes) if result.path is not None else set()
    print(render(tile_map, path_tiles, closed, opened))

    print("\n" + "=" * 60)
    if result.succeeded:
        print(f"Path found: {len(result.path)} steps, cost {result.cost:g}")
        if result.optimal is False:
            print("  (heuristic is not admissible - path may not be the shortest)")
    else:
        print(f"No path: {result.failure_reason}")
    print("=" * 60)

    print(f"\nNodes expanded: {result.stats.nodes_expanded}")
    print(f"Nodes re-opened: {result.stats.nodes_reopened}")
    print(f"Elapsed: {result.stats.elapsed_seconds:.4f} seconds")

    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
