#!/usr/bin/env python3
"""
Quick benchmark to compare algorithms on random grids.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --sizes 32 64 128 --trials 5
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import logging
logging.basicConfig(level=logging.ERROR)  # Quiet mode

from tilesearch.config import (  # noqa: E402
    BENCHMARK_GRID_SIZES,
    BENCHMARK_SEED,
    BENCHMARK_WALL_DENSITY,
)
from tilesearch.graph import Tile, graph_from_occupancy, random_occupancy  # noqa: E402
from tilesearch.search import Algorithm, SearchEngine  # noqa: E402

# Algorithms to compare: (label, factory)
ALGORITHMS = [
    ("dijkstra", Algorithm.dijkstra),
    ("astar(manhattan)", lambda: Algorithm.a_star("manhattan")),
    ("astar(cross-product)", lambda: Algorithm.a_star("cross-product")),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare Dijkstra and A* on random grids")
    parser.add_argument("--sizes", type=int, nargs="+", default=list(BENCHMARK_GRID_SIZES))
    parser.add_argument("--trials", type=int, default=3, help="Grids per size (default: 3)")
    parser.add_argument("--walls", type=float, default=BENCHMARK_WALL_DENSITY)
    parser.add_argument("--seed", type=int, default=BENCHMARK_SEED)
    return parser.parse_args()


def run_benchmark(sizes: list[int], trials: int, walls: float, seed: int) -> None:
    print("=" * 70)
    print("tilesearch - Algorithm Comparison")
    print("=" * 70)
    print(f"\nTesting {len(ALGORITHMS)} algorithms on {len(sizes) * trials} grids...\n")

    results = {label: [] for label, _ in ALGORITHMS}

    for size in sizes:
        for trial in range(trials):
            start, goal = (0, 0), (size - 1, size - 1)
            occupancy = random_occupancy(
                size, size, walls, seed=seed + trial, keep_free=(start, goal)
            )
            graph = graph_from_occupancy(occupancy)

            print(f"\n[{size}x{size} #{trial + 1}]")
            print("-" * 50)

            reference_cost = None
            for label, factory in ALGORITHMS:
                result = SearchEngine(graph, factory()).search(Tile(*start), Tile(*goal))
                results[label].append(result)

                if not result.succeeded:
                    print(f"  {label:22} : NO PATH ({result.stats.nodes_expanded} expanded)")
                    continue

                if reference_cost is None:
                    reference_cost = result.cost
                note = "" if result.cost == reference_cost else f"  (+{result.cost - reference_cost:g})"
                print(
                    f"  {label:22} : cost {result.cost:5g}{note}, "
                    f"{result.stats.nodes_expanded:6} expanded, {result.stats.elapsed_ms:8.2f} ms"
                )

    # Summary
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)

    for label, _ in ALGORITHMS:
        solved = [r for r in results[label] if r.succeeded]
        total = len(results[label])
        avg_expanded = sum(r.stats.nodes_expanded for r in solved) / len(solved) if solved else 0
        avg_ms = sum(r.stats.elapsed_ms for r in solved) / len(solved) if solved else 0

        print(f"  {label:22} : {len(solved)}/{total} solved, avg {avg_expanded:.0f} expanded, {avg_ms:.2f} ms")


if __name__ == "__main__":
    args = parse_args()
    run_benchmark(args.sizes, args.trials, args.walls, args.seed)
