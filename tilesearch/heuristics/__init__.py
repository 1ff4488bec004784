"""
Heuristics module.

Provides heuristic functions for guiding A* search:
- ZeroHeuristic: No estimate (Dijkstra ordering)
- ManhattanHeuristic: |dx| + |dy| to the goal
- CrossProductHeuristic: Manhattan biased toward the start-goal line
"""

from tilesearch.heuristics.base import Heuristic
from tilesearch.heuristics.planar import (
    CrossProductHeuristic,
    ManhattanHeuristic,
    ZeroHeuristic,
)

__all__ = [
    "Heuristic",
    "ZeroHeuristic",
    "ManhattanHeuristic",
    "CrossProductHeuristic",
    "get_heuristic",
    "is_admissible",
]

HEURISTICS = {
    "zero": ZeroHeuristic,
    "manhattan": ManhattanHeuristic,
    "cross-product": CrossProductHeuristic,
}


def get_heuristic(name: str, **kwargs) -> Heuristic:
    """
    Get a heuristic by name.

    Args:
        name: Heuristic identifier (zero, manhattan, cross-product)
        **kwargs: Additional arguments passed to the constructor (e.g., weight)

    Returns:
        Instantiated heuristic

    Raises:
        ValueError: If heuristic name is unknown
    """
    if name not in HEURISTICS:
        available = ", ".join(HEURISTICS.keys())
        raise ValueError(f"Unknown heuristic '{name}'. Available: {available}")

    # Only the cross-product heuristic is tunable
    if name == "cross-product":
        return CrossProductHeuristic(**kwargs)

    return HEURISTICS[name]()


def is_admissible(heuristic) -> bool | None:
    """
    Admissibility of a heuristic, or None when it cannot be known.

    Plain callables carry no admissibility claim.
    """
    if isinstance(heuristic, Heuristic):
        return heuristic.admissible
    return None
