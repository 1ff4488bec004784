"""
Heuristics over planar node coordinates.

Nodes scored by ManhattanHeuristic and CrossProductHeuristic must expose
`x` and `y` attributes (Tile does).
"""

from __future__ import annotations

from collections.abc import Hashable

from tilesearch.config import CROSS_PRODUCT_WEIGHT
from tilesearch.heuristics.base import Heuristic


class ZeroHeuristic(Heuristic):
    """
    Estimates zero everywhere.

    A* with this heuristic orders the frontier by cost so far, i.e. it
    behaves exactly like Dijkstra's algorithm.
    """

    @property
    def name(self) -> str:
        return "zero"

    @property
    def description(self) -> str:
        return "No estimate (uniform-cost / Dijkstra ordering)"

    def estimate(self, start: Hashable, candidate: Hashable, goal: Hashable) -> float:
        return 0.0


class ManhattanHeuristic(Heuristic):
    """
    Manhattan distance between candidate and goal.

    Admissible on 4-connected grids where each step costs the grid spacing.
    """

    @property
    def name(self) -> str:
        return "manhattan"

    @property
    def description(self) -> str:
        return "|dx| + |dy| to the goal"

    def estimate(self, start: Hashable, candidate: Hashable, goal: Hashable) -> float:
        return abs(candidate.x - goal.x) + abs(candidate.y - goal.y)


class CrossProductHeuristic(ManhattanHeuristic):
    """
    Manhattan distance plus a small cross-product tie-breaker.

    The cross product of (goal -> candidate) and (goal -> start) grows as the
    candidate drifts away from the straight start-goal line, so among equally
    cheap tiles the search prefers the ones on that line and expands fewer
    nodes. The extra term can push the estimate above the true remaining
    cost: this heuristic is NOT admissible and may return non-optimal paths.
    """

    def __init__(self, weight: float = CROSS_PRODUCT_WEIGHT) -> None:
        """
        Initialize the heuristic.

        Args:
            weight: Multiplier for the cross-product magnitude
        """
        if weight < 0:
            raise ValueError(f"Cross-product weight must be non-negative, got {weight}")
        self._weight = weight

    @property
    def name(self) -> str:
        return "cross-product"

    @property
    def description(self) -> str:
        return f"Manhattan + {self._weight:g} * |cross| (biased toward the start-goal line)"

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def admissible(self) -> bool:
        return self._weight == 0

    def estimate(self, start: Hashable, candidate: Hashable, goal: Hashable) -> float:
        dx1 = candidate.x - goal.x
        dy1 = candidate.y - goal.y
        dx2 = start.x - goal.x
        dy2 = start.y - goal.y
        cross = abs(dx1 * dy2 - dx2 * dy1)
        return super().estimate(start, candidate, goal) + cross * self._weight

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(weight={self._weight!r})"
