"""
Search algorithm selection.

Dijkstra and A* share one engine and one record type; they differ only in
the heuristic and in which record field orders the frontier.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter

from tilesearch.config import DEFAULT_HEURISTIC
from tilesearch.heuristics import Heuristic, ZeroHeuristic, get_heuristic, is_admissible

HeuristicFn = Callable[[Hashable, Hashable, Hashable], float]


class Ordering(Enum):
    """Record field the frontier is ordered by."""

    COST_SO_FAR = "cost_so_far"
    ESTIMATED_TOTAL_COST = "estimated_total_cost"


@dataclass(frozen=True)
class Algorithm:
    """
    A configured search algorithm.

    Attributes:
        name: Short identifier ('dijkstra' or 'astar')
        heuristic: Callable (start, candidate, goal) -> estimate
        ordering: Record field the frontier is ordered by
    """

    name: str
    heuristic: HeuristicFn
    ordering: Ordering

    @classmethod
    def dijkstra(cls) -> Algorithm:
        """Uniform-cost search."""
        return cls("dijkstra", ZeroHeuristic(), Ordering.COST_SO_FAR)

    @classmethod
    def a_star(cls, heuristic: HeuristicFn | str | None = None, **kwargs) -> Algorithm:
        """
        A* search.

        Args:
            heuristic: Heuristic instance, plain callable, or registry name
                (default: config.DEFAULT_HEURISTIC)
            **kwargs: Passed to get_heuristic() when heuristic is a name
        """
        if heuristic is None:
            heuristic = DEFAULT_HEURISTIC
        if isinstance(heuristic, str):
            heuristic = get_heuristic(heuristic, **kwargs)
        return cls("astar", heuristic, Ordering.ESTIMATED_TOTAL_COST)

    @classmethod
    def from_name(cls, name: str, heuristic: HeuristicFn | str | None = None, **kwargs) -> Algorithm:
        """
        Get an algorithm by name.

        Args:
            name: Algorithm identifier (dijkstra, astar)
            heuristic: Heuristic for astar (ignored by dijkstra)
            **kwargs: Heuristic constructor arguments (e.g., weight)

        Raises:
            ValueError: If algorithm name is unknown
        """
        if name == "dijkstra":
            return cls.dijkstra()
        if name in ("astar", "a*", "a-star"):
            return cls.a_star(heuristic, **kwargs)
        raise ValueError(f"Unknown algorithm '{name}'. Available: dijkstra, astar")

    @property
    def key(self) -> Callable:
        """Frontier ordering key."""
        return attrgetter(self.ordering.value)

    @property
    def admissible(self) -> bool | None:
        """Whether the result is guaranteed optimal (None if unknown)."""
        return is_admissible(self.heuristic)

    @property
    def heuristic_name(self) -> str:
        if isinstance(self.heuristic, Heuristic):
            return self.heuristic.name
        return getattr(self.heuristic, "__name__", repr(self.heuristic))

    def describe(self) -> str:
        """Human-readable label, e.g. 'astar(manhattan)'."""
        if self.name == "dijkstra":
            return self.name
        return f"{self.name}({self.heuristic_name})"
