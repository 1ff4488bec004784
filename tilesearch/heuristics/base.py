"""
Heuristic base class for guiding A* search.

A heuristic estimates the remaining cost from a candidate node to the goal.
It is called as heuristic(start, candidate, goal) and must return a
non-negative float without side effects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable


class Heuristic(ABC):
    """
    Abstract base class for search heuristics.

    Subclasses are stateless after construction, so one instance can be
    shared by any number of concurrent searches.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for the heuristic (e.g., 'zero', 'manhattan')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the estimate."""
        ...

    @property
    def admissible(self) -> bool:
        """
        Whether the estimate never exceeds the true remaining cost.

        Only an admissible heuristic guarantees A* returns an optimal path.
        """
        return True

    @abstractmethod
    def estimate(self, start: Hashable, candidate: Hashable, goal: Hashable) -> float:
        """
        Estimate the remaining cost from candidate to goal.

        Args:
            start: Node the search started from
            candidate: Node being scored
            goal: Node the search is heading for

        Returns:
            A non-negative cost estimate
        """
        ...

    def __call__(self, start: Hashable, candidate: Hashable, goal: Hashable) -> float:
        return self.estimate(start, candidate, goal)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
