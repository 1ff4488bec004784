"""
Search state and result dataclasses.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from tilesearch.search.events import SearchEvent
from tilesearch.search.frontier import ClosedSet, Frontier
from tilesearch.search.path import Path
from tilesearch.search.records import NodeRecord, RecordStore


class SearchStatus(Enum):
    """How a search ended."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    INVALID_INPUT = "invalid_input"
    CANCELLED = "cancelled"


@dataclass
class SearchOptions:
    """
    Per-search options.

    Attributes:
        record_trace: Keep every event on SearchResult.trace
        step_yield: Iterating a SearchRun yields every event; when False it
            yields only the final event (sinks still see everything)
    """

    record_trace: bool = False
    step_yield: bool = True


@dataclass
class SearchStats:
    """
    Diagnostics for one search.

    Attributes:
        elapsed_ms: Wall-clock time from the first step to the end
        nodes_expanded: Expansions completed (a re-opened node counts again)
        nodes_opened: Records inserted into the frontier, start included
        nodes_reopened: Closed records moved back to the frontier
    """

    elapsed_ms: float = 0.0
    nodes_expanded: int = 0
    nodes_opened: int = 0
    nodes_reopened: int = 0

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000


@dataclass
class SearchState:
    """
    Mutable state of one in-progress search.

    Attributes:
        frontier: Open records
        closed: Fully expanded records
        records: Every record of this search, one per discovered node
    """

    frontier: Frontier
    closed: ClosedSet = field(default_factory=ClosedSet)
    records: RecordStore = field(default_factory=RecordStore)

    def find(self, node: Hashable) -> NodeRecord | None:
        """Record for node if it is closed or open."""
        record = self.closed.find(node)
        if record is None:
            record = self.frontier.find(node)
        return record

    def release(self) -> None:
        """Drop all records."""
        self.frontier.clear()
        self.closed.clear()
        self.records.clear()


@dataclass
class SearchResult:
    """
    Complete record of a finished search.

    Attributes:
        start: Start node
        goal: Goal node
        algorithm: Algorithm label, e.g. 'astar(manhattan)'
        status: How the search ended
        path: Route to the goal (None unless status is SUCCEEDED)
        stats: Timing and expansion counters for this search only
        optimal: True if the path is guaranteed shortest, False if the
            heuristic is inadmissible, None if unknown or no path
        failure_reason: Why no path was produced
        trace: Every event, when SearchOptions.record_trace was set
        timestamp: When the search finished
    """

    start: Hashable
    goal: Hashable
    algorithm: str
    status: SearchStatus
    path: Path | None = None
    stats: SearchStats = field(default_factory=SearchStats)
    optimal: bool | None = None
    failure_reason: str | None = None
    trace: list[SearchEvent] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def succeeded(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED

    @property
    def cost(self) -> float | None:
        """Total path cost, or None without a path."""
        return self.path.cost if self.path is not None else None

    @property
    def nodes(self) -> list[Hashable]:
        """Full route including start, or [] without a path."""
        if self.path is None:
            return []
        return [self.start, *self.path.nodes]

    def summary(self) -> dict:
        """Flat dict for logging and benchmark tables."""
        return {
            "algorithm": self.algorithm,
            "status": self.status.value,
            "cost": self.cost,
            "path_length": len(self.path) if self.path is not None else None,
            "nodes_expanded": self.stats.nodes_expanded,
            "nodes_opened": self.stats.nodes_opened,
            "nodes_reopened": self.stats.nodes_reopened,
            "elapsed_ms": round(self.stats.elapsed_ms, 3),
            "optimal": self.optimal,
        }
