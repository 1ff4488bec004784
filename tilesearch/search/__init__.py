"""
Search module.

Provides the best-first search engine and its parts:
- Algorithm: Dijkstra or A* with a heuristic
- SearchEngine / SearchRun / search(): run or step through a search
- SearchResult / SearchStatus / SearchStats / SearchOptions: outcomes
- NodeRecord / Frontier / ClosedSet: per-search bookkeeping
- Path / reconstruct_path: the route found
- Observation events and TraceRecorder
"""

from tilesearch.search.algorithms import Algorithm, Ordering
from tilesearch.search.engine import SearchEngine, SearchRun, search
from tilesearch.search.errors import MalformedRecordError, SearchError
from tilesearch.search.events import (
    NodeActivated,
    NodeClosed,
    NodeOpened,
    ObservationSink,
    PathFound,
    SearchEvent,
    SearchFailed,
    TraceRecorder,
)
from tilesearch.search.frontier import ClosedSet, Frontier
from tilesearch.search.path import Path, reconstruct_path
from tilesearch.search.records import NodeRecord, RecordStore
from tilesearch.search.state import (
    SearchOptions,
    SearchResult,
    SearchState,
    SearchStats,
    SearchStatus,
)

__all__ = [
    "Algorithm",
    "Ordering",
    "SearchEngine",
    "SearchRun",
    "search",
    "SearchError",
    "MalformedRecordError",
    "NodeActivated",
    "NodeOpened",
    "NodeClosed",
    "PathFound",
    "SearchFailed",
    "SearchEvent",
    "ObservationSink",
    "TraceRecorder",
    "Frontier",
    "ClosedSet",
    "Path",
    "reconstruct_path",
    "NodeRecord",
    "RecordStore",
    "SearchOptions",
    "SearchResult",
    "SearchState",
    "SearchStats",
    "SearchStatus",
]
