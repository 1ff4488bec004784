"""
Best-first search engine for Dijkstra and A*.

A search can run to completion in one call, or be stepped through one
event at a time so an observer can pace its own drawing:

    run = SearchEngine(graph, Algorithm.a_star("manhattan")).start(start, goal)
    for event in run:
        draw(event)
    result = run.result

Each run owns its own frontier, closed set and records; runs never share
state, so any number can be in flight at once.
"""

from __future__ import annotations

import inspect
import logging
import math
import time
from collections.abc import Generator, Hashable, Iterator

from tilesearch.graph.model import Graph
from tilesearch.search.algorithms import Algorithm
from tilesearch.search.errors import SearchCancelled, SearchError
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
from tilesearch.search.frontier import Frontier
from tilesearch.search.path import Path, reconstruct_path
from tilesearch.search.state import (
    SearchOptions,
    SearchResult,
    SearchState,
    SearchStats,
    SearchStatus,
)

logger = logging.getLogger(__name__)


class SearchRun:
    """
    One search from start to goal.

    Iterating a run advances the search; every yielded event is a point
    where the caller may pause or cancel(). run_to_completion() drives it
    without pausing. The outcome is on .result once the run has ended.
    """

    def __init__(
        self,
        graph: Graph,
        start: Hashable,
        goal: Hashable,
        algorithm: Algorithm,
        options: SearchOptions | None = None,
        sink: ObservationSink | None = None,
    ) -> None:
        self._graph = graph
        self._start = start
        self._goal = goal
        self._algorithm = algorithm
        self._options = options or SearchOptions()
        self._sink = sink
        self._trace = TraceRecorder() if self._options.record_trace else None

        self._state: SearchState | None = None
        self._stats = SearchStats()
        self._result: SearchResult | None = None
        self._cancelled = False
        self._faulted = False
        self._started_at: float | None = None
        self._events = self._execute()

    @property
    def result(self) -> SearchResult | None:
        """Outcome of the run, or None while it is still going."""
        return self._result

    @property
    def done(self) -> bool:
        return self._result is not None or self._faulted

    @property
    def stats(self) -> SearchStats:
        """Live counters (final once the run is done)."""
        return self._stats

    @property
    def state(self) -> SearchState | None:
        """Frontier/closed/records while running; None once released."""
        return self._state

    def cancel(self) -> None:
        """
        Abort the run. No path is produced and all records are dropped.

        Safe to call from a sink while the run is executing, in which case
        the run stops at its next event.
        """
        if self.done:
            return
        self._cancelled = True
        if inspect.getgeneratorstate(self._events) != inspect.GEN_RUNNING:
            self._events.close()
            if self._result is None:
                self._finish(SearchStatus.CANCELLED, failure_reason="Search cancelled")

    def run_to_completion(self) -> SearchResult:
        """Run the remaining steps without pausing and return the result."""
        for _ in self._events:
            pass
        return self._result

    def __iter__(self) -> Iterator[SearchEvent]:
        if self._options.step_yield:
            return self._events
        return self._final_event_only()

    def _final_event_only(self) -> Iterator[SearchEvent]:
        last = None
        for last in self._events:
            pass
        if last is not None:
            yield last

    # =========================================================================
    # Search loop
    # =========================================================================

    def _execute(self) -> Generator[SearchEvent, None, None]:
        self._started_at = time.perf_counter()
        try:
            yield from self._search()
        except SearchCancelled:
            pass
        except SearchError as e:
            self._faulted = True
            logger.error(f"Search {self._start!r} -> {self._goal!r} aborted, record bookkeeping is broken: {e}")
            raise
        except Exception as e:
            self._faulted = True
            logger.error(f"Search {self._start!r} -> {self._goal!r} aborted: {e}")
            raise
        finally:
            if self._result is None and not self._faulted:
                self._finish(SearchStatus.CANCELLED, failure_reason="Search cancelled")
            self._release()

    def _search(self) -> Generator[SearchEvent, None, None]:
        reason = self._validate()
        if reason is not None:
            yield self._finish(SearchStatus.INVALID_INPUT, failure_reason=reason)
            return

        if self._algorithm.admissible is False:
            logger.warning(
                f"Heuristic '{self._algorithm.heuristic_name}' is not admissible; "
                "the path found may not be the shortest"
            )

        start, goal = self._start, self._goal
        state = self._state = SearchState(Frontier(self._algorithm.key))
        stats = self._stats

        start_record = state.records.create(start)
        start_record.update(0.0, None, self._estimate(start))
        state.frontier.insert(start_record)
        stats.nodes_opened += 1

        while state.frontier:
            current = state.frontier.extract_min()
            yield from self._emit(NodeActivated(current.node))

            if current.node == goal:
                path = reconstruct_path(current, start, state)
                yield self._finish(SearchStatus.SUCCEEDED, path=path)
                return

            for connection in self._graph.connections(current.node):
                neighbor = connection.target
                if connection.cost < 0:
                    raise ValueError(
                        f"Negative cost {connection.cost} on {current.node!r} -> {neighbor!r}"
                    )
                # A self loop can never beat the route we are expanding
                if neighbor == current.node:
                    continue

                cost = current.cost_so_far + connection.cost

                record = state.closed.find(neighbor)
                if record is not None:
                    if record.cost_so_far <= cost:
                        continue
                    state.closed.remove(record)
                    stats.nodes_reopened += 1
                    heuristic = record.heuristic
                    logger.debug(f"Re-opening {neighbor!r}: {record.cost_so_far:g} -> {cost:g}")
                else:
                    record = state.frontier.find(neighbor)
                    if record is not None:
                        if record.cost_so_far <= cost:
                            continue
                        heuristic = record.heuristic
                    else:
                        record = state.records.create(neighbor)
                        heuristic = self._estimate(neighbor)

                record.update(cost, current.node, heuristic)
                if state.frontier.contains(neighbor):
                    state.frontier.update(record)
                else:
                    state.frontier.insert(record)
                    stats.nodes_opened += 1
                yield from self._emit(NodeOpened(neighbor, cost))

            state.closed.add(current)
            stats.nodes_expanded += 1
            yield from self._emit(NodeClosed(current.node))

        yield self._finish(SearchStatus.FAILED, failure_reason="No path found")

    def _emit(self, event: SearchEvent) -> Generator[SearchEvent, None, None]:
        """Publish an event, suspend on it, then honour a pending cancel()."""
        self._publish(event)
        if self._cancelled:
            raise SearchCancelled()
        yield event
        if self._cancelled:
            raise SearchCancelled()

    def _publish(self, event: SearchEvent) -> None:
        if self._trace is not None:
            self._trace.notify(event)
        if self._sink is not None:
            self._sink.notify(event)

    def _estimate(self, node: Hashable) -> float:
        value = self._algorithm.heuristic(self._start, node, self._goal)
        if math.isnan(value) or value < 0:
            raise ValueError(
                f"Heuristic '{self._algorithm.heuristic_name}' returned {value!r} for {node!r}"
            )
        return value

    def _validate(self) -> str | None:
        """Reason the start/goal pair cannot be searched, or None."""
        if self._start is None or self._goal is None:
            return "Start and goal are required"
        if self._start not in self._graph:
            return f"Start {self._start!r} is not in the graph"
        if self._goal not in self._graph:
            return f"Goal {self._goal!r} is not in the graph"
        return None

    # =========================================================================
    # Completion
    # =========================================================================

    def _finish(
        self,
        status: SearchStatus,
        path: Path | None = None,
        failure_reason: str | None = None,
    ) -> SearchEvent:
        """Build the result, publish the final event and return it."""
        if self._started_at is not None:
            self._stats.elapsed_ms = (time.perf_counter() - self._started_at) * 1000

        optimal = None
        if status is SearchStatus.SUCCEEDED:
            optimal = self._algorithm.admissible

        final: SearchEvent = PathFound(path) if path is not None else SearchFailed(failure_reason)
        self._publish(final)

        self._result = SearchResult(
            start=self._start,
            goal=self._goal,
            algorithm=self._algorithm.describe(),
            status=status,
            path=path,
            stats=self._stats,
            optimal=optimal,
            failure_reason=failure_reason,
            trace=list(self._trace.events) if self._trace is not None else [],
        )
        self._log_result()
        self._release()
        return final

    def _log_result(self) -> None:
        result = self._result
        stats = result.stats
        if result.succeeded:
            logger.info(
                f"{result.algorithm}: path found ({len(result.path)} steps, cost {result.cost:g}), "
                f"{stats.nodes_expanded} nodes expanded in {stats.elapsed_seconds:.4f}s"
            )
        elif result.status is SearchStatus.FAILED:
            logger.warning(
                f"{result.algorithm}: no path from {self._start!r} to {self._goal!r} "
                f"({stats.nodes_expanded} nodes expanded in {stats.elapsed_seconds:.4f}s)"
            )
        elif result.status is SearchStatus.INVALID_INPUT:
            logger.warning(f"{result.algorithm}: invalid input - {result.failure_reason}")
        else:
            logger.info(f"{result.algorithm}: cancelled after {stats.nodes_expanded} expansions")

    def _release(self) -> None:
        if self._state is not None:
            self._state.release()
            self._state = None


class SearchEngine:
    """
    Runs searches over one graph with one algorithm.

    The engine itself holds no per-search state; every start() returns an
    independent SearchRun.
    """

    def __init__(
        self,
        graph: Graph,
        algorithm: Algorithm | None = None,
        options: SearchOptions | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            graph: Graph to search (anything with connections() and `in`)
            algorithm: Search algorithm (default: Dijkstra)
            options: Default options for runs started by this engine
        """
        self._graph = graph
        self._algorithm = algorithm or Algorithm.dijkstra()
        self._options = options or SearchOptions()

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def start(
        self,
        start: Hashable,
        goal: Hashable,
        sink: ObservationSink | None = None,
        options: SearchOptions | None = None,
    ) -> SearchRun:
        """Create a run; nothing is expanded until it is iterated."""
        logger.debug(f"Starting {self._algorithm.describe()} search: {start!r} -> {goal!r}")
        return SearchRun(
            self._graph,
            start,
            goal,
            self._algorithm,
            options or self._options,
            sink,
        )

    def search(
        self,
        start: Hashable,
        goal: Hashable,
        sink: ObservationSink | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResult:
        """Run a complete search."""
        return self.start(start, goal, sink, options).run_to_completion()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm={self._algorithm.describe()!r})"


def search(
    graph: Graph,
    start: Hashable,
    goal: Hashable,
    algorithm: Algorithm | None = None,
    options: SearchOptions | None = None,
    sink: ObservationSink | None = None,
) -> SearchResult:
    """
    Find the cheapest path from start to goal.

    Args:
        graph: Graph to search
        start: Start node
        goal: Goal node
        algorithm: Algorithm.dijkstra() (default) or Algorithm.a_star(...)
        options: Trace and stepping options
        sink: Optional observer receiving every event

    Returns:
        SearchResult; a missing route or bad start/goal is reported in its
        status, never raised

    Raises:
        MalformedRecordError: If record bookkeeping breaks (a bug)
    """
    return SearchEngine(graph, algorithm, options).search(start, goal, sink)
