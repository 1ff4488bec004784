"""
Observation events emitted while a search runs.

Order for each expansion: NodeActivated, then one NodeOpened per improved
neighbor, then NodeClosed. A run ends with PathFound or SearchFailed.
Observers decide what (if anything) to draw; the engine never does.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Union

if TYPE_CHECKING:
    from tilesearch.search.path import Path


@dataclass(frozen=True)
class NodeActivated:
    """A node was taken off the frontier for expansion."""

    node: Hashable


@dataclass(frozen=True)
class NodeOpened:
    """A node entered (or was re-keyed in) the frontier with a new cost."""

    node: Hashable
    cost: float


@dataclass(frozen=True)
class NodeClosed:
    """A node finished expanding."""

    node: Hashable


@dataclass(frozen=True)
class PathFound:
    """The goal was reached."""

    path: Path


@dataclass(frozen=True)
class SearchFailed:
    """The run ended without a path (no route, invalid input, or cancelled)."""

    reason: str


SearchEvent = Union[NodeActivated, NodeOpened, NodeClosed, PathFound, SearchFailed]


class ObservationSink(Protocol):
    """Anything that wants to watch a search."""

    def notify(self, event: SearchEvent) -> None:
        ...


class TraceRecorder:
    """
    Sink that keeps every event, for replay after the run.
    """

    def __init__(self) -> None:
        self.events: list[SearchEvent] = []

    def notify(self, event: SearchEvent) -> None:
        self.events.append(event)

    @property
    def activated(self) -> list[Hashable]:
        """Nodes in activation order (repeats mean re-expansion)."""
        return [e.node for e in self.events if isinstance(e, NodeActivated)]

    @property
    def opened(self) -> list[tuple[Hashable, float]]:
        return [(e.node, e.cost) for e in self.events if isinstance(e, NodeOpened)]

    @property
    def closed(self) -> list[Hashable]:
        return [e.node for e in self.events if isinstance(e, NodeClosed)]

    @property
    def final(self) -> SearchEvent | None:
        """The PathFound/SearchFailed event, if the run has ended."""
        if self.events and isinstance(self.events[-1], (PathFound, SearchFailed)):
            return self.events[-1]
        return None

    def clear(self) -> None:
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[SearchEvent]:
        return iter(self.events)
