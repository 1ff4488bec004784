"""
Search results as paths, and reconstruction from predecessor links.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

from tilesearch.search.errors import MalformedRecordError
from tilesearch.search.records import NodeRecord

if TYPE_CHECKING:
    from tilesearch.search.state import SearchState


class Path:
    """
    Immutable route from start to goal.

    Holds one record per step, from the node after start up to and
    including the goal. A search whose start is its goal yields an empty
    path with cost 0.
    """

    def __init__(self, start: Hashable, steps: Iterable[NodeRecord]) -> None:
        self._start = start
        # Copies, so later bookkeeping can never reach into a finished path
        self._steps: tuple[NodeRecord, ...] = tuple(replace(step) for step in steps)

    @property
    def start(self) -> Hashable:
        return self._start

    @property
    def goal(self) -> Hashable:
        return self._steps[-1].node if self._steps else self._start

    @property
    def records(self) -> tuple[NodeRecord, ...]:
        return self._steps

    @property
    def nodes(self) -> list[Hashable]:
        """Nodes to visit, in travel order (start excluded)."""
        return [step.node for step in self._steps]

    @property
    def cost(self) -> float:
        """Total cost of the route (the goal's cost so far)."""
        return self._steps[-1].cost_so_far if self._steps else 0.0

    def next_step(self) -> NodeRecord | None:
        """The first step after start, or None for an empty path."""
        return self._steps[0] if self._steps else None

    def to_stack(self) -> list[NodeRecord]:
        """
        Steps as a stack: pop() returns the next step to take.

        This is the form a movement consumer walks, popping one step on
        each arrival.
        """
        return list(reversed(self._steps))

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[NodeRecord]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> NodeRecord:
        return self._steps[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._start == other._start and [
            (s.node, s.cost_so_far) for s in self._steps
        ] == [(s.node, s.cost_so_far) for s in other._steps]

    def __hash__(self) -> int:
        return hash((self._start, tuple(self.nodes)))

    def __repr__(self) -> str:
        route = " -> ".join(repr(node) for node in [self._start, *self.nodes])
        return f"Path({route}, cost={self.cost:g})"


def reconstruct_path(goal_record: NodeRecord, start: Hashable, state: SearchState) -> Path:
    """
    Walk predecessor links from the goal record back to start.

    Predecessors are looked up among the closed records first, then among
    the open ones (a node can be re-opened after serving as a predecessor).

    Raises:
        MalformedRecordError: If a predecessor has no record or the chain
            never reaches start
    """
    steps: list[NodeRecord] = []
    record = goal_record
    max_steps = len(state.records)

    while record.node != start:
        steps.append(record)
        if len(steps) > max_steps:
            raise MalformedRecordError(
                f"Predecessor chain from {goal_record.node!r} does not reach {start!r}"
            )
        if record.predecessor is None:
            raise MalformedRecordError(f"Record for {record.node!r} has no predecessor")

        predecessor = state.find(record.predecessor)
        if predecessor is None:
            raise MalformedRecordError(
                f"No record for {record.predecessor!r}, predecessor of {record.node!r}"
            )
        record = predecessor

    steps.reverse()
    return Path(start, steps)
