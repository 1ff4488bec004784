"""
Per-node search bookkeeping.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass

from tilesearch.search.errors import MalformedRecordError


@dataclass(eq=False)
class NodeRecord:
    """
    Search state for one node.

    Records compare by identity: a search holds exactly one record per node
    and updates it in place when a cheaper route turns up.

    Attributes:
        node: The node this record describes
        cost_so_far: Cost of the best known route from start to node
        predecessor: Node this one was reached from (None for the start)
        estimated_total_cost: cost_so_far + heuristic estimate to the goal
    """

    node: Hashable
    cost_so_far: float = 0.0
    predecessor: Hashable | None = None
    estimated_total_cost: float = 0.0

    @property
    def heuristic(self) -> float:
        """Heuristic component of the estimate."""
        return self.estimated_total_cost - self.cost_so_far

    def update(self, cost_so_far: float, predecessor: Hashable | None, heuristic: float) -> None:
        """Record a (cheaper) route to this node."""
        if cost_so_far < 0 or heuristic < 0:
            raise MalformedRecordError(
                f"Negative cost for {self.node!r}: cost_so_far={cost_so_far}, heuristic={heuristic}"
            )
        self.cost_so_far = cost_so_far
        self.predecessor = predecessor
        self.estimated_total_cost = cost_so_far + heuristic


class RecordStore:
    """
    The records of one search, keyed by node.

    Frontier and ClosedSet only ever hold records created here, which is
    what keeps one record per node.
    """

    def __init__(self) -> None:
        self._records: dict[Hashable, NodeRecord] = {}

    def create(self, node: Hashable) -> NodeRecord:
        """Create the record for a newly discovered node."""
        if node in self._records:
            raise MalformedRecordError(f"Record for {node!r} already exists")
        record = NodeRecord(node)
        self._records[node] = record
        return record

    def get(self, node: Hashable) -> NodeRecord | None:
        return self._records.get(node)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, node: object) -> bool:
        return node in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NodeRecord]:
        return iter(self._records.values())
