"""
Open and closed sets.

The frontier is a binary heap with an index from node to heap entry.
Updated records get a fresh entry and their old entry is blanked; blanked
entries are skipped when they surface. Each entry carries the record's
insertion sequence, so among equal keys the record that entered the
frontier first is extracted first - the same choice a linear scan for the
first strictly smaller key would make.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable, Hashable, Iterator
from operator import attrgetter

from tilesearch.search.records import NodeRecord

# Heap entry layout: [key, insertion sequence, entry id, record or None]
_KEY, _SEQUENCE, _ENTRY_ID, _RECORD = range(4)


class Frontier:
    """
    Priority collection of open node records.

    Args:
        key: Ordering key, smallest first (default: estimated_total_cost)
    """

    def __init__(self, key: Callable[[NodeRecord], float] | None = None) -> None:
        self._key = key or attrgetter("estimated_total_cost")
        self._heap: list[list] = []
        self._entries: dict[Hashable, list] = {}
        self._sequence = itertools.count()
        self._entry_ids = itertools.count()

    def insert(self, record: NodeRecord) -> None:
        """
        Add a record.

        Raises:
            ValueError: If the node already has a record in the frontier
        """
        if record.node in self._entries:
            raise ValueError(f"{record.node!r} is already in the frontier")
        self._push(record, next(self._sequence))

    def update(self, record: NodeRecord) -> None:
        """
        Re-position a record whose key changed in place.

        The record keeps its insertion sequence for tie-breaking.

        Raises:
            KeyError: If the record is not in the frontier
        """
        entry = self._entries.get(record.node)
        if entry is None or entry[_RECORD] is not record:
            raise KeyError(f"{record.node!r} is not in the frontier")
        entry[_RECORD] = None
        self._push(record, entry[_SEQUENCE])

    def extract_min(self) -> NodeRecord:
        """
        Remove and return the record with the smallest key.

        Raises:
            IndexError: If the frontier is empty
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            record = entry[_RECORD]
            if record is not None:
                del self._entries[record.node]
                return record
        raise IndexError("extract_min from an empty frontier")

    def peek(self) -> NodeRecord | None:
        """The record extract_min() would return, without removing it."""
        while self._heap and self._heap[0][_RECORD] is None:
            heapq.heappop(self._heap)
        return self._heap[0][_RECORD] if self._heap else None

    def remove(self, record: NodeRecord) -> None:
        """
        Remove a record.

        Raises:
            KeyError: If the record is not in the frontier
        """
        entry = self._entries.get(record.node)
        if entry is None or entry[_RECORD] is not record:
            raise KeyError(f"{record.node!r} is not in the frontier")
        del self._entries[record.node]
        entry[_RECORD] = None

    def contains(self, node: Hashable) -> bool:
        return node in self._entries

    def find(self, node: Hashable) -> NodeRecord | None:
        entry = self._entries.get(node)
        return entry[_RECORD] if entry is not None else None

    def clear(self) -> None:
        self._heap.clear()
        self._entries.clear()

    def _push(self, record: NodeRecord, sequence: int) -> None:
        entry = [self._key(record), sequence, next(self._entry_ids), record]
        self._entries[record.node] = entry
        heapq.heappush(self._heap, entry)

    def __contains__(self, node: object) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[NodeRecord]:
        """Open records in insertion order."""
        entries = sorted(self._entries.values(), key=lambda entry: entry[_SEQUENCE])
        return (entry[_RECORD] for entry in entries)


class ClosedSet:
    """Records of fully expanded nodes."""

    def __init__(self) -> None:
        self._records: dict[Hashable, NodeRecord] = {}

    def add(self, record: NodeRecord) -> None:
        """
        Add a record.

        Raises:
            ValueError: If the node already has a closed record
        """
        if record.node in self._records:
            raise ValueError(f"{record.node!r} is already closed")
        self._records[record.node] = record

    def remove(self, record: NodeRecord) -> None:
        """
        Remove a record so it can be re-opened.

        Raises:
            KeyError: If the record is not closed
        """
        if self._records.get(record.node) is not record:
            raise KeyError(f"{record.node!r} is not closed")
        del self._records[record.node]

    def contains(self, node: Hashable) -> bool:
        return node in self._records

    def find(self, node: Hashable) -> NodeRecord | None:
        return self._records.get(node)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, node: object) -> bool:
        return node in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NodeRecord]:
        """Closed records in the order they were closed."""
        return iter(self._records.values())
