"""
Graph model: weighted directed connections between hashable nodes.

The search engine only needs two things from a graph - the outgoing
connections of a node and a membership test - so any object satisfying
the Graph protocol can be searched. TileGraph is the in-memory
implementation used by the grid builders and snapshot loader.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Connection:
    """
    A directed edge between two nodes.

    Attributes:
        source: Node the connection leaves from
        target: Node the connection leads to
        cost: Non-negative traversal cost
    """

    source: Hashable
    target: Hashable
    cost: float

    def __post_init__(self) -> None:
        if math.isnan(self.cost) or self.cost < 0:
            raise ValueError(
                f"Connection {self.source!r} -> {self.target!r} has invalid cost {self.cost!r}"
            )


@runtime_checkable
class Graph(Protocol):
    """What the search engine needs from a graph."""

    def connections(self, node: Hashable) -> Iterable[Connection]:
        """Outgoing connections of node."""
        ...

    def __contains__(self, node: object) -> bool:
        ...


class TileGraph:
    """
    Adjacency-list graph keyed by node.

    Connections are kept in insertion order, which fixes the order neighbors
    are examined in and therefore makes searches reproducible.
    """

    def __init__(self) -> None:
        self._adjacency: dict[Hashable, dict[Hashable, Connection]] = {}

    def add_node(self, node: Hashable) -> None:
        """Add a node with no connections (no-op if already present)."""
        self._adjacency.setdefault(node, {})

    def add_connection(self, source: Hashable, target: Hashable, cost: float) -> Connection:
        """
        Add (or replace) the directed connection source -> target.

        Both endpoints are added to the graph if missing.
        """
        connection = Connection(source, target, float(cost))
        self.add_node(target)
        self._adjacency.setdefault(source, {})[target] = connection
        return connection

    def add_edge(self, a: Hashable, b: Hashable, cost: float) -> None:
        """Add connections in both directions with the same cost."""
        self.add_connection(a, b, cost)
        self.add_connection(b, a, cost)

    def remove_connection(self, source: Hashable, target: Hashable) -> None:
        """Remove the directed connection source -> target."""
        try:
            del self._adjacency[source][target]
        except KeyError:
            raise KeyError(f"No connection {source!r} -> {target!r}") from None

    def remove_edge(self, a: Hashable, b: Hashable) -> None:
        """Remove connections in both directions."""
        self.remove_connection(a, b)
        self.remove_connection(b, a)

    def isolate(self, node: Hashable) -> None:
        """Remove every connection into and out of node (the node itself stays)."""
        self._adjacency[node] = {}
        for targets in self._adjacency.values():
            targets.pop(node, None)

    def connections(self, node: Hashable) -> list[Connection]:
        """Outgoing connections of node, or [] for unknown nodes."""
        targets = self._adjacency.get(node)
        if targets is None:
            return []
        return list(targets.values())

    def neighbors(self, node: Hashable) -> list[Hashable]:
        """Targets of the outgoing connections of node."""
        return [connection.target for connection in self.connections(node)]

    def cost(self, source: Hashable, target: Hashable) -> float:
        """Cost of the connection source -> target."""
        try:
            return self._adjacency[source][target].cost
        except KeyError:
            raise KeyError(f"No connection {source!r} -> {target!r}") from None

    def has_connection(self, source: Hashable, target: Hashable) -> bool:
        return target in self._adjacency.get(source, {})

    @property
    def nodes(self) -> list[Hashable]:
        return list(self._adjacency)

    def edges(self) -> Iterator[Connection]:
        """All connections, grouped by source in insertion order."""
        for targets in self._adjacency.values():
            yield from targets.values()

    def node_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency.values())

    def stats(self) -> dict:
        """Get statistics about the graph."""
        return {
            "nodes": self.node_count(),
            "connections": self.edge_count(),
            "dead_ends": sum(1 for targets in self._adjacency.values() if not targets),
        }

    def __contains__(self, node: object) -> bool:
        try:
            return node in self._adjacency
        except TypeError:
            # Unhashable objects are never nodes
            return False

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._adjacency)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nodes={self.node_count()}, connections={self.edge_count()})"
