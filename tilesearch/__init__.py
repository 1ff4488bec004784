"""
tilesearch - Dijkstra and A* over tile graphs.

A best-first search engine with pluggable heuristics that reports the
cheapest path between two nodes and lets observers watch each step.
"""

__version__ = "0.1.0"
