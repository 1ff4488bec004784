"""
Unit tests for heuristics and algorithm selection.
"""

import pytest

from tilesearch.graph import Tile
from tilesearch.heuristics import (
    CrossProductHeuristic,
    Heuristic,
    ManhattanHeuristic,
    ZeroHeuristic,
    get_heuristic,
    is_admissible,
)
from tilesearch.search import Algorithm, Ordering


class TestPlanarHeuristics:
    """Test estimates on tiles."""

    def test_zero(self):
        assert ZeroHeuristic().estimate(Tile(0, 0), Tile(3, 4), Tile(9, 9)) == 0.0

    def test_manhattan(self):
        h = ManhattanHeuristic()
        assert h.estimate(Tile(0, 0), Tile(1, 2), Tile(4, 6)) == 7
        assert h.estimate(Tile(0, 0), Tile(4, 6), Tile(4, 6)) == 0

    def test_manhattan_respects_scale(self):
        h = ManhattanHeuristic()
        assert h(Tile(0, 0, 2.0), Tile(1, 1, 2.0), Tile(3, 2, 2.0)) == 6.0

    def test_cross_product_zero_on_line(self):
        """Tiles on the start-goal line get no extra cost."""
        h = CrossProductHeuristic(weight=0.5)
        start, goal = Tile(0, 0), Tile(4, 4)
        assert h.estimate(start, Tile(2, 2), goal) == 4

    def test_cross_product_penalizes_drift(self):
        h = CrossProductHeuristic(weight=0.5)
        start, goal = Tile(0, 0), Tile(4, 4)
        # dx1=-1, dy1=-3, dx2=-4, dy2=-4 -> |4 - 12| = 8
        assert h.estimate(start, Tile(3, 1), goal) == 4 + 0.5 * 8

    def test_cross_product_negative_weight_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            CrossProductHeuristic(weight=-1)

    def test_admissibility_flags(self):
        assert ZeroHeuristic().admissible
        assert ManhattanHeuristic().admissible
        assert not CrossProductHeuristic(weight=0.001).admissible
        assert CrossProductHeuristic(weight=0).admissible

    def test_is_admissible_unknown_for_plain_callables(self):
        assert is_admissible(lambda s, c, g: 0.0) is None
        assert is_admissible(ManhattanHeuristic()) is True


class TestHeuristicRegistry:
    """Test get_heuristic() lookup."""

    @pytest.mark.parametrize("name", ["zero", "manhattan", "cross-product"])
    def test_known_names(self, name):
        heuristic = get_heuristic(name)
        assert isinstance(heuristic, Heuristic)
        assert heuristic.name == name
        assert heuristic.description

    def test_kwargs_reach_cross_product(self):
        assert get_heuristic("cross-product", weight=0.25).weight == 0.25

    def test_unknown_name_lists_available(self):
        with pytest.raises(ValueError) as exc_info:
            get_heuristic("euclid")

        message = str(exc_info.value)
        assert "euclid" in message
        assert "manhattan" in message


class TestAlgorithm:
    """Test algorithm construction."""

    def test_dijkstra(self):
        algorithm = Algorithm.dijkstra()
        assert algorithm.ordering is Ordering.COST_SO_FAR
        assert algorithm.describe() == "dijkstra"
        assert algorithm.admissible

    def test_a_star_default_heuristic(self):
        algorithm = Algorithm.a_star()
        assert algorithm.ordering is Ordering.ESTIMATED_TOTAL_COST
        assert algorithm.describe() == "astar(manhattan)"

    def test_a_star_plain_callable(self):
        def straight_line(start, candidate, goal):
            return 0.0

        algorithm = Algorithm.a_star(straight_line)
        assert algorithm.heuristic_name == "straight_line"
        assert algorithm.admissible is None

    @pytest.mark.parametrize("name", ["astar", "a*", "a-star"])
    def test_from_name_aliases(self, name):
        assert Algorithm.from_name(name).name == "astar"

    def test_from_name_forwards_heuristic(self):
        algorithm = Algorithm.from_name("astar", "cross-product", weight=0.5)
        assert algorithm.heuristic.weight == 0.5
        assert algorithm.admissible is False

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            Algorithm.from_name("bfs")

    def test_key_reads_ordering_field(self):
        record = type("R", (), {"cost_so_far": 1.0, "estimated_total_cost": 5.0})()
        assert Algorithm.dijkstra().key(record) == 1.0
        assert Algorithm.a_star().key(record) == 5.0
