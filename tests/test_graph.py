"""
Tests for the graph model, grid builders, tile maps and snapshots.
"""

import math

import msgpack
import numpy as np
import pytest

from tilesearch import config
from tilesearch.graph import (
    Connection,
    Graph,
    Tile,
    TileGraph,
    graph_from_occupancy,
    grid_graph,
    load_graph,
    load_tile_map,
    parse_tile_map,
    random_occupancy,
    save_graph,
)
from tilesearch.search import Algorithm, SearchStatus, search


class TestConnection:
    """Test connection validation."""

    def test_valid(self):
        connection = Connection("a", "b", 2.5)
        assert connection.cost == 2.5

    def test_zero_cost_allowed(self):
        assert Connection("a", "b", 0).cost == 0

    @pytest.mark.parametrize("cost", [-1.0, math.nan])
    def test_invalid_cost(self, cost):
        with pytest.raises(ValueError):
            Connection("a", "b", cost)


class TestTileGraph:
    """Test adjacency bookkeeping."""

    def test_add_connection_adds_both_nodes(self):
        graph = TileGraph()
        graph.add_connection("a", "b", 3)

        assert "a" in graph and "b" in graph
        assert graph.cost("a", "b") == 3.0
        assert not graph.has_connection("b", "a")
        assert graph.connections("b") == []

    def test_add_edge_is_bidirectional(self):
        graph = TileGraph()
        graph.add_edge("a", "b", 1)
        assert graph.has_connection("a", "b")
        assert graph.has_connection("b", "a")

    def test_connections_keep_insertion_order(self):
        graph = TileGraph()
        for target in ["c", "a", "b"]:
            graph.add_connection("s", target, 1)
        assert graph.neighbors("s") == ["c", "a", "b"]

    def test_replacing_connection(self):
        graph = TileGraph()
        graph.add_connection("a", "b", 3)
        graph.add_connection("a", "b", 1)
        assert graph.cost("a", "b") == 1.0
        assert graph.edge_count() == 1

    def test_remove_connection(self):
        graph = TileGraph()
        graph.add_edge("a", "b", 1)
        graph.remove_connection("a", "b")

        assert not graph.has_connection("a", "b")
        assert graph.has_connection("b", "a")
        with pytest.raises(KeyError):
            graph.remove_connection("a", "b")

    def test_isolate(self):
        graph = TileGraph()
        graph.add_edge("a", "b", 1)
        graph.add_edge("b", "c", 1)
        graph.isolate("b")

        assert "b" in graph
        assert graph.edge_count() == 0
        assert graph.stats() == {"nodes": 3, "connections": 0, "dead_ends": 3}

    def test_unknown_node_queries(self):
        graph = TileGraph()
        assert graph.connections("missing") == []
        assert [] not in graph
        with pytest.raises(KeyError):
            graph.cost("a", "b")

    def test_satisfies_graph_protocol(self):
        assert isinstance(TileGraph(), Graph)


class TestGridBuilders:
    """Test occupancy and grid graph construction."""

    def test_grid_counts(self):
        graph = grid_graph(3, 2)
        assert graph.node_count() == 6
        # 2 * (horizontal + vertical adjacencies) = 2 * (4 + 3)
        assert graph.edge_count() == 14

    def test_neighbor_order(self):
        """Right, down, left, up."""
        graph = grid_graph(3, 3)
        assert graph.neighbors(Tile(1, 1)) == [Tile(2, 1), Tile(1, 2), Tile(0, 1), Tile(1, 0)]

    def test_walls_left_out(self):
        occupancy = np.array([[0, 1], [0, 0]], dtype=bool)
        graph = graph_from_occupancy(occupancy)

        assert Tile(1, 0) not in graph
        assert graph.neighbors(Tile(0, 0)) == [Tile(0, 1)]

    def test_scale_sets_cost_and_coordinates(self):
        graph = grid_graph(2, 1, scale=2.5)
        tile = Tile(1, 0, 2.5)

        assert graph.cost(Tile(0, 0, 2.5), tile) == 2.5
        assert (tile.x, tile.y) == (2.5, 0.0)

    def test_bad_dimensions(self):
        with pytest.raises(ValueError):
            grid_graph(0, 3)
        with pytest.raises(ValueError):
            graph_from_occupancy(np.zeros(4))

    def test_random_occupancy_reproducible(self):
        a = random_occupancy(10, 8, 0.3, seed=1, keep_free=((0, 0), (9, 7)))
        b = random_occupancy(10, 8, 0.3, seed=1, keep_free=((0, 0), (9, 7)))

        assert a.shape == (8, 10)
        assert np.array_equal(a, b)
        assert not a[0, 0] and not a[7, 9]

    def test_random_occupancy_density_bounds(self):
        with pytest.raises(ValueError):
            random_occupancy(4, 4, 1.5)
        assert random_occupancy(4, 4, 1.0).all()


class TestTileMaps:
    """Test ASCII map parsing and the bundled maps."""

    def test_parse_markers_and_walls(self):
        tile_map = parse_tile_map("S.#\n..G\n")

        assert (tile_map.width, tile_map.height) == (3, 2)
        assert tile_map.start == Tile(0, 0)
        assert tile_map.goal == Tile(2, 1)
        assert tile_map.is_wall(2, 0)
        assert not tile_map.is_wall(1, 0)

    def test_short_lines_padded_with_floor(self):
        tile_map = parse_tile_map("S..\n.\n")
        assert tile_map.width == 3
        assert not tile_map.is_wall(2, 1)

    @pytest.mark.parametrize("text", ["", "\n\n", "S.?", "S.S", "G..\n..G"])
    def test_invalid_maps(self, text):
        with pytest.raises(ValueError):
            parse_tile_map(text)

    def test_bundled_maps_present(self):
        assert config.get_missing_map_files() == []

    def test_maze_is_solvable(self):
        tile_map = load_tile_map(config.MAZE_MAP_PATH)
        result = search(tile_map.to_graph(), tile_map.start, tile_map.goal, Algorithm.a_star())

        assert tile_map.start == Tile(0, 0)
        assert tile_map.goal == Tile(15, 10)
        assert result.status is SearchStatus.SUCCEEDED

    def test_walled_map_has_no_path(self, maps_dir):
        tile_map = load_tile_map(maps_dir / "walled.txt")
        result = search(tile_map.to_graph(), tile_map.start, tile_map.goal)

        assert result.status is SearchStatus.FAILED

    def test_open_map_cost_is_manhattan(self):
        tile_map = load_tile_map(config.OPEN_MAP_PATH)
        result = search(tile_map.to_graph(), tile_map.start, tile_map.goal, Algorithm.a_star())

        assert result.cost == 11 + 5


class TestSnapshots:
    """Test msgpack snapshots."""

    def test_tile_graph_round_trip(self, tmp_path):
        occupancy = random_occupancy(6, 5, 0.3, seed=3)
        graph = graph_from_occupancy(occupancy, scale=0.5)

        path = save_graph(graph, tmp_path / "snapshots" / "grid.msgpack")
        loaded = load_graph(path)

        assert loaded.nodes == graph.nodes
        assert list(loaded.edges()) == list(graph.edges())

    def test_raw_nodes(self, tmp_path):
        graph = TileGraph()
        graph.add_connection("a", "b", 2)
        graph.add_connection(1, "a", 0)

        loaded = load_graph(save_graph(graph, tmp_path / "raw.msgpack"))

        assert loaded.cost("a", "b") == 2.0
        assert loaded.cost(1, "a") == 0.0

    def test_rejects_unknown_version(self, tmp_path):
        path = tmp_path / "bad.msgpack"
        path.write_bytes(msgpack.packb({"version": 99, "node_type": "raw", "nodes": [], "connections": []}))

        with pytest.raises(ValueError, match="version"):
            load_graph(path)

    def test_rejects_dangling_index(self, tmp_path):
        path = tmp_path / "bad.msgpack"
        path.write_bytes(msgpack.packb({
            "version": 1,
            "node_type": "raw",
            "nodes": ["a"],
            "connections": [[0, 5, 1.0]],
        }))

        with pytest.raises(ValueError, match="missing node"):
            load_graph(path)
