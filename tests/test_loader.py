"""Tests for loader module."""

import pandas as pd
import pytest

from loader import InputError, load_network_csv, parse_network

NAMES = "Depot\nVillage\nFarm"
EDGES = "Depot Village 4\nVillage Farm 2"
SUPPLIES = "10\n0\n0"
DEMANDS = "0\n7\n3"


class TestParseNetwork:
    def test_parses_all_blocks(self) -> None:
        net = parse_network("3", NAMES, EDGES, SUPPLIES, DEMANDS, name="form")
        assert net.name == "form"
        assert net.names == ["Depot", "Village", "Farm"]
        assert [(e.source, e.target, e.weight) for e in net.edges] == [(0, 1, 4), (1, 2, 2)]
        assert net.supplies == [10, 0, 0]
        assert net.demands == [0, 7, 3]

    def test_surrounding_whitespace_is_ignored(self) -> None:
        net = parse_network(" 2 ", "  A \n B  ", "A   B  5\n", "1 \n 0", "0\n1\n")
        assert net.names == ["A", "B"]
        assert net.edges[0].weight == 5

    def test_empty_edges_block_gives_isolated_locations(self) -> None:
        net = parse_network("2", "A\nB", "   ", "1\n0", "0\n1")
        assert net.edges == []

    @pytest.mark.parametrize("count", ["abc", "0", "-3", "2.5"])
    def test_bad_count(self, count: str) -> None:
        with pytest.raises(InputError, match="Invalid number format"):
            parse_network(count, NAMES, EDGES, SUPPLIES, DEMANDS)

    def test_name_count_mismatch(self) -> None:
        with pytest.raises(InputError, match="Number of nodes does not match"):
            parse_network("4", NAMES, EDGES, SUPPLIES, DEMANDS)

    def test_edge_with_missing_field(self) -> None:
        with pytest.raises(InputError, match="Invalid edge format"):
            parse_network("3", NAMES, "Depot Village", SUPPLIES, DEMANDS)

    def test_edge_with_unknown_name(self) -> None:
        with pytest.raises(InputError, match="Invalid node names in edges"):
            parse_network("3", NAMES, "Depot Town 4", SUPPLIES, DEMANDS)

    def test_edge_with_bad_distance(self) -> None:
        with pytest.raises(InputError, match="Invalid number format"):
            parse_network("3", NAMES, "Depot Village far", SUPPLIES, DEMANDS)

    def test_supply_count_mismatch(self) -> None:
        with pytest.raises(InputError, match="supplies entries"):
            parse_network("3", NAMES, EDGES, "10\n0", DEMANDS)

    def test_demand_count_mismatch(self) -> None:
        with pytest.raises(InputError, match="demands entries"):
            parse_network("3", NAMES, EDGES, SUPPLIES, "0\n7\n3\n1")

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(InputError, match="Negative edge weight"):
            parse_network("3", NAMES, "Depot Village -4", SUPPLIES, DEMANDS)

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(InputError, match="Duplicate location"):
            parse_network("2", "A\nA", "", "1\n0", "0\n1")

    def test_input_error_is_value_error(self) -> None:
        assert issubclass(InputError, ValueError)


class TestLoadNetworkCsv:
    def _write(self, tmp_path, locations, edges):
        loc_path = tmp_path / "district.csv"
        edge_path = tmp_path / "roads.csv"
        pd.DataFrame(locations).to_csv(loc_path, index=False)
        pd.DataFrame(edges).to_csv(edge_path, index=False)
        return loc_path, edge_path

    def test_loads_locations_and_roads(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot", "Village"], "SUPPLY": [10, 0], "DEMAND": [0, 7]},
            {"SOURCE": ["Depot"], "TARGET": ["Village"], "DISTANCE": [4]},
        )
        net = load_network_csv(loc_path, edge_path)
        assert net.name == "district"
        assert net.names == ["Depot", "Village"]
        assert net.supplies == [10, 0]
        assert net.edges[0].weight == 4

    def test_missing_column(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot"], "SUPPLY": [10]},
            {"SOURCE": [], "TARGET": [], "DISTANCE": []},
        )
        with pytest.raises(InputError, match="missing columns"):
            load_network_csv(loc_path, edge_path)

    def test_unknown_road_endpoint(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot"], "SUPPLY": [10], "DEMAND": [0]},
            {"SOURCE": ["Depot"], "TARGET": ["Nowhere"], "DISTANCE": [1]},
        )
        with pytest.raises(InputError, match="Unknown location"):
            load_network_csv(loc_path, edge_path)

    def test_fractional_supply_rejected(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot", "Village"], "SUPPLY": [2.9, 0], "DEMAND": [0, 3]},
            {"SOURCE": ["Depot"], "TARGET": ["Village"], "DISTANCE": [4]},
        )
        with pytest.raises(InputError, match="Invalid number format"):
            load_network_csv(loc_path, edge_path)

    def test_fractional_distance_rejected(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot", "Village"], "SUPPLY": [2, 0], "DEMAND": [0, 3]},
            {"SOURCE": ["Depot"], "TARGET": ["Village"], "DISTANCE": [4.7]},
        )
        with pytest.raises(InputError, match="Invalid number format"):
            load_network_csv(loc_path, edge_path)

    def test_whole_numbers_written_as_floats_are_accepted(self, tmp_path) -> None:
        loc_path, edge_path = self._write(
            tmp_path,
            {"NAME": ["Depot", "Village"], "SUPPLY": [3.0, 0.0], "DEMAND": [0.0, 3.0]},
            {"SOURCE": ["Depot"], "TARGET": ["Village"], "DISTANCE": [4.0]},
        )
        net = load_network_csv(loc_path, edge_path)
        assert net.supplies == [3, 0]
        assert net.edges[0].weight == 4
