"""Tests for network_viz and visualize modules (Agg backend)."""

import matplotlib.pyplot as plt

from allocator import allocate
from network_viz import draw_network, grid_positions, plot_network, plot_scenario_comparison
from visualize import plot_delivery_summary, plot_distance_heatmap


class TestLayout:
    def test_three_column_grid(self) -> None:
        assert grid_positions(4) == [(100, 100), (300, 100), (500, 100), (100, 300)]


class TestPlots:
    def test_draw_network_adds_one_patch_per_location(self, flood_network) -> None:
        fig, ax = plt.subplots()
        draw_network(ax, flood_network, title="flood")
        assert len(ax.patches) == len(flood_network.locations)
        plt.close(fig)

    def test_plot_network_writes_file(self, island_network, tmp_path) -> None:
        out = tmp_path / "island.png"
        plot_network(island_network, str(out))
        assert out.exists()

    def test_scenario_comparison_writes_file(self, tmp_path) -> None:
        out = tmp_path / "compare.png"
        plot_scenario_comparison(["E1", "ISLAND"], str(out))
        assert out.exists()

    def test_heatmap_with_unreachable_pairs(self, island_network, tmp_path) -> None:
        distances, _ = allocate(island_network)
        out = tmp_path / "heatmap.png"
        plot_distance_heatmap(distances, island_network.names, str(out))
        assert out.exists()

    def test_delivery_summary(self, flood_network, tmp_path) -> None:
        _, result = allocate(flood_network)
        out = tmp_path / "delivery.png"
        plot_delivery_summary(result, flood_network, str(out))
        assert out.exists()
