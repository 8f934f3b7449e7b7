"""
Network Visualization Module

Creates diagrams showing:
1. Relief network topology (locations and weighted roads)
2. Reachable location pairs from the shortest-distance matrix
3. Side-by-side comparison of scenarios
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import numpy as np
from typing import List, Optional, Tuple

from models import ReliefNetwork
from scenarios import build_scenario, SCENARIO_SPECS
from shortest_paths import build_graph


# =============================================================================
# LAYOUT CONFIGURATION
# =============================================================================

GRID_COLUMNS = 3
GRID_SPACING = 200
GRID_OFFSET = 100
NODE_RADIUS = 10

NODE_COLORS = {
    'source': '#3498db',     # Blue: holds supply
    'sink': '#e74c3c',       # Red: needs supply
    'both': '#9b59b6',       # Purple
    'idle': '#95a5a6',       # Grey: neither
}

NODE_LABELS = {
    'source': 'Supply',
    'sink': 'Demand',
    'both': 'Supply and demand',
    'idle': 'Transit',
}


def grid_positions(n_locations: int) -> List[Tuple[float, float]]:
    """Place locations on a three-column grid, row by row."""
    return [
        (GRID_OFFSET + (i % GRID_COLUMNS) * GRID_SPACING,
         GRID_OFFSET + (i // GRID_COLUMNS) * GRID_SPACING)
        for i in range(n_locations)
    ]


def _node_role(supply: int, demand: int) -> str:
    if supply > 0 and demand > 0:
        return 'both'
    if supply > 0:
        return 'source'
    if demand > 0:
        return 'sink'
    return 'idle'


# =============================================================================
# DRAWING FUNCTIONS
# =============================================================================

def draw_network(
    ax,
    network: ReliefNetwork,
    distances: Optional[np.ndarray] = None,
    title: str = None
):
    """
    Draw a relief network on the given axes.

    Args:
        ax: Matplotlib axes
        network: Network to draw
        distances: Optional all-pairs matrix; reachable pairs drawn as faint red lines
        title: Plot title
    """
    positions = grid_positions(len(network.locations))

    # Reachable pairs first, so roads and nodes are on top
    if distances is not None:
        n = len(positions)
        for u in range(n):
            for v in range(u + 1, n):
                if np.isfinite(distances[u][v]):
                    (x1, y1), (x2, y2) = positions[u], positions[v]
                    ax.plot([x1, x2], [y1, y2], color='red', alpha=0.25,
                            linewidth=1, linestyle=':', zorder=1)

    # Roads with weight labels
    for edge in network.edges:
        (x1, y1), (x2, y2) = positions[edge.source], positions[edge.target]
        ax.plot([x1, x2], [y1, y2], color='#2c3e50', linewidth=1.5, zorder=2)
        ax.text((x1 + x2) / 2, (y1 + y2) / 2, str(edge.weight),
                ha='center', va='center', fontsize=8,
                bbox=dict(boxstyle='round,pad=0.2', facecolor='white', edgecolor='none'),
                zorder=3)

    # Locations
    for loc, pos in zip(network.locations, positions):
        role = _node_role(loc.supply, loc.demand)
        circle = plt.Circle(pos, NODE_RADIUS, color=NODE_COLORS[role], zorder=10)
        ax.add_patch(circle)
        ax.text(pos[0], pos[1] - 2 * NODE_RADIUS, loc.name,
                ha='center', va='center', fontsize=8, fontweight='bold', zorder=11)

    xs = [p[0] for p in positions]
    ys = [p[1] for p in positions]
    margin = GRID_OFFSET / 2
    ax.set_xlim(min(xs) - margin, max(xs) + margin)
    ax.set_ylim(max(ys) + margin, min(ys) - margin)   # first row at the top
    ax.set_aspect('equal')
    ax.axis('off')

    if title:
        ax.set_title(title, fontsize=12, fontweight='bold')


def plot_network(
    network: ReliefNetwork,
    output_path: str = "relief_network.png",
    show_paths: bool = True
):
    """Draw one network with a legend and save it."""
    distances = build_graph(network).all_pairs_distances() if show_paths else None

    fig, ax = plt.subplots(figsize=(10, 7))
    draw_network(ax, network, distances=distances,
                 title=f"Relief Network {network.name}".strip())

    legend_elements = [
        mpatches.Patch(color=NODE_COLORS[role], label=NODE_LABELS[role])
        for role in ['source', 'sink', 'both', 'idle']
    ]
    ax.legend(handles=legend_elements, loc='upper right', framealpha=0.9)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close()
    print(f"Saved: {output_path}")


def plot_scenario_comparison(
    scenario_ids: Optional[List[str]] = None,
    output_path: str = "scenario_comparison.png"
):
    """Draw several scenarios side by side."""
    if scenario_ids is None:
        scenario_ids = ["FLOOD", "ISLAND"]

    fig, axes = plt.subplots(1, len(scenario_ids), figsize=(7 * len(scenario_ids), 6), squeeze=False)

    for ax, scenario_id in zip(axes[0], scenario_ids):
        net = build_scenario(scenario_id)
        distances = build_graph(net).all_pairs_distances()
        draw_network(ax, net, distances=distances,
                     title=f"{scenario_id}: {SCENARIO_SPECS[scenario_id].description}")

    plt.suptitle("Relief Scenario Comparison", fontsize=14, fontweight='bold', y=1.02)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close()
    print(f"Saved: {output_path}")


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    print("NETWORK VISUALIZATION")
    print("=" * 50)

    print("\n1. Creating flood district diagram...")
    plot_network(build_scenario("FLOOD"), "flood_network.png")

    print("\n2. Creating scenario comparison...")
    plot_scenario_comparison(output_path="scenario_comparison.png")

    print("\n" + "=" * 50)
    print("Network visualization complete!")
