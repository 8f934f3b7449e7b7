"""
Visualization Module for Allocation Results

Generates:
1. Heatmap of the all-pairs shortest distance matrix
2. Demand vs delivered units per location
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Sequence

from allocator import AllocationResult, allocate
from models import ReliefNetwork
from report import distance_matrix_to_dataframe
from scenarios import build_scenario


# =============================================================================
# VISUALIZATION FUNCTIONS
# =============================================================================

def plot_distance_heatmap(
    matrix: np.ndarray,
    names: Sequence[str],
    output_path: str = "distance_heatmap.png"
):
    """
    Heatmap of shortest distances. Unreachable pairs are left blank.
    """
    df = distance_matrix_to_dataframe(matrix, names).replace(np.inf, np.nan)
    n = len(names)

    fig, ax = plt.subplots(figsize=(max(6, n), max(5, n * 0.8)))
    sns.heatmap(
        df,
        annot=True,
        fmt="g",
        cmap="YlOrRd",
        mask=df.isna(),
        linewidths=0.5,
        ax=ax
    )
    ax.set_title("Shortest Travel Distance", fontsize=14, fontweight='bold')
    ax.set_xlabel("To")
    ax.set_ylabel("From")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Saved: {output_path}")


def plot_delivery_summary(
    result: AllocationResult,
    network: ReliefNetwork,
    output_path: str = "delivery_summary.png"
):
    """
    Grouped bars of demand and delivered units for every location with demand.
    """
    rows = [
        {"Location": name, "Demand": result.demands[i], "Delivered": result.delivered_to(i)}
        for i, name in enumerate(network.names)
        if result.demands[i] > 0
    ]
    df = pd.DataFrame(rows, columns=["Location", "Demand", "Delivered"])

    fig, ax = plt.subplots(figsize=(10, 5))
    x = np.arange(len(df))
    width = 0.38

    ax.bar(x - width / 2, df["Demand"], width, label="Demand", color='#e74c3c', alpha=0.7, edgecolor='black')
    ax.bar(x + width / 2, df["Delivered"], width, label="Delivered", color='#2ecc71', alpha=0.7, edgecolor='black')

    ax.set_xticks(x)
    ax.set_xticklabels(df["Location"], rotation=45)
    ax.set_ylabel("Units")
    ax.set_title(f"Demand vs Delivered (fill rate {result.fill_rate:.1%})", fontsize=14, fontweight='bold')
    ax.legend()

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Saved: {output_path}")


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    net = build_scenario("FLOOD")
    distances, result = allocate(net)

    plot_distance_heatmap(distances, net.names, "distance_heatmap.png")
    plot_delivery_summary(result, net, "delivery_summary.png")
