# report.py
"""
Allocation Reporting

Turns the allocator's index-based output into name-based views:
1. Named allocation log (one dict per transfer, log order preserved)
2. Rendered log lines ("Supplied 7 units from Depot to Village via distance 4")
3. pandas DataFrames for the log and the distance matrix
4. Summary statistics and a console summary
"""

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from allocator import AllocationResult


def named_allocation_log(result: AllocationResult, names: Sequence[str]) -> List[Dict]:
    """Allocation log with location names resolved, in decision order."""
    return [
        {
            "source_name": names[r.source_index],
            "sink_name": names[r.sink_index],
            "units_transferred": r.units_transferred,
            "distance": r.distance,
        }
        for r in result.records
    ]


def format_allocation_log(result: AllocationResult, names: Sequence[str]) -> List[str]:
    return [r.to_message(names) for r in result.records]


def allocation_to_dataframe(result: AllocationResult, names: Sequence[str]) -> pd.DataFrame:
    """Convert the allocation log to a pandas DataFrame."""
    columns = ["Step", "Source", "Sink", "Units", "Distance"]
    data = []
    for step, entry in enumerate(named_allocation_log(result, names), start=1):
        data.append({
            "Step": step,
            "Source": entry["source_name"],
            "Sink": entry["sink_name"],
            "Units": entry["units_transferred"],
            "Distance": entry["distance"],
        })
    return pd.DataFrame(data, columns=columns)


def distance_matrix_to_dataframe(matrix: np.ndarray, names: Sequence[str]) -> pd.DataFrame:
    """Distance matrix labelled by location name on both axes (inf = unreachable)."""
    return pd.DataFrame(np.asarray(matrix, dtype=float), index=list(names), columns=list(names))


def summarize_allocation(result: AllocationResult, names: Sequence[str]) -> Dict:
    """
    Headline numbers for one allocation run.

    Returns dict with:
    - total_supply / total_demand: initial totals
    - total_transferred: units moved across all records
    - remaining_supply: supply left after the run
    - fill_rate: transferred / demand
    - n_transfers: number of log records
    - unmet_demand: {name: units} for locations left short
    """
    return {
        "total_supply": sum(result.initial_supply),
        "total_demand": sum(result.demands),
        "total_transferred": result.total_transferred,
        "remaining_supply": sum(result.final_supply),
        "fill_rate": result.fill_rate,
        "n_transfers": len(result.records),
        "unmet_demand": {names[i]: units for i, units in result.unmet_demand.items()},
    }


def print_allocation_summary(result: AllocationResult, names: Sequence[str], title: str = "") -> None:
    """Print the allocation log followed by per-location totals."""
    summary = summarize_allocation(result, names)

    print("\n" + "=" * 80)
    print(f"ALLOCATION LOG{': ' + title if title else ''}")
    print("=" * 80)
    for line in format_allocation_log(result, names):
        print(f"  {line}")
    if not result.records:
        print("  (no transfers)")

    print("\n" + "-" * 80)
    print(f"{'Location':<15}{'Supply':>10}{'Shipped':>10}{'Left':>10}{'Demand':>10}{'Received':>10}{'Unmet':>10}")
    print("-" * 80)
    for i, name in enumerate(names):
        unmet = result.unmet_demand.get(i, 0)
        print(f"{name:<15}{result.initial_supply[i]:>10}{result.shipped_from(i):>10}"
              f"{result.final_supply[i]:>10}{result.demands[i]:>10}{result.delivered_to(i):>10}{unmet:>10}")

    print("-" * 80)
    print(f"Transferred {summary['total_transferred']} of {summary['total_demand']} demanded units "
          f"(fill rate {summary['fill_rate']:.1%}), {summary['remaining_supply']} units of supply left")
