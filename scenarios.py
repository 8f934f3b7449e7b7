# scenarios.py
"""
Relief Network Scenarios

Built-in networks used by the analysis pipeline and the demos:

| Scenario | Locations | Supply | Demand | Notes                                   |
|----------|-----------|--------|--------|-----------------------------------------|
| E1       | 2         | 10     | 7      | Single delivery, supply left over       |
| E2       | 2         | 3      | 7      | Partial satisfaction                    |
| FLOOD    | 6         | 100    | 110    | District with a parallel road           |
| ISLAND   | 5         | 50     | 45     | One location cut off from every road    |
| NEAREST  | 6         | 100    | 110    | FLOOD allocated nearest-source-first    |
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, List, Tuple

from models import Location, ReliefNetwork


@dataclass
class ScenarioProperties:
    """Identity and allocation policy of a scenario."""
    scenario_id: str
    description: str
    strategy: str        # key of allocator.SOURCE_STRATEGIES


SCENARIO_SPECS: Dict[str, ScenarioProperties] = {
    "E1": ScenarioProperties("E1", "Single depot serves one village with supply to spare", "first_fit"),
    "E2": ScenarioProperties("E2", "Single depot cannot cover one village", "first_fit"),
    "FLOOD": ScenarioProperties("FLOOD", "Flooded district: two depots, four demand sites", "first_fit"),
    "ISLAND": ScenarioProperties("ISLAND", "District with a location cut off by the flood", "first_fit"),
    "NEAREST": ScenarioProperties("NEAREST", "Flooded district, nearest depot served first", "nearest"),
}


# =============================================================================
# NETWORK DEFINITIONS
# =============================================================================
# (name, supply, demand) per location, then (name, name, distance) per road

_TWO_LOCATION = {
    "E1": [("Depot", 10, 0), ("Village", 0, 7)],
    "E2": [("Depot", 3, 0), ("Village", 0, 7)],
}

_FLOOD_LOCATIONS: List[Tuple[str, int, int]] = [
    ("Warehouse", 60, 0),
    ("Hospital", 0, 35),
    ("School", 0, 25),
    ("Airfield", 40, 0),
    ("Shelter", 0, 30),
    ("Market", 0, 20),
]

_FLOOD_ROADS: List[Tuple[str, str, int]] = [
    ("Warehouse", "Hospital", 4),
    ("Warehouse", "School", 7),
    ("Hospital", "School", 2),
    ("Hospital", "Shelter", 9),
    ("School", "Airfield", 3),
    ("Airfield", "Shelter", 5),
    ("Shelter", "Market", 1),
    ("Airfield", "Market", 8),
    ("Airfield", "Market", 6),   # second, shorter bridge
]

_ISLAND_LOCATIONS: List[Tuple[str, int, int]] = [
    ("Depot", 30, 0),
    ("Clinic", 0, 15),
    ("Island", 0, 10),
    ("Camp", 20, 0),
    ("Farm", 0, 20),
]

_ISLAND_ROADS: List[Tuple[str, str, int]] = [
    ("Depot", "Clinic", 3),
    ("Clinic", "Camp", 4),
    ("Camp", "Farm", 2),
]


def _build(name: str, locations, roads) -> ReliefNetwork:
    net = ReliefNetwork(name=name)
    for loc_name, supply, demand in locations:
        net.add_location(Location(loc_name, supply=supply, demand=demand))
    for a, b, distance in roads:
        net.add_edge_by_name(a, b, distance)
    return net


def build_scenario(scenario_id: str) -> ReliefNetwork:
    """
    Build the network for a scenario.

    Args:
        scenario_id: One of SCENARIO_SPECS

    Returns:
        Fresh ReliefNetwork
    """
    if scenario_id not in SCENARIO_SPECS:
        raise ValueError(f"Unknown scenario: {scenario_id}. Valid: {list(SCENARIO_SPECS.keys())}")

    if scenario_id in _TWO_LOCATION:
        distance = 4 if scenario_id == "E1" else 5
        return _build(scenario_id, _TWO_LOCATION[scenario_id], [("Depot", "Village", distance)])
    if scenario_id == "ISLAND":
        return _build(scenario_id, _ISLAND_LOCATIONS, _ISLAND_ROADS)
    return _build(scenario_id, _FLOOD_LOCATIONS, _FLOOD_ROADS)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def get_all_scenarios() -> List[ReliefNetwork]:
    return [build_scenario(scenario_id) for scenario_id in SCENARIO_SPECS]


def get_scenario_properties(scenario_id: str) -> ScenarioProperties:
    if scenario_id not in SCENARIO_SPECS:
        raise ValueError(f"Unknown scenario: {scenario_id}. Valid: {list(SCENARIO_SPECS.keys())}")
    return SCENARIO_SPECS[scenario_id]


def clone_network(net: ReliefNetwork) -> ReliefNetwork:
    """Deep copy of a network, safe to modify."""
    return deepcopy(net)


def print_scenario_summary():
    """Print summary of all scenarios."""
    print("\nRELIEF SCENARIOS")
    print("=" * 80)
    print(f"{'Scenario':<10}{'Locations':>10}{'Roads':>8}{'Supply':>8}{'Demand':>8}  {'Description'}")
    print("-" * 80)

    for scenario_id, props in SCENARIO_SPECS.items():
        net = build_scenario(scenario_id)
        print(f"{scenario_id:<10}{len(net.locations):>10}{len(net.edges):>8}"
              f"{net.get_total_supply():>8}{net.get_total_demand():>8}  {props.description}")


if __name__ == "__main__":
    print_scenario_summary()
