# loader.py
"""
Relief Network Input Loading

Two sources of input:
1. Text blocks as typed into an input form (count, names, edges, supplies, demands)
2. CSV files (one for locations, one for roads), read with pandas

Both resolve location names to indices and enforce the declared counts.
"""

from pathlib import Path
from typing import List, Union

import pandas as pd

from models import Location, ReliefNetwork

NUMBER_FORMAT_MESSAGE = "Invalid number format. Please check your data and try again."

LOCATION_COLUMNS = ["NAME", "SUPPLY", "DEMAND"]
EDGE_COLUMNS = ["SOURCE", "TARGET", "DISTANCE"]


class InputError(ValueError):
    """Raised when user-supplied network data is malformed."""


def _lines(text: str) -> List[str]:
    return [line.strip() for line in text.strip().split("\n")]


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise InputError(NUMBER_FORMAT_MESSAGE) from exc


def _to_whole(value) -> int:
    """Integer from a CSV cell; fractional or missing values are rejected."""
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InputError(NUMBER_FORMAT_MESSAGE) from exc
    if not number.is_integer():
        raise InputError(NUMBER_FORMAT_MESSAGE)
    return int(number)


def parse_network(
    count_text: str,
    names_text: str,
    edges_text: str,
    supplies_text: str,
    demands_text: str,
    name: str = ""
) -> ReliefNetwork:
    """
    Parse form-style text blocks into a network.

    Args:
        count_text: Number of locations
        names_text: One location name per line
        edges_text: One 'name1 name2 distance' per line (may be empty)
        supplies_text: One supply quantity per line
        demands_text: One demand quantity per line
        name: Network name

    Returns:
        Validated ReliefNetwork

    Raises:
        InputError: if any block is malformed or counts disagree
    """
    count = _to_int(count_text.strip())
    if count <= 0:
        raise InputError(NUMBER_FORMAT_MESSAGE)

    names = _lines(names_text)
    if len(names) != count:
        raise InputError("Number of nodes does not match the specified count.")

    edges = []
    if edges_text.strip():
        for line in _lines(edges_text):
            parts = line.split()
            if len(parts) != 3:
                raise InputError("Invalid edge format.")
            if parts[0] not in names or parts[1] not in names:
                raise InputError("Invalid node names in edges.")
            edges.append((names.index(parts[0]), names.index(parts[1]), _to_int(parts[2])))

    supplies = _lines(supplies_text)
    if len(supplies) != count:
        raise InputError("Number of supplies entries does not match the specified count.")
    supplies = [_to_int(s) for s in supplies]

    demands = _lines(demands_text)
    if len(demands) != count:
        raise InputError("Number of demands entries does not match the specified count.")
    demands = [_to_int(d) for d in demands]

    net = ReliefNetwork(name=name)
    try:
        for loc_name, supply, demand in zip(names, supplies, demands):
            net.add_location(Location(loc_name, supply=supply, demand=demand))
    except ValueError as exc:
        raise InputError(str(exc)) from exc

    for source, target, distance in edges:
        net.add_edge(source, target, distance)

    _validate(net)
    return net


def load_network_csv(
    locations_path: Union[str, Path],
    edges_path: Union[str, Path],
    name: str = ""
) -> ReliefNetwork:
    """
    Load a network from CSV files.

    Locations CSV columns: NAME, SUPPLY, DEMAND (row order defines indices).
    Edges CSV columns: SOURCE, TARGET, DISTANCE (location names).
    """
    locations_df = pd.read_csv(locations_path)
    edges_df = pd.read_csv(edges_path)

    _require_columns(locations_df, LOCATION_COLUMNS, locations_path)
    _require_columns(edges_df, EDGE_COLUMNS, edges_path)

    net = ReliefNetwork(name=name or Path(locations_path).stem)
    try:
        for row in locations_df.to_dict(orient="records"):
            net.add_location(Location(
                str(row["NAME"]).strip(),
                supply=_to_whole(row["SUPPLY"]),
                demand=_to_whole(row["DEMAND"])
            ))
        for row in edges_df.to_dict(orient="records"):
            net.add_edge_by_name(str(row["SOURCE"]).strip(), str(row["TARGET"]).strip(),
                                 _to_whole(row["DISTANCE"]))
    except InputError:
        raise
    except ValueError as exc:
        raise InputError(str(exc)) from exc

    _validate(net)
    return net


def _require_columns(df: pd.DataFrame, columns: List[str], path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InputError(f"{path}: missing columns {missing}")


def _validate(net: ReliefNetwork) -> None:
    try:
        net.validate()
    except ValueError as exc:
        raise InputError(str(exc)) from exc
