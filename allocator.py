# allocator.py
"""
Greedy Supply Allocator for Relief Networks

Distributes scarce supply to demanding locations, largest outstanding
demand first. Every transfer is recorded in an ordered audit log together
with the shortest travel distance between source and sink.

The distance matrix is descriptive: with the default first-fit strategy
sources are scanned in index order regardless of distance. A
nearest-by-distance strategy is available but changes the log.
"""

import heapq
import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from models import ReliefNetwork
from shortest_paths import UNREACHABLE, build_graph

logger = logging.getLogger(__name__)


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class PendingDemand:
    """Queue entry for a location that still needs supply."""
    location_index: int
    remaining_demand: int


@dataclass(frozen=True)
class AllocationRecord:
    """One transfer decision, appended to the log in the order it was made."""
    source_index: int
    sink_index: int
    units_transferred: int
    distance: Union[int, float]   # UNREACHABLE when no path exists

    def to_message(self, names: Sequence[str]) -> str:
        return (f"Supplied {self.units_transferred} units from {names[self.source_index]} "
                f"to {names[self.sink_index]} via distance {format_distance(self.distance)}")


def format_distance(distance) -> str:
    return "unreachable" if distance == UNREACHABLE else str(distance)


def _as_distance(value) -> Union[int, float]:
    value = float(value)
    if not math.isfinite(value):
        return UNREACHABLE
    return int(value) if value.is_integer() else value


@dataclass
class AllocationResult:
    """Outcome of one distribute() run."""
    records: List[AllocationRecord]
    initial_supply: Tuple[int, ...]
    final_supply: Tuple[int, ...]
    demands: Tuple[int, ...]
    unmet_demand: Dict[int, int] = field(default_factory=dict)

    @property
    def total_transferred(self) -> int:
        return sum(r.units_transferred for r in self.records)

    @property
    def fill_rate(self) -> float:
        total_demand = sum(self.demands)
        return self.total_transferred / total_demand if total_demand > 0 else 1.0

    def delivered_to(self, index: int) -> int:
        return sum(r.units_transferred for r in self.records if r.sink_index == index)

    def shipped_from(self, index: int) -> int:
        return sum(r.units_transferred for r in self.records if r.source_index == index)


# =============================================================================
# PRIORITY QUEUE
# =============================================================================

class PriorityQueue:
    """
    Min-heap ordered by a key function supplied by the caller.

    Equal keys pop in insertion order.
    """

    def __init__(self, key: Callable[[Any], Any]):
        self._key = key
        self._heap: list = []
        self._counter = itertools.count()

    def push(self, item) -> None:
        heapq.heappush(self._heap, (self._key(item), next(self._counter), item))

    def pop(self):
        return heapq.heappop(self._heap)[-1]

    def drain(self) -> list:
        """Remove and return every remaining item in priority order."""
        items = []
        while self._heap:
            items.append(self.pop())
        return items

    def __len__(self) -> int:
        return len(self._heap)


def largest_demand_first(entry: PendingDemand) -> int:
    return -entry.remaining_demand


# =============================================================================
# SOURCE SELECTION STRATEGIES
# =============================================================================
# A strategy maps (sink, supply, distances) to the order in which candidate
# sources are scanned. It must yield every location for the allocation loop
# to be guaranteed to drain supply.

SourceStrategy = Callable[[int, Sequence[int], np.ndarray], Iterable[int]]


def first_fit_by_index(sink: int, supply: Sequence[int], distances: np.ndarray) -> Iterable[int]:
    return range(len(supply))


def nearest_by_distance(sink: int, supply: Sequence[int], distances: np.ndarray) -> Iterable[int]:
    return sorted(range(len(supply)), key=lambda i: (distances[i][sink], i))


SOURCE_STRATEGIES: Dict[str, SourceStrategy] = {
    "first_fit": first_fit_by_index,
    "nearest": nearest_by_distance,
}


def get_strategy(name: Union[str, SourceStrategy]) -> SourceStrategy:
    """Resolve a strategy by name; callables pass through unchanged."""
    if callable(name):
        return name
    if name not in SOURCE_STRATEGIES:
        raise ValueError(f"Unknown strategy: {name}. Valid: {list(SOURCE_STRATEGIES.keys())}")
    return SOURCE_STRATEGIES[name]


# =============================================================================
# ALLOCATOR
# =============================================================================

class SupplyAllocator:
    """
    Single-use greedy allocator.

    The allocator works on its own copy of the supply vector; the caller's
    sequence is never mutated. Call reset() to run again over the same inputs.
    """

    def __init__(
        self,
        distances,
        supplies: Sequence[int],
        demands: Sequence[int],
        strategy: Union[str, SourceStrategy] = first_fit_by_index,
        names: Optional[Sequence[str]] = None
    ):
        n = len(supplies)
        if n == 0:
            raise ValueError("Allocator needs at least one location.")
        if len(demands) != n:
            raise ValueError(f"Got {n} supplies but {len(demands)} demands")

        self.distances = np.asarray(distances, dtype=float)
        if self.distances.shape != (n, n):
            raise ValueError(f"Distance matrix shape {self.distances.shape} does not match {n} locations")

        for i, (s, d) in enumerate(zip(supplies, demands)):
            if s < 0 or d < 0:
                raise ValueError(f"Location {i} has negative supply or demand ({s}, {d})")
            if not float(s).is_integer() or not float(d).is_integer():
                raise ValueError(f"Location {i} has fractional supply or demand ({s}, {d})")

        self.n_locations = n
        if names is None:
            names = [str(i) for i in range(n)]
        elif len(names) != n:
            raise ValueError(f"Got {n} supplies but {len(names)} names")
        self.names = list(names)
        self.demands = tuple(int(d) for d in demands)
        self._initial_supply = tuple(int(s) for s in supplies)
        self.strategy = get_strategy(strategy)
        self.reset()

    def reset(self) -> None:
        self.supply = list(self._initial_supply)
        self.records: List[AllocationRecord] = []
        self._queue = PriorityQueue(key=largest_demand_first)
        self._has_run = False

    def distribute(self) -> AllocationResult:
        """
        Satisfy demand in priority order until demand or supply runs out.

        Returns:
            AllocationResult with the transfer log, final supply and unmet demand
        """
        if self._has_run:
            raise RuntimeError("Allocator has already run; call reset() before distributing again.")
        self._has_run = True

        for i, demand in enumerate(self.demands):
            self._queue.push(PendingDemand(i, demand))

        remaining_supply = sum(self.supply)
        stalled: List[PendingDemand] = []

        logger.info("Distributing %d units across %d locations (total demand %d)",
                    remaining_supply, self.n_locations, sum(self.demands))

        while len(self._queue) > 0 and remaining_supply > 0:
            pending = self._queue.pop()
            sink = pending.location_index
            needed = pending.remaining_demand
            supplied = 0

            for source in self.strategy(sink, self.supply, self.distances):
                if supplied == needed:
                    break
                if self.supply[source] <= 0:
                    continue

                units = min(self.supply[source], needed - supplied)
                self.supply[source] -= units
                remaining_supply -= units
                supplied += units

                record = AllocationRecord(
                    source_index=source,
                    sink_index=sink,
                    units_transferred=units,
                    distance=_as_distance(self.distances[source, sink])
                )
                self.records.append(record)
                logger.debug(record.to_message(self.names))

            if supplied < needed:
                leftover = PendingDemand(sink, needed - supplied)
                if supplied == 0:
                    # strategy offered no source with supply; re-queueing would never progress
                    stalled.append(leftover)
                else:
                    self._queue.push(leftover)

        unmet_demand = {
            entry.location_index: entry.remaining_demand
            for entry in self._queue.drain() + stalled
            if entry.remaining_demand > 0
        }

        if unmet_demand:
            logger.info("Supply exhausted with %d units of unmet demand at %d locations",
                        sum(unmet_demand.values()), len(unmet_demand))

        return AllocationResult(
            records=list(self.records),
            initial_supply=self._initial_supply,
            final_supply=tuple(self.supply),
            demands=self.demands,
            unmet_demand=unmet_demand
        )


# =============================================================================
# PIPELINE
# =============================================================================

def allocate(
    network: ReliefNetwork,
    strategy: Union[str, SourceStrategy] = "first_fit",
    max_workers: Optional[int] = None
) -> Tuple[np.ndarray, AllocationResult]:
    """
    Build the graph once, compute all-pairs distances once, then allocate.

    Args:
        network: Relief network (validated before use)
        strategy: Source-selection strategy name or callable
        max_workers: Threads for the all-pairs distance computation

    Returns:
        (distance matrix, allocation result)
    """
    network.validate()
    distances = build_graph(network).all_pairs_distances(max_workers=max_workers)
    allocator = SupplyAllocator(distances, network.supplies, network.demands,
                                strategy=strategy, names=network.names)
    return distances, allocator.distribute()
