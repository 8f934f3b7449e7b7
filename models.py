# models.py

class Location:
    def __init__(self, name, supply=0, demand=0):
        """
        Location in the relief network
        :param name: display name, unique within a network, e.g. "Shelter-A"
        :param supply: units of relief supply held here (mutable during allocation)
        :param demand: units of relief supply needed here (fixed input)
        """
        self.name = name
        self.supply = supply
        self.demand = demand

    def __repr__(self):
        return f"Location({self.name}, supply={self.supply}, demand={self.demand})"


class Edge:
    def __init__(self, source, target, weight):
        """
        Undirected road between two locations
        :param source: index of one endpoint
        :param target: index of the other endpoint
        :param weight: travel distance (non-negative integer)
        """
        self.source = source
        self.target = target
        self.weight = weight

    def __repr__(self):
        return f"Edge({self.source}<->{self.target}, weight={self.weight})"


class ReliefNetwork:
    def __init__(self, name=""):
        self.name = name
        self.locations = []   # ordered; list position is the location index
        self.edges = []       # list of Edge, parallel edges allowed

    def add_location(self, location):
        if any(loc.name == location.name for loc in self.locations):
            raise ValueError(f"Duplicate location name: {location.name}")
        self.locations.append(location)
        return len(self.locations) - 1

    def add_edge(self, source, target, weight):
        self.edges.append(Edge(source, target, weight))

    def add_edge_by_name(self, source_name, target_name, weight):
        self.add_edge(self.index_of(source_name), self.index_of(target_name), weight)

    def index_of(self, name):
        for i, loc in enumerate(self.locations):
            if loc.name == name:
                return i
        raise ValueError(f"Unknown location: {name}. Available: {self.names}")

    @property
    def names(self):
        return [loc.name for loc in self.locations]

    @property
    def supplies(self):
        return [loc.supply for loc in self.locations]

    @property
    def demands(self):
        return [loc.demand for loc in self.locations]

    def get_total_demand(self):
        return sum(loc.demand for loc in self.locations)

    def get_total_supply(self):
        return sum(loc.supply for loc in self.locations)

    def validate(self):
        """Raise ValueError if the network breaks any input precondition."""
        n = len(self.locations)
        if n == 0:
            raise ValueError("Network must contain at least one location.")

        for loc in self.locations:
            if loc.supply < 0:
                raise ValueError(f"Negative supply at {loc.name}: {loc.supply}")
            if loc.demand < 0:
                raise ValueError(f"Negative demand at {loc.name}: {loc.demand}")

        for edge in self.edges:
            for idx in (edge.source, edge.target):
                if not 0 <= idx < n:
                    raise ValueError(f"Edge endpoint {idx} out of range [0, {n})")
            if edge.weight < 0:
                raise ValueError(f"Negative edge weight: {edge!r}")
