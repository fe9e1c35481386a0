"""Weighted undirected graph of campus locations.

Vertices are location ids; edge weights are walking distances in meters. The graph
need not be connected. Cheapest paths use Dijkstra's algorithm with a binary heap.
"""

import heapq
import logging
import math
from dataclasses import dataclass

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """Result of a cheapest-path query.

    Attributes:
        cost: Sum of traversed edge weights (math.inf when unreachable).
        path: Vertex ids from origin to destination inclusive (empty when unreachable).
    """

    cost: float
    path: tuple[str, ...] = ()

    @classmethod
    def unreachable(cls) -> "Route":
        """The explicit "no path" result."""
        return cls(cost=math.inf, path=())

    @property
    def reachable(self) -> bool:
        return bool(self.path)


class LocationGraph:
    """Adjacency-list graph with non-negative symmetric weights."""

    def __init__(self) -> None:
        self._adjacency: dict[str, dict[str, float]] = {}

    def add_vertex(self, vertex_id: str) -> bool:
        """Add a vertex.

        Returns:
            True if added, False if it already existed.
        """
        if vertex_id in self._adjacency:
            return False
        self._adjacency[vertex_id] = {}
        return True

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self._adjacency

    def vertices(self) -> list[str]:
        return list(self._adjacency)

    def add_edge(self, a: str, b: str, distance: float) -> None:
        """Connect two vertices in both directions.

        Declaring an existing edge again replaces its weight.

        Raises:
            ValueError: If a vertex is unknown or the distance is negative.
        """
        for vertex_id in (a, b):
            if vertex_id not in self._adjacency:
                raise ValueError(f"Vertex '{vertex_id}' does not exist")
        if distance < 0:
            raise ValueError(f"Edge {a} - {b} has negative distance {distance}")

        self._adjacency[a][b] = distance
        self._adjacency[b][a] = distance
        _LOGGER.debug(f"Added edge {a} - {b} ({distance} m)")

    def neighbours(self, vertex_id: str) -> list[str]:
        """Adjacent vertex ids in declaration order (empty for unknown vertices)."""
        return list(self._adjacency.get(vertex_id, {}))

    def distance(self, a: str, b: str) -> float | None:
        """Weight of the edge a - b, or None if not adjacent."""
        return self._adjacency.get(a, {}).get(b)

    def cheapest_path(self, origin: str, destination: str) -> Route:
        """Minimum-weight route between two vertices.

        Unknown vertices and disconnected pairs yield ``Route.unreachable()``.
        """
        if origin not in self._adjacency or destination not in self._adjacency:
            _LOGGER.warning(f"Route requested between unknown vertices {origin} -> {destination}")
            return Route.unreachable()

        dist: dict[str, float] = {origin: 0.0}
        previous: dict[str, str] = {}
        pq: list[tuple[float, str]] = [(0.0, origin)]

        while pq:
            d, u = heapq.heappop(pq)
            if d != dist.get(u, math.inf):
                continue
            if u == destination:
                break
            for v, w in self._adjacency[u].items():
                nd = d + w
                if nd < dist.get(v, math.inf):
                    dist[v] = nd
                    previous[v] = u
                    heapq.heappush(pq, (nd, v))

        if destination not in dist:
            _LOGGER.debug(f"No path from {origin} to {destination}")
            return Route.unreachable()

        path = [destination]
        while path[-1] != origin:
            path.append(previous[path[-1]])
        path.reverse()

        return Route(cost=dist[destination], path=tuple(path))
