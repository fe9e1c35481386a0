"""
Tests for the Emergency Routing Module.

Tests the weighted graph, Dijkstra's cheapest path and routing people to the
emergency spot from their current location.
"""

import math
from datetime import time

import pytest

from campus_tracker.core import EntityStore, Location, MessageBus, Person, Role
from campus_tracker.modules.chronology import ChronologyModule, Observation
from campus_tracker.modules.routing import (
    EMERGENCY_SPOT_ID,
    EmergencyRoutingModule,
    LocationGraph,
    Route,
)


@pytest.fixture
def graph():
    """
    Small graph with a cheap detour:

        A --1-- B --1-- C
         \\_____ 5 ______/     D (isolated)
    """
    graph = LocationGraph()
    for vertex_id in ("A", "B", "C", "D"):
        graph.add_vertex(vertex_id)
    graph.add_edge("A", "B", 1)
    graph.add_edge("B", "C", 1)
    graph.add_edge("A", "C", 5)
    return graph


class TestLocationGraph:
    """Tests for the graph itself."""

    def test_add_vertex_once(self, graph):
        """Test vertices are unique."""
        assert graph.add_vertex("A") is False
        assert graph.add_vertex("E") is True
        assert graph.has_vertex("E")

    def test_edges_are_symmetric(self, graph):
        """Test an edge is usable in both directions with the same weight."""
        assert graph.distance("A", "B") == graph.distance("B", "A") == 1
        assert graph.distance("A", "D") is None
        assert graph.neighbours("A") == ["B", "C"]
        assert graph.neighbours("D") == []
        assert graph.neighbours("nowhere") == []

    def test_redeclared_edge_replaces_weight(self, graph):
        """Test declaring an edge again replaces its weight."""
        graph.add_edge("B", "A", 7)

        assert graph.distance("A", "B") == 7
        assert graph.neighbours("A") == ["B", "C"]

    def test_invalid_edges(self, graph):
        """Test unknown vertices and negative weights are rejected."""
        with pytest.raises(ValueError):
            graph.add_edge("A", "nowhere", 1)
        with pytest.raises(ValueError):
            graph.add_edge("A", "B", -1)


class TestCheapestPath:
    """Tests for Dijkstra's algorithm."""

    def test_prefers_cheaper_multi_hop(self, graph):
        """Test a longer path wins when it is cheaper."""
        route = graph.cheapest_path("A", "C")

        assert route == Route(cost=2, path=("A", "B", "C"))
        assert route.reachable

    def test_reverse_direction(self, graph):
        """Test the graph is undirected."""
        assert graph.cheapest_path("C", "A").path == ("C", "B", "A")

    def test_same_vertex(self, graph):
        """Test origin equal to destination costs nothing."""
        assert graph.cheapest_path("B", "B") == Route(cost=0, path=("B",))

    def test_unreachable(self, graph):
        """Test a disconnected destination is explicit: infinite cost, empty path."""
        route = graph.cheapest_path("A", "D")

        assert math.isinf(route.cost)
        assert route.path == ()
        assert not route.reachable
        assert route == Route.unreachable()

    def test_unknown_vertex(self, graph):
        """Test unknown vertices are unreachable rather than an error."""
        assert graph.cheapest_path("A", "nowhere") == Route.unreachable()
        assert graph.cheapest_path("nowhere", "A") == Route.unreachable()

    def test_zero_weight_edges(self):
        """Test zero-length walkways are allowed."""
        graph = LocationGraph()
        for vertex_id in ("A", "B", "C"):
            graph.add_vertex(vertex_id)
        graph.add_edge("A", "B", 0)
        graph.add_edge("B", "C", 0)

        assert graph.cheapest_path("A", "C") == Route(cost=0, path=("A", "B", "C"))


@pytest.fixture
def kernel():
    """Store, chronology and routing wired together over a tiny campus."""
    bus = MessageBus()
    store = EntityStore()
    store.set_message_bus(bus)

    chronology = ChronologyModule()
    routing = EmergencyRoutingModule(chronology)
    chronology.attach(bus, store)

    store.add_location(Location("SA", "Hall", 100))
    routing.attach(bus, store)
    store.add_location(Location("A1", "Room A1", 30))
    store.add_location(Location("AUD", "Auditorium", 200))

    routing.connect(EMERGENCY_SPOT_ID, "SA", 10)
    routing.connect("SA", "A1", 20)

    store.add_person(Person("1", "Carlos Sousa", Role.STUDENT))
    store.add_person(Person("2", "Pedro Santos", Role.STUDENT))
    store.add_person(Person("3", "Marta Lima", Role.WORKER))
    chronology.load(
        [
            Observation("1", "SA", time(9, 0)),
            Observation("1", "A1", time(10, 0)),
            Observation("2", "AUD", time(9, 30)),
        ]
    )
    return store, routing


class TestEmergencyRoutingModule:
    """Tests for routing people out."""

    def test_module_id(self, kernel):
        """Test module id."""
        _, routing = kernel
        assert routing.id == "routing"

    def test_vertices_follow_store(self, kernel):
        """Test locations added before and after attach become vertices."""
        _, routing = kernel

        assert set(routing.graph.vertices()) == {EMERGENCY_SPOT_ID, "SA", "A1", "AUD"}

    def test_connect_unknown_location_skipped(self, kernel, caplog):
        """Test walkways to unknown locations are skipped with a warning."""
        _, routing = kernel

        assert routing.connect("A1", "ZZ", 5) is False
        assert "ZZ" in caplog.text
        assert not routing.graph.has_vertex("ZZ")

    def test_route_from_current_location(self, kernel):
        """Test the route starts where the person was last seen."""
        _, routing = kernel

        route = routing.route_for("1")

        assert route.path == ("A1", "SA", EMERGENCY_SPOT_ID)
        assert route.cost == 30

    def test_isolated_location(self, kernel):
        """Test a person in an isolated location has no route."""
        _, routing = kernel

        assert routing.route_for("2") == Route.unreachable()

    def test_person_without_events(self, kernel):
        """Test a person never seen has no route."""
        _, routing = kernel

        assert routing.route_for("3") == Route.unreachable()
        assert routing.route_for("99") == Route.unreachable()

    def test_routes_for_everyone(self, kernel):
        """Test one route per registered person, in people order."""
        _, routing = kernel

        routes = routing.routes_for_everyone()

        assert list(routes) == ["1", "2", "3"]
        assert routes["1"].cost == 30
        assert not routes["2"].reachable

    def test_topology(self, kernel):
        """Test the neighbour dump lists every store location."""
        _, routing = kernel

        assert routing.topology() == {
            "SA": [EMERGENCY_SPOT_ID, "A1"],
            "A1": ["SA"],
            "AUD": [],
        }

    def test_custom_emergency_spot(self):
        """Test the emergency vertex id is configurable."""
        routing = EmergencyRoutingModule(ChronologyModule(), emergency_spot_id="MUSTER")

        assert routing.graph.vertices() == ["MUSTER"]
