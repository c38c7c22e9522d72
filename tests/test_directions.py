from dataclasses import FrozenInstanceError
from math import cos, radians, sin

import pytest

from navgraph.config import TurnPolicy
from navgraph.directions import (
    LABEL_TO_TURN,
    TURN_LABELS,
    NavigationDirection,
    parse_direction,
    route_directions,
)
from navgraph.lib.algorithms.base import (
    UNKNOWN_ROAD,
    MalformedDirectionError,
    TurnKind,
)
from navgraph.lib.graph import RoadGraph


class FakeGraph:
    """GraphAccess stand-in with explicit bearings and distances."""

    def __init__(self, ways, names, legs):
        # legs: list of (u, v, bearing, distance)
        self.ways = ways
        self.names = names
        self.bearings = {(u, v): b for u, v, b, _ in legs}
        self.distances = {(u, v): d for u, v, _, d in legs}

    def bearing(self, u, v):
        return self.bearings[(u, v)]

    def edge_distance(self, u, v):
        return self.distances[(u, v)]

    def way_id_of(self, n):
        return self.ways[n]

    def way_name_of(self, n):
        return self.names.get(self.ways[n], UNKNOWN_ROAD)


def two_way_path(second_heading):
    """A-B heading north on w1, then B-C-D on w2 with the given heading."""
    return FakeGraph(
        ways={"A": "w1", "B": "w1", "C": "w2", "D": "w2"},
        names={"w1": "First St", "w2": "Second St"},
        legs=[
            ("A", "B", 0.0, 1.0),
            ("B", "C", second_heading, 2.0),
            ("C", "D", second_heading, 3.0),
        ],
    )


class TestNavigationDirection:
    def test_str(self):
        d = NavigationDirection(TurnKind.START, "Main St", 1.23456)
        assert str(d) == "Start on Main St and continue for 1.235 miles."

    def test_defaults(self):
        d = NavigationDirection()
        assert d.kind == TurnKind.STRAIGHT
        assert d.way == UNKNOWN_ROAD
        assert d.distance == 0.0
        assert str(d) == "Go straight on unknown road and continue for 0.000 miles."

    def test_empty_way_falls_back(self):
        assert NavigationDirection(TurnKind.LEFT, "", 1.0).way == UNKNOWN_ROAD
        assert NavigationDirection(TurnKind.LEFT, None, 1.0).way == UNKNOWN_ROAD

    @pytest.mark.parametrize("distance", [-0.1, float("inf"), float("nan")])
    def test_invalid_distance(self, distance):
        with pytest.raises(ValueError):
            NavigationDirection(TurnKind.START, "Main St", distance)

    def test_int_kind_is_coerced(self):
        d = NavigationDirection(4, "Main St", 2)
        assert d.kind is TurnKind.RIGHT
        assert d.label == "Turn right"

    def test_frozen(self):
        d = NavigationDirection(TurnKind.START, "Main St", 1.0)
        with pytest.raises(FrozenInstanceError):
            d.way = "Other St"

    def test_labels_are_bijective(self):
        assert set(TURN_LABELS) == set(TurnKind)
        assert len(set(TURN_LABELS.values())) == len(TurnKind)
        assert all(TURN_LABELS[LABEL_TO_TURN[label]] == label for label in LABEL_TO_TURN)

    @pytest.mark.parametrize("kind", list(TurnKind))
    @pytest.mark.parametrize(
        "way, distance",
        [
            ("Main St", 0.0),
            ("O'Farrell St.", 12.3456789),
            ("Avenue on the Hill", 0.0005),
            ("Road and continue for 1.000 miles.", 3.0),
        ],
    )
    def test_round_trip(self, kind, way, distance):
        d = NavigationDirection(kind, way, distance)
        assert NavigationDirection.from_string(str(d)) == d
        assert parse_direction(str(d)) == d

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Start on Main St and continue for 1.000 miles",
            "Turn around on Main St and continue for 1.000 miles.",
            "Start on Main St and continue for -1.000 miles.",
            "Start on Main St and continue for one miles.",
            "Start at Main St and continue for 1.000 miles.",
            "start on Main St and continue for 1.000 miles.",
            "Start on Main St and continue for 1.000 miles. Then stop.",
        ],
    )
    def test_malformed(self, text):
        assert NavigationDirection.from_string(text) is None
        with pytest.raises(MalformedDirectionError):
            parse_direction(text)

    def test_parse_non_string(self):
        assert NavigationDirection.from_string(None) is None
        with pytest.raises(MalformedDirectionError):
            parse_direction(12)

    def test_parse_value(self):
        d = parse_direction("Sharp left on Shattuck Avenue and continue for 0.25 miles.")
        assert d == NavigationDirection(TurnKind.SHARP_LEFT, "Shattuck Avenue", 0.25)


class TestRouteDirections:
    def test_short_routes(self):
        g = two_way_path(20.0)
        assert route_directions(g, []) == []
        assert route_directions(g, ["A"]) == []

    def test_slight_right(self):
        g = two_way_path(20.0)
        assert route_directions(g, ["A", "B", "C", "D"]) == [
            NavigationDirection(TurnKind.START, "First St", 1.0),
            NavigationDirection(TurnKind.SLIGHT_RIGHT, "Second St", 5.0),
        ]

    def test_sharp_left(self):
        g = two_way_path(210.0)
        assert route_directions(g, ["A", "B", "C", "D"]) == [
            NavigationDirection(TurnKind.START, "First St", 1.0),
            NavigationDirection(TurnKind.SHARP_LEFT, "Second St", 5.0),
        ]

    @pytest.mark.parametrize(
        "heading, kind",
        [
            (0.0, TurnKind.STRAIGHT),
            (14.9, TurnKind.STRAIGHT),
            (345.1, TurnKind.STRAIGHT),
            (15.0, TurnKind.SLIGHT_RIGHT),
            (345.0, TurnKind.SLIGHT_LEFT),
            (29.9, TurnKind.SLIGHT_RIGHT),
            (30.0, TurnKind.RIGHT),
            (270.0, TurnKind.LEFT),
            (99.9, TurnKind.RIGHT),
            (100.0, TurnKind.SHARP_RIGHT),
            (260.0, TurnKind.SHARP_LEFT),
            (180.0, TurnKind.SHARP_RIGHT),
        ],
    )
    def test_turn_classification(self, heading, kind):
        directions = route_directions(two_way_path(heading), ["A", "B", "C", "D"])
        assert [d.kind for d in directions] == [TurnKind.START, kind]

    def test_bearing_wraps_around_north(self):
        g = FakeGraph(
            ways={"A": "w1", "B": "w1", "C": "w2"},
            names={"w1": "First St", "w2": "Second St"},
            legs=[("A", "B", 350.0, 1.0), ("B", "C", 10.0, 1.0)],
        )
        directions = route_directions(g, ["A", "B", "C"])
        assert directions[1].kind == TurnKind.SLIGHT_RIGHT

    def test_several_ways(self):
        g = FakeGraph(
            ways={"A": None, "B": "w1", "C": "w1", "D": "w2", "E": "w3", "F": "w3"},
            names={"w1": "First St", "w2": "Second St", "w3": "Third St"},
            legs=[
                ("A", "B", 90.0, 0.5),
                ("B", "C", 90.0, 0.25),
                ("C", "D", 180.0, 1.0),
                ("D", "E", 170.0, 0.125),
                ("E", "F", 175.0, 0.125),
            ],
        )
        assert route_directions(g, ["A", "B", "C", "D", "E", "F"]) == [
            NavigationDirection(TurnKind.START, "First St", 0.75),
            NavigationDirection(TurnKind.RIGHT, "Second St", 1.0),
            NavigationDirection(TurnKind.STRAIGHT, "Third St", 0.25),
        ]

    def test_first_way_unknown(self):
        g = FakeGraph(
            ways={"A": "w1", "B": None},
            names={"w1": "First St"},
            legs=[("A", "B", 90.0, 2.0)],
        )
        assert route_directions(g, ["A", "B"]) == [
            NavigationDirection(TurnKind.START, UNKNOWN_ROAD, 2.0)
        ]

    def test_custom_policy(self):
        g = two_way_path(20.0)
        policy = TurnPolicy(straight_max=25.0, slight_max=40.0, turn_max=120.0)
        directions = route_directions(g, ["A", "B", "C", "D"], policy=policy)
        assert directions[1].kind == TurnKind.STRAIGHT


def _offset(lon, lat, heading, step=0.01):
    """Point ``step`` degrees away from (lon, lat) along ``heading`` (near the equator)."""
    return lon + step * sin(radians(heading)), lat + step * cos(radians(heading))


@pytest.mark.parametrize(
    "heading, kind",
    [(20.0, TurnKind.SLIGHT_RIGHT), (210.0, TurnKind.SHARP_LEFT), (270.0, TurnKind.LEFT)],
)
def test_route_directions_on_road_graph(heading, kind):
    g = RoadGraph()
    g.add_node("A", lon=0.0, lat=0.0)
    g.add_node("B", lon=0.0, lat=0.01)
    c = _offset(0.0, 0.01, heading)
    d = _offset(*c, heading)
    g.add_node("C", lon=c[0], lat=c[1])
    g.add_node("D", lon=d[0], lat=d[1])
    g.add_way("w1", ["A", "B"], name="First St")
    g.add_way("w2", ["B", "C", "D"], name="Second St")

    directions = route_directions(g, ["A", "B", "C", "D"])
    assert [d.kind for d in directions] == [TurnKind.START, kind]
    assert [d.way for d in directions] == ["First St", "Second St"]
    assert directions[0].distance == round(g.edge_distance("A", "B"), 3)
    assert directions[1].distance == round(
        g.edge_distance("B", "C") + g.edge_distance("C", "D"), 3
    )


def test_route_directions_follow_edge_ways(square1):
    # Every corner of the square joins two ways; the way of each edge decides
    directions = route_directions(square1, ["A", "C", "D", "B"])
    assert [d.way for d in directions] == ["Elm St", "Oak St", "Pine St"]
    assert [d.kind for d in directions] == [TurnKind.START, TurnKind.RIGHT, TurnKind.RIGHT]


def test_negative_zero_distance_round_trips():
    d = NavigationDirection(TurnKind.START, "Main St", -0.0)
    assert str(d) == "Start on Main St and continue for 0.000 miles."
    assert NavigationDirection.from_string(str(d)) == d
    assert NavigationDirection.from_string("Start on Main St and continue for -0.000 miles.") is None


@pytest.mark.parametrize("way", [101, 1.5, ["Main St"]])
def test_way_must_be_a_string(way):
    with pytest.raises(TypeError):
        NavigationDirection(TurnKind.START, way, 1.0)
