"""Shared road graph fixtures.

Coordinates sit near the equator, where 0.01 degree in either direction is
about 0.69 miles and bearings follow the compass exactly enough for turn
classification.
"""

from __future__ import annotations

import random

import pytest

from navgraph.lib.graph import RoadGraph


@pytest.fixture
def square1():
    # Ways:
    #
    #   C ───[Oak St]─── D
    #   │                │
    # [Elm St]        [Pine St]
    #   │                │
    #   A ───[Main St]── B
    #
    # A(0, 0), B(0.01, 0), C(0, 0.01), D(0.01, 0.01); all two-way.
    g = RoadGraph()
    g.add_node("A", lon=0.0, lat=0.0)
    g.add_node("B", lon=0.01, lat=0.0)
    g.add_node("C", lon=0.0, lat=0.01)
    g.add_node("D", lon=0.01, lat=0.01)

    g.add_way("elm", ["A", "C"], name="Elm St")
    g.add_way("oak", ["C", "D"], name="Oak St")
    g.add_way("pine", ["D", "B"], name="Pine St")
    g.add_way("main", ["A", "B"], name="Main St")
    return g


@pytest.fixture
def diamond1():
    # Road distances (miles) override the short great-circle lengths:
    #
    #         [1]  B  [1]
    #       ┌──────┴──────┐
    #       A             D
    #       └──────┬──────┘
    #        [1.5] C [1.5]
    #
    # Shortest A->D is A-B-D with cost 2.
    g = RoadGraph()
    g.add_node("A", lon=0.0, lat=0.0)
    g.add_node("B", lon=0.001, lat=0.001)
    g.add_node("C", lon=0.001, lat=-0.001)
    g.add_node("D", lon=0.002, lat=0.0)

    g.add_road("A", "B", distance=1.0)
    g.add_road("B", "D", distance=1.0)
    g.add_road("A", "C", distance=1.5)
    g.add_road("C", "D", distance=1.5)
    return g


@pytest.fixture
def line_with_branch():
    #   W2 ── W1 ── S ── E1 ── E2 ── D
    #
    # Nodes are 0.01 degree apart along the equator, S at lon 0.
    g = RoadGraph()
    names = ["W2", "W1", "S", "E1", "E2", "D"]
    for idx, name in enumerate(names):
        g.add_node(name, lon=(idx - 2) * 0.01, lat=0.0)
    g.add_way("equator", names, name="Equator Rd")
    return g


@pytest.fixture
def disconnected1():
    #   A ── B        C ── D
    g = RoadGraph()
    g.add_node("A", lon=0.0, lat=0.0)
    g.add_node("B", lon=0.01, lat=0.0)
    g.add_node("C", lon=0.05, lat=0.0)
    g.add_node("D", lon=0.06, lat=0.0)
    g.add_way("west", ["A", "B"], name="West Rd")
    g.add_way("east", ["C", "D"], name="East Rd")
    return g


@pytest.fixture
def grid5():
    # 5x5 lattice, 0.01 degree spacing, nodes (col, row). Every road is two-way;
    # roughly a third of the roads are slowed down by a random factor >= 1 so
    # that straight-line distance stays a lower bound but shortest paths wind.
    rng = random.Random(42)
    g = RoadGraph()
    for col in range(5):
        for row in range(5):
            g.add_node((col, row), lon=col * 0.01, lat=row * 0.01)

    for col in range(5):
        for row in range(5):
            for nbr in ((col + 1, row), (col, row + 1)):
                if nbr[0] >= 5 or nbr[1] >= 5:
                    continue
                base = g.great_circle_distance((col, row), nbr)
                factor = 1.0 if rng.random() > 0.35 else 1.0 + 3.0 * rng.random()
                g.add_road((col, row), nbr, distance=base * factor)
    return g
