# tests/unit/generators/test_paths.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Unit tests for the shortest-path analyzer."""

import pytest

from nestedfst.core.transducer import Transducer
from nestedfst.core.transition import TableBuilder
from nestedfst.generators.paths import PathWeighting, ShortestPathReport, build_state_graph, get_shortest_paths
from nestedfst.machines.traffic_light import Light, Signal


def test_red_to_pedestrian_red(traffic_light):
    """Test the reference path through the traffic light cycle."""
    report = get_shortest_paths(traffic_light)
    assert report.paths[(Light.RED, Light.PEDESTRIAN_RED)] == (
        Light.RED,
        Light.GREEN,
        Light.YELLOW,
        Light.PEDESTRIAN_RED,
    )
    assert len(report.path(Light.RED, Light.PEDESTRIAN_RED)) - 1 == 3


def test_self_distance_zero(traffic_light):
    """Test every state reaches itself at distance zero."""
    report = get_shortest_paths(traffic_light)
    for state in Light:
        assert report.distances[(state, state)] == 0
        assert report.path(state, state) == (state,)


def test_discovery_weights(traffic_light):
    """Test weights follow the sorted discovery order."""
    graph, labels = build_state_graph(traffic_light)
    assert graph.weight(Light.GREEN, Light.YELLOW) == 1
    assert graph.weight(Light.PEDESTRIAN_RED, Light.RED) == 2
    assert graph.weight(Light.RED, Light.GREEN) == 3
    assert graph.weight(Light.YELLOW, Light.PEDESTRIAN_RED) == 4
    assert labels[(Light.PEDESTRIAN_RED, Light.RED)] == Signal.PEDESTRIAN_TIMER
    assert graph.vertices == [Light.GREEN, Light.PEDESTRIAN_RED, Light.RED, Light.YELLOW]


def test_report_unpacks_to_paths_and_labels(traffic_light):
    """Test the report unpacks as (paths, labels)."""
    paths, labels = get_shortest_paths(traffic_light)
    assert isinstance(paths[(Light.GREEN, Light.RED)], tuple)
    assert labels[(Light.GREEN, Light.YELLOW)] == Signal.TIMER


def test_inputs_for(traffic_light):
    """Test reconstructing the input sequence along a path."""
    report = get_shortest_paths(traffic_light)
    assert report.inputs_for(Light.GREEN, Light.RED) == (
        Signal.TIMER,
        Signal.TIMER,
        Signal.PEDESTRIAN_TIMER,
    )
    assert report.inputs_for(Light.GREEN, Light.GREEN) == ()


def _shortcut_machine():
    # discovery order: m->t=1, s->m=2, s->x=3, s->t=4
    table = (
        TableBuilder()
        .add("s", "b", "t")
        .add("s", "aa", "x")
        .add("s", "a", "m")
        .add("m", "go", "t")
    )
    return Transducer("shortcut", table, initial="s")


def test_discovery_weighting_is_a_heuristic():
    """Test discovery weights can prefer more hops than necessary."""
    report = get_shortest_paths(_shortcut_machine(), PathWeighting.DISCOVERY)
    assert report.path("s", "t") == ("s", "m", "t")
    assert report.distances[("s", "t")] == 3
    assert report.inputs_for("s", "t") == ("a", "go")


def test_uniform_weighting_counts_hops():
    """Test uniform weights give fewest-hop paths."""
    report = get_shortest_paths(_shortcut_machine(), PathWeighting.UNIFORM)
    assert report.path("s", "t") == ("s", "t")
    assert report.distances[("s", "t")] == 1
    assert report.distances[("s", "m")] == 1


def test_unreachable_pairs_absent():
    """Test pairs with no path are missing from the report."""
    machine = Transducer("oneway", TableBuilder().add("start", "go", "end"))
    report = get_shortest_paths(machine)
    assert report.paths == {("start", "end"): ("start", "end")}
    assert report.path("end", "start") == ()
    assert report.inputs_for("end", "start") == ()
    assert ("end", "start") not in report.distances


def test_terminal_targets_are_vertices():
    """Test states that only appear as targets are still vertices."""
    machine = Transducer("oneway", TableBuilder().add("start", "go", "end"))
    graph, _ = build_state_graph(machine)
    assert "end" in graph


def test_self_loops_labelled_but_free():
    """Test self-loops enter the label index without changing distances."""
    machine = Transducer("loop", TableBuilder().add("s", "stay", "s").add("s", "go", "t"))
    report = get_shortest_paths(machine)
    assert report.labels[("s", "s")] == "stay"
    assert report.distances[("s", "s")] == 0
    assert report.path("s", "t") == ("s", "t")


def test_first_discovered_input_labels_parallel_edges():
    """Test the label index keeps the first input in sorted order."""
    machine = Transducer("twice", TableBuilder().add("s", "b", "t").add("s", "a", "t"))
    report = get_shortest_paths(machine)
    assert report.labels[("s", "t")] == "a"
    assert len(report.transitions) == 2


def test_empty_transducer():
    """Test an empty table gives an empty report."""
    report = get_shortest_paths(Transducer("empty", TableBuilder()))
    assert isinstance(report, ShortestPathReport)
    assert report.paths == {}
    assert report.labels == {}


@pytest.mark.parametrize("weighting", list(PathWeighting))
def test_every_path_follows_declared_edges(traffic_light, weighting):
    """Test consecutive path states are joined by a declared transition."""
    report = get_shortest_paths(traffic_light, weighting)
    declared = {(source, target) for source, _, target in report.transitions}
    for path in report.paths.values():
        for step in zip(path, path[1:]):
            assert step in declared
