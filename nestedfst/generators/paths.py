# nestedfst/generators/paths.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
All-pairs shortest paths over a transducer's state graph.

Architecture:
- States become vertices, declared transitions become edges
- Floyd-Warshall from nestedfst.graph computes distances and next pointers
- Paths are reconstructed for every ordered pair of reachable states

Edge weights:
    PathWeighting.DISCOVERY assigns each (source, target) pair a strictly
    increasing counter the first time the sorted table walk meets it. The
    "shortest" path is then the one using the earliest-discovered
    transitions. This is a heuristic and not a minimal hop count.
    PathWeighting.UNIFORM gives every edge weight 1, which yields true
    fewest-hop paths.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from nestedfst.core.transducer import Transducer
from nestedfst.core.types import Input, State
from nestedfst.generators.table_walk import TransitionRecord, sorted_states, walk
from nestedfst.graph import Graph, ShortestPaths

logger = logging.getLogger(__name__)

StatePair = Tuple[State, State]


class PathWeighting(Enum):
    """Edge weighting strategy for the shortest-path analysis."""

    DISCOVERY = auto()  # Counter in sorted discovery order
    UNIFORM = auto()  # Weight 1 per edge


@dataclass(frozen=True)
class ShortestPathReport:
    """Shortest paths between every ordered pair of reachable states.

    Attributes:
        paths: (source, target) -> state sequence, distinct pairs only
        labels: (source, target) -> input of the first-discovered edge
        distances: (source, target) -> finite distance, self-pairs included
        transitions: the (state, input, next state) triples the graph was
            built from
    """

    paths: Mapping[StatePair, Tuple[State, ...]]
    labels: Mapping[StatePair, Input]
    distances: Mapping[StatePair, float]
    transitions: Tuple[Tuple[State, Input, State], ...] = ()
    analysis: Optional[ShortestPaths] = field(default=None, compare=False, repr=False)

    def __iter__(self) -> Iterator[Mapping]:
        yield self.paths
        yield self.labels

    def path(self, source: State, target: State) -> Tuple[State, ...]:
        """State sequence from source to target; empty if unreachable."""
        if source == target and (source, target) in self.distances:
            return (source,)
        return self.paths.get((source, target), ())

    def inputs_for(self, source: State, target: State) -> Tuple[Input, ...]:
        """Inputs driving the machine along the reconstructed path."""
        path = self.path(source, target)
        return tuple(self.labels[(u, v)] for u, v in zip(path, path[1:]))


def build_state_graph(
    transducer: Transducer,
    weighting: PathWeighting = PathWeighting.DISCOVERY,
) -> Tuple[Graph, Dict[StatePair, Input]]:
    """Build the weighted state graph of a transducer.

    Args:
        transducer: The transducer to read
        weighting: Edge weighting strategy

    Returns:
        The graph and the (source, target) -> input label index
    """
    return _graph_from_records(walk(transducer), weighting)


def _graph_from_records(
    records: List[TransitionRecord],
    weighting: PathWeighting,
) -> Tuple[Graph, Dict[StatePair, Input]]:
    graph = Graph()
    for state in sorted_states(records):
        graph.add_vertex(state)

    labels: Dict[StatePair, Input] = {}
    counter = 0
    for record in records:
        pair = (record.source, record.target)
        if pair in labels:
            continue
        counter += 1
        labels[pair] = record.input
        weight = counter if weighting is PathWeighting.DISCOVERY else 1
        graph.add_edge(record.source, record.target, weight)

    return graph, labels


def get_shortest_paths(
    transducer: Transducer,
    weighting: PathWeighting = PathWeighting.DISCOVERY,
) -> ShortestPathReport:
    """Compute shortest paths between every ordered pair of states.

    Args:
        transducer: The transducer to analyze
        weighting: Edge weighting strategy

    Returns:
        A ShortestPathReport; unpacks as (paths, labels)
    """
    records = walk(transducer)
    graph, labels = _graph_from_records(records, weighting)
    analysis = graph.shortest_paths()
    paths = analysis.paths()

    logger.info(f"Computed {len(paths)} shortest paths over {len(graph)} states of '{transducer.name}'")
    return ShortestPathReport(
        paths=paths,
        labels=labels,
        distances=analysis.distances(),
        transitions=tuple(record.as_triple() for record in records),
        analysis=analysis,
    )
