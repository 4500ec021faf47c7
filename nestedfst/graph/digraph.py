# nestedfst/graph/digraph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Weighted directed graph with all-pairs shortest paths."""

import math
from typing import Dict, Hashable, List, Optional, Tuple

Vertex = Hashable
INFINITY = math.inf


class Graph:
    """
    A weighted directed graph over hashable vertices. Vertices keep their
    insertion order, which fixes the order of every derived result.
    """

    def __init__(self) -> None:
        self._vertices: Dict[Vertex, None] = {}
        self._edges: Dict[Vertex, Dict[Vertex, float]] = {}

    def __contains__(self, vertex: Vertex) -> bool:
        return vertex in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def add_vertex(self, vertex: Vertex) -> None:
        """Add a vertex. Adding an existing vertex does nothing."""
        if vertex not in self._vertices:
            self._vertices[vertex] = None
            self._edges[vertex] = {}

    def add_edge(self, source: Vertex, target: Vertex, weight: float = 1.0) -> None:
        """
        Add a directed edge, adding missing vertices. When the edge already
        exists the smaller weight is kept.
        """
        if math.isnan(weight) or weight < 0:
            raise ValueError(f"Edge weight must be a non-negative number, got {weight}")

        self.add_vertex(source)
        self.add_vertex(target)
        current = self._edges[source].get(target)
        if current is None or weight < current:
            self._edges[source][target] = weight

    @property
    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    @property
    def edges(self) -> List[Tuple[Vertex, Vertex, float]]:
        return [(u, v, w) for u, targets in self._edges.items() for v, w in targets.items()]

    def successors(self, vertex: Vertex) -> Dict[Vertex, float]:
        """Get the outgoing edges of a vertex as a target -> weight mapping."""
        if vertex not in self._vertices:
            raise ValueError(f"Vertex {vertex!r} not in graph")
        return dict(self._edges[vertex])

    def has_edge(self, source: Vertex, target: Vertex) -> bool:
        return target in self._edges.get(source, {})

    def weight(self, source: Vertex, target: Vertex) -> float:
        """Weight of the direct edge, or infinity when there is none."""
        return self._edges.get(source, {}).get(target, INFINITY)

    def shortest_paths(self) -> "ShortestPaths":
        """
        Run Floyd-Warshall over the graph.

        For every intermediate vertex k, relax dist[i][j] through k and keep a
        next pointer per pair for path reconstruction. O(V^3) time, O(V^2)
        memory.
        """
        vertices = self.vertices
        index = {vertex: i for i, vertex in enumerate(vertices)}
        n = len(vertices)

        dist: List[List[float]] = [[INFINITY] * n for _ in range(n)]
        nxt: List[List[Optional[int]]] = [[None] * n for _ in range(n)]

        for i in range(n):
            dist[i][i] = 0.0
            nxt[i][i] = i

        for source, targets in self._edges.items():
            i = index[source]
            for target, weight in targets.items():
                j = index[target]
                if i != j and weight < dist[i][j]:
                    dist[i][j] = weight
                    nxt[i][j] = j

        for k in range(n):
            dist_k = dist[k]
            for i in range(n):
                dist_ik = dist[i][k]
                if dist_ik == INFINITY:
                    continue
                dist_i = dist[i]
                nxt_i = nxt[i]
                for j in range(n):
                    candidate = dist_ik + dist_k[j]
                    if candidate < dist_i[j]:
                        dist_i[j] = candidate
                        nxt_i[j] = nxt_i[k]

        return ShortestPaths(vertices, dist, nxt)


class ShortestPaths:
    """
    All-pairs shortest path result. Unreachable pairs keep an infinite
    distance and have no path.
    """

    def __init__(
        self,
        vertices: List[Vertex],
        dist: List[List[float]],
        nxt: List[List[Optional[int]]],
    ) -> None:
        self._vertices = list(vertices)
        self._index = {vertex: i for i, vertex in enumerate(self._vertices)}
        self._dist = dist
        self._next = nxt

    @property
    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    def _lookup(self, vertex: Vertex) -> int:
        try:
            return self._index[vertex]
        except KeyError:
            raise ValueError(f"Vertex {vertex!r} not in graph") from None

    def distance(self, source: Vertex, target: Vertex) -> float:
        return self._dist[self._lookup(source)][self._lookup(target)]

    def is_reachable(self, source: Vertex, target: Vertex) -> bool:
        return self.distance(source, target) != INFINITY

    def path(self, source: Vertex, target: Vertex) -> Tuple[Vertex, ...]:
        """
        Reconstruct the vertex sequence from source to target by following
        next pointers. Returns an empty tuple when target is unreachable.
        """
        i = self._lookup(source)
        j = self._lookup(target)
        if self._next[i][j] is None:
            return ()

        path = [self._vertices[i]]
        while i != j:
            i = self._next[i][j]
            path.append(self._vertices[i])
        return tuple(path)

    def paths(self) -> Dict[Tuple[Vertex, Vertex], Tuple[Vertex, ...]]:
        """Paths for every ordered pair of distinct, reachable vertices."""
        result: Dict[Tuple[Vertex, Vertex], Tuple[Vertex, ...]] = {}
        for source in self._vertices:
            for target in self._vertices:
                if source == target:
                    continue
                path = self.path(source, target)
                if path:
                    result[(source, target)] = path
        return result

    def distances(self) -> Dict[Tuple[Vertex, Vertex], float]:
        """Finite distances for every ordered pair, self-pairs included."""
        return {
            (u, v): self._dist[i][j]
            for i, u in enumerate(self._vertices)
            for j, v in enumerate(self._vertices)
            if self._dist[i][j] != INFINITY
        }
