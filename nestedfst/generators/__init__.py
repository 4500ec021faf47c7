# nestedfst/generators/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Artifact generators driven by a transducer's transition table.

All generators share one sorted table walk, so their outputs agree on the
same transitions and are byte-stable across runs.
"""

from .table_walk import TransitionRecord, walk
from .sql import SQLArtifact, SQLOptions, to_sql
from .diagram import DotOptions, to_digraph, to_mermaid
from .paths import PathWeighting, ShortestPathReport, build_state_graph, get_shortest_paths

__all__ = [
    "TransitionRecord",
    "walk",
    "SQLArtifact",
    "SQLOptions",
    "to_sql",
    "DotOptions",
    "to_digraph",
    "to_mermaid",
    "PathWeighting",
    "ShortestPathReport",
    "build_state_graph",
    "get_shortest_paths",
]
