# nestedfst/graph/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Generic weighted directed graph library."""

from .digraph import INFINITY, Graph, ShortestPaths

__all__ = ["Graph", "ShortestPaths", "INFINITY"]
