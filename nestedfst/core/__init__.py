# nestedfst/core/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Core package providing the fundamental transducer functionality.

Architecture:
- Symbol types and the INVALID state
- Immutable Configuration and Outputs values
- Declarative Transitions collected into TransitionTables
- Transducers interpreting their tables, routing into children

Design Patterns:
- Value Object for configurations and outputs
- Builder Pattern for tables
- Composite Pattern for nested transducers

Cross-cutting:
- Error handling through the TransducerError hierarchy
- Debug logging through the standard logging module
"""

# Import order matters to avoid circular dependencies
from .types import INVALID, symbol_key, symbol_name
from .errors import (
    DuplicateTransitionError,
    GenerationError,
    TableError,
    TransducerError,
    UnknownChildError,
)
from .configuration import Configuration, Metadata, create_config
from .outputs import Outputs, create_outputs
from .transition import TableBuilder, Transition, TransitionTable
from .transducer import Transducer

__all__ = [
    # Symbols
    "INVALID",
    "symbol_key",
    "symbol_name",
    # Errors
    "TransducerError",
    "TableError",
    "DuplicateTransitionError",
    "UnknownChildError",
    "GenerationError",
    # Values
    "Configuration",
    "Metadata",
    "create_config",
    "Outputs",
    "create_outputs",
    # Tables and transducers
    "Transition",
    "TransitionTable",
    "TableBuilder",
    "Transducer",
]
