# nestedfst/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""nestedfst: hierarchical finite-state transducer engine

This package provides explicit state machines ("transducers") that, given a
configuration and an input symbol, deterministically produce the next
configuration plus an ordered list of effects.

Responsibilities:
    - Transition table definition and validation
    - Pure, deterministic transitions with identity on undefined inputs
    - Nested child transducers carried in the parent configuration
    - SQL, diagram and shortest-path artifacts from the same table

Interactions:
    - Client code supplies states, inputs, effects and transitions
    - Client code executes the returned effects
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Transducers and tables are immutable after construction
        - Configurations and outputs are immutable values

    Error Handling:
        - Construction errors raise TransducerError subclasses
        - Runtime "failures" are data (identity outputs, empty paths)

    Logging:
        - Module-level loggers under the nestedfst namespace
        - No handlers installed by the library
"""

from nestedfst.core import (
    INVALID,
    Configuration,
    DuplicateTransitionError,
    GenerationError,
    Metadata,
    Outputs,
    TableBuilder,
    TableError,
    Transducer,
    TransducerError,
    Transition,
    TransitionTable,
    UnknownChildError,
    create_config,
    create_outputs,
)

__version__ = "0.1.0"

__all__ = [
    "INVALID",
    "Configuration",
    "Metadata",
    "create_config",
    "Outputs",
    "create_outputs",
    "Transition",
    "TransitionTable",
    "TableBuilder",
    "Transducer",
    "TransducerError",
    "TableError",
    "DuplicateTransitionError",
    "UnknownChildError",
    "GenerationError",
]
