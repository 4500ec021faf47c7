# nestedfst/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Type definitions shared across the transducer engine.

This module contains the symbol type aliases, the distinguished INVALID
state, and the helpers used to render and order symbols. It helps break
circular dependencies between modules and provides a central location for
type information.

Design:
- No runtime dependencies on other modules
- States, inputs and effects are opaque hashable symbols
- Generators order symbols through symbol_key for byte-stable output
"""

from enum import Enum
from typing import Any, Callable, Hashable, Tuple


class _InvalidState:
    """Singleton marking a configuration that has no state yet.

    INVALID is a safe default for fresh configurations. It is never a legal
    transition target.
    """

    _instance = None

    def __new__(cls) -> "_InvalidState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID"

    def __str__(self) -> str:
        return "Invalid"

    def __reduce__(self):
        return (_InvalidState, ())


INVALID = _InvalidState()

# Type aliases for symbols
State = Hashable
Input = Hashable
Effect = Hashable
StateInputTuple = Tuple[State, Input]
DataUpdate = Callable[[Any, Input], Any]


def symbol_name(symbol: Hashable) -> str:
    """Render a symbol as text.

    Args:
        symbol: A state, input or effect symbol

    Returns:
        The value of a str-valued Enum member, the name of any other Enum
        member, and str(symbol) for everything else
    """
    if isinstance(symbol, Enum):
        if isinstance(symbol.value, str):
            return symbol.value
        return symbol.name
    return str(symbol)


def symbol_key(symbol: Hashable) -> Tuple[str, str]:
    """Sort key giving a total, deterministic order over mixed symbols."""
    return (symbol_name(symbol), type(symbol).__name__)
