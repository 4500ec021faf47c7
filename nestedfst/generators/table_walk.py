# nestedfst/generators/table_walk.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Deterministic walk over a transducer's transition table.

Every generator reads transitions through this module, so the SQL, diagram
and shortest-path artifacts agree on the same (state, input, next state)
records. Records come out sorted by source state then input, independent of
the order the table was built in.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from nestedfst.core.errors import GenerationError
from nestedfst.core.transducer import Transducer
from nestedfst.core.types import Effect, Input, State, symbol_key, symbol_name


@dataclass(frozen=True)
class TransitionRecord:
    """One declared transition as seen by the generators."""

    source: State
    input: Input
    target: State
    effects: Tuple[Effect, ...] = ()

    def as_triple(self) -> Tuple[State, Input, State]:
        return (self.source, self.input, self.target)


def walk(transducer: Transducer) -> List[TransitionRecord]:
    """Read every declared transition of a transducer in sorted order.

    Args:
        transducer: The transducer to read

    Returns:
        Records sorted by source state, then input
    """
    return [
        TransitionRecord(source=state, input=input_symbol, target=transition.target, effects=transition.effects)
        for (state, input_symbol), transition in transducer.table.sorted_items()
    ]


def sorted_states(records: Iterable[TransitionRecord]) -> List[State]:
    """Distinct sources and targets, in sorted order."""
    states = set()
    for record in records:
        states.add(record.source)
        states.add(record.target)
    return sorted(states, key=symbol_key)


def check_unique_names(symbols: Iterable, kind: str) -> None:
    """Fail when two distinct symbols render to the same text.

    Raises:
        GenerationError: If rendered names collide
    """
    seen: Dict[str, object] = {}
    for symbol in symbols:
        name = symbol_name(symbol)
        if name in seen and seen[name] != symbol:
            raise GenerationError(f"Ambiguous {kind} name '{name}' shared by {seen[name]!r} and {symbol!r}")
        seen[name] = symbol
