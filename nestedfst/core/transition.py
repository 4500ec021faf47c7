# nestedfst/core/transition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Transition declarations and the transition table.

Architecture:
- A Transition is a declarative record: target state, effects, child routing
- A TransitionTable maps unique (state, input) keys to Transitions
- A TableBuilder collects entries and produces a frozen table

Design Patterns:
- Command Pattern: a Transition describes what firing does
- Builder Pattern: TableBuilder assembles tables incrementally
- Value Object: Transitions and tables never change after construction

Responsibilities:
1. Transition declaration
   - Declared target, readable without firing
   - Ordered effects
   - Child routing with completion states
   - Child lifecycle (spawn/retire)
   - Optional data update
2. Table construction
   - Fail fast on duplicate keys
   - Reject INVALID targets and malformed records
3. Table queries
   - Lookup by (state, input)
   - State, input and effect alphabets
   - Deterministically sorted iteration for code generation

Security:
- Tables are read-only after construction

Cross-cutting:
- Thread-safe builder
"""

import threading
from dataclasses import dataclass
from typing import (
    AbstractSet,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
)

from nestedfst.core.errors import DuplicateTransitionError, TableError
from nestedfst.core.types import (
    INVALID,
    DataUpdate,
    Effect,
    Input,
    State,
    StateInputTuple,
    symbol_key,
)


@dataclass(frozen=True)
class Transition:
    """Declarative description of what happens for one (state, input) key.

    The target and effects are stored as data so that generators can read
    them without firing the transition.

    When route names a child, the input is forwarded to that child. If
    completes_on is non-empty and the child does not land in one of those
    states, the parent holds in its source state and only the child's effects
    are emitted. Otherwise the parent moves to target, emitting its own
    effects followed by the child's.

    Class Invariants:
    1. target is never INVALID
    2. completes_on requires route
    3. Child names are non-empty strings
    4. effects keep their declared order
    5. A routed child is never spawned by the same transition
    """

    target: State
    effects: Tuple[Effect, ...] = ()
    route: Optional[str] = None
    completes_on: FrozenSet[State] = frozenset()
    spawn: Tuple[str, ...] = ()
    retire: Tuple[str, ...] = ()
    update: Optional[DataUpdate] = None

    def __post_init__(self) -> None:
        if self.target is None or self.target is INVALID:
            raise TableError("Transition target must be a real state, not INVALID")

        object.__setattr__(self, "effects", tuple(self.effects))
        object.__setattr__(self, "completes_on", frozenset(self.completes_on))
        object.__setattr__(self, "spawn", tuple(self.spawn))
        object.__setattr__(self, "retire", tuple(self.retire))

        if self.completes_on and self.route is None:
            raise TableError("completes_on requires a routed child")
        if self.route is not None and self.route in self.spawn:
            raise TableError(f"Child '{self.route}' cannot be both spawned and routed to by one transition")
        for name in self.child_names():
            if not isinstance(name, str) or not name:
                raise TableError(f"Child names must be non-empty strings, got {name!r}")
        if self.update is not None and not callable(self.update):
            raise TableError("Transition update must be callable")

    @property
    def holds(self) -> bool:
        """Whether this transition can hold in its source state."""
        return bool(self.completes_on)

    def child_names(self) -> Set[str]:
        """Every child name this transition refers to."""
        names = set(self.spawn) | set(self.retire)
        if self.route is not None:
            names.add(self.route)
        return names


class TransitionTable(Mapping):
    """Immutable mapping from (state, input) keys to Transitions.

    Entries are supplied as ((state, input), transition) pairs rather than a
    dict literal, so that a repeated key is detected instead of silently
    replacing the earlier registration.

    Class Invariants:
    1. Keys are unique
    2. Values are Transition instances
    3. Contents never change after construction
    """

    def __init__(self, entries: Iterable[Tuple[StateInputTuple, Transition]] = ()) -> None:
        """Initialize a TransitionTable.

        Args:
            entries: ((state, input), transition) pairs

        Raises:
            DuplicateTransitionError: If a key appears twice
            TableError: If a key or value is malformed
        """
        table: Dict[StateInputTuple, Transition] = {}
        for key, transition in entries:
            if not isinstance(key, tuple) or len(key) != 2:
                raise TableError(f"Table keys must be (state, input) pairs, got {key!r}")
            if not isinstance(transition, Transition):
                raise TableError(f"Table values must be Transition instances, got {type(transition).__name__}")
            if key in table:
                raise DuplicateTransitionError(key[0], key[1])
            table[key] = transition
        self._table = table

    @classmethod
    def from_mapping(cls, mapping: Mapping[StateInputTuple, Transition]) -> "TransitionTable":
        return cls(mapping.items())

    def __getitem__(self, key: StateInputTuple) -> Transition:
        return self._table[key]

    def __iter__(self) -> Iterator[StateInputTuple]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"TransitionTable({len(self._table)} transitions)"

    def lookup(self, state: State, input_symbol: Input) -> Optional[Transition]:
        """Get the transition for a key, or None when undefined."""
        return self._table.get((state, input_symbol))

    def sorted_items(self) -> List[Tuple[StateInputTuple, Transition]]:
        """Entries ordered by state then input, independent of insertion order."""
        return sorted(
            self._table.items(),
            key=lambda item: (symbol_key(item[0][0]), symbol_key(item[0][1])),
        )

    def states(self) -> FrozenSet[State]:
        """All states appearing as a source or a target."""
        states = set()
        for (state, _), transition in self._table.items():
            states.add(state)
            states.add(transition.target)
        return frozenset(states)

    def inputs(self) -> FrozenSet[Input]:
        return frozenset(input_symbol for _, input_symbol in self._table)

    def effects(self) -> FrozenSet[Effect]:
        return frozenset(effect for transition in self._table.values() for effect in transition.effects)

    def child_names(self) -> FrozenSet[str]:
        names: Set[str] = set()
        for transition in self._table.values():
            names |= transition.child_names()
        return frozenset(names)


class TableBuilder:
    """Builds transition tables.

    TableBuilder implements the Builder pattern to collect transitions one
    at a time and produce a frozen TransitionTable. Duplicate keys are
    rejected when they are added, not when the table is built.

    Threading/Concurrency Guarantees:
    1. Thread-safe registration
    2. build() takes a consistent snapshot
    """

    def __init__(self) -> None:
        self._entries: Dict[StateInputTuple, Transition] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def add_transition(self, state: State, input_symbol: Input, transition: Transition) -> "TableBuilder":
        """Register a transition for a key.

        Args:
            state: Source state
            input_symbol: Triggering input
            transition: The transition to register

        Returns:
            This builder, for chaining

        Raises:
            DuplicateTransitionError: If the key is already registered
        """
        if not isinstance(transition, Transition):
            raise TableError(f"Expected a Transition, got {type(transition).__name__}")
        with self._lock:
            if (state, input_symbol) in self._entries:
                raise DuplicateTransitionError(state, input_symbol)
            self._entries[(state, input_symbol)] = transition
        return self

    def add(
        self,
        state: State,
        input_symbol: Input,
        target: State,
        effects: Iterable[Effect] = (),
        *,
        route: Optional[str] = None,
        completes_on: AbstractSet[State] = frozenset(),
        spawn: Iterable[str] = (),
        retire: Iterable[str] = (),
        update: Optional[DataUpdate] = None,
    ) -> "TableBuilder":
        """Declare and register a transition in one call.

        Args:
            state: Source state
            input_symbol: Triggering input
            target: Declared next state
            effects: Effects emitted when the transition completes
            route: Optional child name to forward the input to
            completes_on: Child states that let the parent move to target
            spawn: Children instantiated when the transition completes
            retire: Children discarded when the transition completes
            update: Optional (data, input) -> data callable

        Returns:
            This builder, for chaining
        """
        transition = Transition(
            target=target,
            effects=tuple(effects),
            route=route,
            completes_on=frozenset(completes_on),
            spawn=tuple(spawn),
            retire=tuple(retire),
            update=update,
        )
        return self.add_transition(state, input_symbol, transition)

    def build(self) -> TransitionTable:
        with self._lock:
            return TransitionTable(list(self._entries.items()))
