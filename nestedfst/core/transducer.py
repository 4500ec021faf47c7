# nestedfst/core/transducer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Transducer core: named transition tables with nested children.

Architecture:
- A Transducer owns a name, a TransitionTable and an initial state
- Child transducers are held by name purely for routing
- transduce() is the single pure entry point

Design Patterns:
- Interpreter Pattern: transitions are data interpreted by transduce()
- Composite Pattern: parents route inputs into child transducers
- Flyweight: one immutable transducer serves any number of sessions

Responsibilities:
1. Transition lookup and identity on undefined keys
2. Child routing, completion holds and effect merging
3. Child lifecycle through spawn/retire
4. Construction-time validation of names and child references

Cross-cutting:
- No I/O, no exceptions at runtime
- Debug logging of every step
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from nestedfst.core.configuration import Configuration, create_config
from nestedfst.core.errors import TableError, UnknownChildError
from nestedfst.core.outputs import Outputs, create_outputs
from nestedfst.core.transition import TableBuilder, Transition, TransitionTable
from nestedfst.core.types import INVALID, Effect, Input, State

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

TableSource = Union[TransitionTable, TableBuilder, Mapping]


class Transducer:
    """A named, immutable finite-state transducer.

    Given a configuration and an input, a Transducer deterministically
    produces the next configuration plus an ordered list of effects. Keys
    missing from the table resolve to the identity transition, which makes
    partial tables safe to compose.

    Class Invariants:
    1. name is an identifier, unique among siblings
    2. The table is never modified after construction
    3. Every child referenced by the table is registered
    4. initial is INVALID or a state declared by the table

    Threading/Concurrency Guarantees:
    1. All methods are pure and safe to call concurrently
    2. Sessions are isolated by their Configuration values
    """

    def __init__(
        self,
        name: str,
        table: TableSource,
        initial: State = INVALID,
        children: Iterable["Transducer"] = (),
    ) -> None:
        """Initialize a Transducer.

        Args:
            name: Identifier naming this transducer
            table: A TransitionTable, a TableBuilder, or a mapping of
                (state, input) keys to Transitions
            initial: State that fresh sessions start in
            children: Child transducers this one routes inputs to

        Raises:
            TableError: If the name, table or child references are malformed
        """
        if not isinstance(name, str) or not _NAME_PATTERN.match(name):
            raise TableError(f"Transducer name must be an identifier, got {name!r}")

        if isinstance(table, TableBuilder):
            table = table.build()
        elif not isinstance(table, TransitionTable):
            if not isinstance(table, Mapping):
                raise TableError(f"Unsupported table type {type(table).__name__}")
            table = TransitionTable.from_mapping(table)

        registered: Dict[str, Transducer] = {}
        for child in children:
            if not isinstance(child, Transducer):
                raise TableError(f"Children must be Transducer instances, got {type(child).__name__}")
            if child.name in registered:
                raise TableError(f"Duplicate child transducer '{child.name}' in '{name}'")
            registered[child.name] = child

        missing = sorted(table.child_names() - set(registered))
        if missing:
            raise TableError(f"Transducer '{name}' references unknown children: {', '.join(missing)}")

        if initial is not INVALID and len(table) and initial not in table.states():
            raise TableError(f"Initial state '{initial}' is not declared by '{name}'")

        self._name = name
        self._table = table
        self._initial = initial
        self._children = MappingProxyType(registered)

    def __repr__(self) -> str:
        return f"Transducer(name={self._name!r}, transitions={len(self._table)}, children={list(self._children)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def initial(self) -> State:
        return self._initial

    @property
    def children(self) -> Mapping[str, "Transducer"]:
        """Read-only view of the registered child transducers."""
        return self._children

    def child(self, name: str) -> "Transducer":
        """Get a registered child transducer.

        Args:
            name: Name of the child

        Returns:
            The child transducer

        Raises:
            UnknownChildError: If no child with that name is registered
        """
        try:
            return self._children[name]
        except KeyError:
            raise UnknownChildError(f"Transducer '{self._name}' has no child '{name}'") from None

    def states(self) -> FrozenSet[State]:
        return self._table.states()

    def inputs(self) -> FrozenSet[Input]:
        return self._table.inputs()

    def effects(self) -> FrozenSet[Effect]:
        return self._table.effects()

    def initial_config(self, data: Any = None) -> Configuration:
        """Create a configuration for a fresh session of this transducer."""
        return create_config(self._initial, data)

    def transduce(self, config: Configuration, input_symbol: Input) -> Outputs:
        """Compute the next configuration and effects for an input.

        Args:
            config: The current configuration
            input_symbol: The input to process

        Returns:
            Outputs of the matching transition, or the identity Outputs
            (config unchanged, no effects) when the key is undefined
        """
        transition = self._table.lookup(config.state, input_symbol)
        if transition is None:
            logger.debug(f"{self._name}: no transition for '{input_symbol}' in '{config.state}'")
            return create_outputs(config)
        return self._fire(transition, config, input_symbol)

    def run(self, config: Configuration, inputs: Iterable[Input]) -> Outputs:
        """Fold a sequence of inputs through transduce().

        Args:
            config: Starting configuration
            inputs: Inputs to process, in order

        Returns:
            The final configuration with every effect in emission order
        """
        outputs = create_outputs(config)
        for input_symbol in inputs:
            step = self.transduce(outputs.config, input_symbol)
            outputs = Outputs(config=step.config, effects=outputs.effects + step.effects)
        return outputs

    def _fire(self, transition: Transition, config: Configuration, input_symbol: Input) -> Outputs:
        route: Optional[str] = transition.route
        inner: Optional[Outputs] = None

        if transition.holds and config.has_child(route):
            inner = self._children[route].transduce(config.child(route), input_symbol)
            if inner.state not in transition.completes_on:
                logger.debug(f"{self._name}: holding in '{config.state}' while '{route}' is in '{inner.state}'")
                return create_outputs(config).merge(inner, route)

        next_config = config.with_state(transition.target)
        if transition.update is not None:
            next_config = next_config.with_data(transition.update(config.data, input_symbol))
        for name in transition.spawn:
            next_config = next_config.with_child(name, self._children[name].initial_config())

        outputs = Outputs(config=next_config, effects=transition.effects)
        if inner is not None:
            outputs = outputs.merge(inner, route)
        elif route is not None:
            outputs = outputs.transduce_child(self._children[route], input_symbol, config)

        for name in transition.retire:
            outputs = outputs.with_config(outputs.config.without_child(name))

        logger.debug(f"{self._name}: '{config.state}' --{input_symbol}--> '{outputs.state}'")
        return outputs
