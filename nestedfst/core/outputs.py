# nestedfst/core/outputs.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Outputs model: the result of a single transition.

Architecture:
- Outputs pair the next Configuration with an ordered tuple of effects
- Effects are symbolic descriptors the embedding application executes
- Child results fold into parent results through merge/transduce_child

Design Patterns:
- Value Object: Outputs are immutable
- Composite: child outputs compose into parent outputs

Responsibilities:
1. Effect accumulation
   - Append order is preserved
   - Parent effects precede child effects on merge
2. Child routing
   - Forward an input into an instantiated child
   - Replace only that child's configuration
"""

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple

from nestedfst.core.configuration import Configuration, create_config
from nestedfst.core.types import Effect, Input, State

if TYPE_CHECKING:
    from nestedfst.core.transducer import Transducer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outputs:
    """Next configuration plus the ordered effects of one transition.

    Class Invariants:
    1. config is always a Configuration
    2. effects keep the order in which they were added
    3. Merging never reorders existing effects
    """

    config: Configuration
    effects: Tuple[Effect, ...] = ()

    __hash__ = None

    def __post_init__(self) -> None:
        if not isinstance(self.config, Configuration):
            raise TypeError("Outputs config must be a Configuration")
        object.__setattr__(self, "effects", tuple(self.effects))

    @property
    def state(self) -> State:
        """The state of the next configuration."""
        return self.config.state

    def with_config(self, config: Configuration) -> "Outputs":
        return replace(self, config=config)

    def with_state(self, state: State) -> "Outputs":
        return replace(self, config=self.config.with_state(state))

    def with_data(self, data: Any) -> "Outputs":
        return replace(self, config=self.config.with_data(data))

    def add_effect(self, effect: Effect) -> "Outputs":
        """Append one effect.

        Args:
            effect: The effect symbol to append

        Returns:
            New Outputs with the effect at the end
        """
        return replace(self, effects=self.effects + (effect,))

    def add_effects(self, effects: Iterable[Effect]) -> "Outputs":
        return replace(self, effects=self.effects + tuple(effects))

    def merge(self, inner: "Outputs", child_name: str) -> "Outputs":
        """Fold a child's outputs into these outputs.

        The merged effects are this instance's effects followed by the
        child's effects. The child's new configuration replaces the entry
        stored under child_name. The parent state is left untouched.

        Args:
            inner: Outputs produced by the child transducer
            child_name: Name of the child transducer

        Returns:
            The merged Outputs
        """
        return Outputs(
            config=self.config.with_child(child_name, inner.config),
            effects=self.effects + inner.effects,
        )

    def transduce_child(
        self,
        child: "Transducer",
        input_symbol: Input,
        config: Optional[Configuration] = None,
    ) -> "Outputs":
        """Route an input into a child transducer and merge its result.

        Args:
            child: The child transducer to route to
            input_symbol: The input to forward
            config: Outer configuration holding the child's current
                configuration; defaults to this instance's config

        Returns:
            The merged Outputs, or these Outputs unchanged when the child is
            not instantiated in the outer configuration
        """
        source = self.config if config is None else config
        child_config = source.child(child.name)
        if child_config is None:
            logger.debug(f"Child '{child.name}' not instantiated, ignoring input '{input_symbol}'")
            return self

        inner = child.transduce(child_config, input_symbol)
        logger.debug(f"Routed '{input_symbol}' into child '{child.name}': {child_config.state} -> {inner.state}")
        return self.merge(inner, child.name)


def create_outputs(config: Optional[Configuration] = None) -> Outputs:
    """Create Outputs around a configuration with no effects.

    Args:
        config: Configuration to wrap, a fresh one when omitted

    Returns:
        A new Outputs
    """
    return Outputs(config=config if config is not None else create_config())
