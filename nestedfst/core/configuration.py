# nestedfst/core/configuration.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Configuration model: the running snapshot of one machine instance.

Architecture:
- A Configuration pairs a state with an opaque data payload
- Metadata carries the configurations of instantiated child transducers
- Metadata also carries parallel sibling configurations (orthogonal regions)
- Configurations nest into a tree, never a cyclic graph

Design Patterns:
- Value Object: Configurations are immutable and compared by value
- Builder: with_* methods return modified copies

Cross-cutting:
- Thread safety through immutability
- The core replaces configurations wholesale and never mutates them
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from nestedfst.core.types import INVALID, State


@dataclass(frozen=True)
class Metadata:
    """Structural metadata attached to a Configuration.

    Class Invariants:
    1. Child names are unique keys
    2. Only instantiated children have an entry
    3. Parallel configurations keep their declared order
    """

    children: Mapping[str, "Configuration"] = field(default_factory=dict)
    parallel: Tuple["Configuration", ...] = ()

    # Compared by value only.
    __hash__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))
        object.__setattr__(self, "parallel", tuple(self.parallel))

    def with_child(self, name: str, config: "Configuration") -> "Metadata":
        children: Dict[str, Configuration] = dict(self.children)
        children[name] = config
        return replace(self, children=children)

    def without_child(self, name: str) -> "Metadata":
        if name not in self.children:
            return self
        children = {key: value for key, value in self.children.items() if key != name}
        return replace(self, children=children)


@dataclass(frozen=True)
class Configuration:
    """The complete runtime snapshot of one machine instance.

    A Configuration holds the current state, an opaque extended-data payload
    and the metadata for nested children. It is never modified in place:
    every with_* method returns a new Configuration and leaves the receiver
    untouched.

    Class Invariants:
    1. state is known to the owning transducer, or INVALID before start
    2. data is opaque to the engine
    3. Child configurations are reachable only through metadata
    """

    state: State = INVALID
    data: Any = None
    metadata: Metadata = field(default_factory=Metadata)

    # Compared by value only.
    __hash__ = None

    @property
    def children(self) -> Mapping[str, "Configuration"]:
        """Read-only view of the instantiated child configurations."""
        return self.metadata.children

    @property
    def parallel(self) -> Tuple["Configuration", ...]:
        """Parallel sibling configurations, in declaration order."""
        return self.metadata.parallel

    @property
    def is_initialized(self) -> bool:
        return self.state is not INVALID

    def has_child(self, name: str) -> bool:
        return name in self.metadata.children

    def child(self, name: str) -> Optional["Configuration"]:
        """Get the configuration of an instantiated child.

        Args:
            name: Name of the child transducer

        Returns:
            The child's configuration, or None if it is not instantiated
        """
        return self.metadata.children.get(name)

    def with_state(self, state: State) -> "Configuration":
        return replace(self, state=state)

    def with_data(self, data: Any) -> "Configuration":
        return replace(self, data=data)

    def with_child(self, name: str, config: "Configuration") -> "Configuration":
        """Return a copy with the named child's configuration set or replaced.

        Args:
            name: Name of the child transducer
            config: The child's configuration

        Returns:
            A new Configuration; other children are carried over untouched
        """
        if not isinstance(config, Configuration):
            raise TypeError("Child configuration must be a Configuration")
        return replace(self, metadata=self.metadata.with_child(name, config))

    def without_child(self, name: str) -> "Configuration":
        """Return a copy with the named child discarded (no-op if absent)."""
        metadata = self.metadata.without_child(name)
        if metadata is self.metadata:
            return self
        return replace(self, metadata=metadata)

    def with_parallel(self, *configs: "Configuration") -> "Configuration":
        """Return a copy whose parallel sibling configurations are replaced."""
        return replace(self, metadata=replace(self.metadata, parallel=configs))


def create_config(state: State = INVALID, data: Any = None) -> Configuration:
    """Create a fresh Configuration with no children.

    Args:
        state: Initial state, INVALID when omitted
        data: Optional extended-data payload

    Returns:
        A new Configuration
    """
    return Configuration(state=state, data=data)
