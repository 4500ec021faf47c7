# nestedfst/generators/sql.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
PostgreSQL state-machine generator.

Architecture:
- Reads the sorted transition records of a transducer
- Emits an IMMUTABLE SQL function mapping (state, event) to the next state
- Emits an aggregate folding a column of events through that function

The generated pair evaluates the same transition logic inside the database,
e.g. SELECT traffic_light_fsm(event ORDER BY at) FROM events. Effects are not
represented; the artifact encodes state changes only. Undefined
(state, event) pairs keep the current state, mirroring the identity
transition of Transducer.transduce.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from nestedfst.core.errors import GenerationError
from nestedfst.core.transducer import Transducer
from nestedfst.core.types import INVALID, Input, State, symbol_key, symbol_name
from nestedfst.generators.table_walk import TransitionRecord, check_unique_names, walk

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class SQLOptions:
    """Settings for SQL generation.

    Attributes:
        or_replace: Emit CREATE OR REPLACE instead of CREATE
        schema: Optional schema qualifying both objects
        indent: Indentation unit for the CASE expressions
    """

    or_replace: bool = True
    schema: Optional[str] = None
    indent: str = "    "


@dataclass(frozen=True)
class SQLArtifact:
    """The generated transition function and aggregate declaration."""

    transition_function: str
    aggregate_function: str
    transitions: Tuple[Tuple[State, Input, State], ...] = ()

    def __iter__(self) -> Iterator[str]:
        yield self.transition_function
        yield self.aggregate_function

    def script(self) -> str:
        return f"{self.transition_function}\n\n{self.aggregate_function}\n"


def quote_literal(symbol) -> str:
    """Render a symbol as a single-quoted SQL string literal."""
    text = symbol_name(symbol)
    if "$$" in text:
        raise GenerationError(f"Symbol {text!r} cannot be embedded in a dollar-quoted body")
    return "'" + text.replace("'", "''") + "'"


def _qualified(name: str, options: SQLOptions) -> str:
    if options.schema is None:
        return name
    if not _IDENTIFIER.match(options.schema):
        raise GenerationError(f"Schema must be an SQL identifier, got {options.schema!r}")
    return f"{options.schema}.{name}"


def _case_body(records: List[TransitionRecord], indent: str) -> List[str]:
    if not records:
        return ["SELECT state"]

    by_source = {}
    for record in records:
        by_source.setdefault(record.source, []).append(record)

    lines = ["SELECT CASE state"]
    for source in sorted(by_source, key=symbol_key):
        lines.append(f"{indent}WHEN {quote_literal(source)} THEN")
        lines.append(f"{indent * 2}CASE event")
        for record in sorted(by_source[source], key=lambda r: symbol_key(r.input)):
            lines.append(f"{indent * 3}WHEN {quote_literal(record.input)} THEN {quote_literal(record.target)}")
        lines.append(f"{indent * 3}ELSE state")
        lines.append(f"{indent * 2}END")
    lines.append(f"{indent}ELSE state")
    lines.append("END")
    return lines


def to_sql(
    transducer: Transducer,
    initial_state: State = None,
    options: Optional[SQLOptions] = None,
) -> SQLArtifact:
    """Generate a PostgreSQL transition function and aggregate.

    Args:
        transducer: The transducer to translate
        initial_state: Seed state of the aggregate, defaults to the
            transducer's initial state
        options: Generation settings

    Returns:
        The generated SQLArtifact; unpacks as
        (transition_function, aggregate_function)

    Raises:
        GenerationError: If the initial state is INVALID or undeclared, or
            symbol names are ambiguous
    """
    options = options or SQLOptions()
    initial = transducer.initial if initial_state is None else initial_state
    if initial is INVALID:
        raise GenerationError(f"Transducer '{transducer.name}' needs an initial state for SQL generation")

    records = walk(transducer)
    if records and initial not in transducer.states():
        raise GenerationError(f"Initial state '{symbol_name(initial)}' is not declared by '{transducer.name}'")

    check_unique_names(transducer.states() | {initial}, "state")
    check_unique_names(transducer.inputs(), "input")

    or_replace = "OR REPLACE " if options.or_replace else ""
    function_name = _qualified(f"{transducer.name}_transition", options)
    aggregate_name = _qualified(f"{transducer.name}_fsm", options)

    function_lines = [
        f"CREATE {or_replace}FUNCTION {function_name}(state text, event text)",
        "RETURNS text",
        "LANGUAGE sql",
        "IMMUTABLE",
        "AS $$",
        *_case_body(records, options.indent),
        "$$;",
    ]
    aggregate_lines = [
        f"CREATE {or_replace}AGGREGATE {aggregate_name}(text) (",
        f"{options.indent}SFUNC = {function_name},",
        f"{options.indent}STYPE = text,",
        f"{options.indent}INITCOND = {quote_literal(initial)}",
        ");",
    ]

    logger.info(f"Generated SQL for '{transducer.name}' with {len(records)} transitions")
    return SQLArtifact(
        transition_function="\n".join(function_lines),
        aggregate_function="\n".join(aggregate_lines),
        transitions=tuple(record.as_triple() for record in records),
    )
