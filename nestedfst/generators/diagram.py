# nestedfst/generators/diagram.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Directed-graph renderings of a transducer.

Architecture:
- Graphviz DOT: one edge statement per (source, target, input)
- Mermaid stateDiagram-v2 with the same edges

Self-loops and parallel edges with different inputs are each rendered.
Output is sorted, so regenerating from an unchanged table is byte-stable.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from nestedfst.core.errors import GenerationError
from nestedfst.core.transducer import Transducer
from nestedfst.core.types import INVALID, symbol_name
from nestedfst.generators.table_walk import TransitionRecord, check_unique_names, sorted_states, walk

logger = logging.getLogger(__name__)

_MERMAID_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class DotOptions:
    """Settings for DOT rendering.

    Attributes:
        rankdir: Graphviz layout direction
        node_shape: Shape of state nodes
        mark_initial: Draw the initial state with a double outline
        include_effects: Append effects to edge labels
    """

    rankdir: str = "LR"
    node_shape: str = "ellipse"
    mark_initial: bool = True
    include_effects: bool = False


def dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


_MERMAID_ENTITIES = str.maketrans({
    "#": "#35;",
    '"': "#quot;",
    ":": "#58;",
    ";": "#59;",
    "\r": "",
    "\n": "<br/>",
})


def mermaid_escape(text: str) -> str:
    """Make text safe inside a Mermaid label or quoted state description."""
    return text.translate(_MERMAID_ENTITIES)


def _quoted(symbol) -> str:
    return f'"{dot_escape(symbol_name(symbol))}"'


def _edge_label(record: TransitionRecord, include_effects: bool) -> str:
    label = symbol_name(record.input)
    if include_effects and record.effects:
        label += " / " + ", ".join(symbol_name(effect) for effect in record.effects)
    return label


def to_digraph(transducer: Transducer, options: Optional[DotOptions] = None) -> str:
    """Render a transducer as a Graphviz digraph.

    Args:
        transducer: The transducer to render
        options: Rendering settings

    Returns:
        DOT source text ending in a newline
    """
    options = options or DotOptions()
    records = walk(transducer)
    states = sorted_states(records)
    check_unique_names(states, "state")

    lines: List[str] = [
        f"digraph {transducer.name} {{",
        f"    rankdir={options.rankdir};",
        f"    node [shape={options.node_shape}];",
    ]

    initial = transducer.initial
    for state in states:
        if options.mark_initial and state == initial:
            lines.append(f"    {_quoted(state)} [peripheries=2];")
        else:
            lines.append(f"    {_quoted(state)};")

    for record in records:
        label = dot_escape(_edge_label(record, options.include_effects))
        lines.append(f'    {_quoted(record.source)} -> {_quoted(record.target)} [label="{label}"];')

    lines.append("}")
    logger.info(f"Rendered DOT for '{transducer.name}': {len(states)} states, {len(records)} edges")
    return "\n".join(lines) + "\n"


def _mermaid_ids(states) -> Dict[object, str]:
    ids: Dict[object, str] = {}
    taken: Dict[str, object] = {}
    for state in states:
        node_id = _MERMAID_UNSAFE.sub("_", symbol_name(state)) or "_"
        if node_id in taken:
            raise GenerationError(f"States {taken[node_id]!r} and {state!r} map to the same Mermaid id '{node_id}'")
        taken[node_id] = state
        ids[state] = node_id
    return ids


def to_mermaid(transducer: Transducer) -> str:
    """Render a transducer as a Mermaid state diagram."""
    records = walk(transducer)
    states = sorted_states(records)
    ids = _mermaid_ids(states)

    lines: List[str] = ["stateDiagram-v2"]
    for state in states:
        name = symbol_name(state)
        if ids[state] != name:
            lines.append(f'    state "{mermaid_escape(name)}" as {ids[state]}')
    if transducer.initial is not INVALID and transducer.initial in ids:
        lines.append(f"    [*] --> {ids[transducer.initial]}")
    for record in records:
        lines.append(f"    {ids[record.source]} --> {ids[record.target]} : {mermaid_escape(symbol_name(record.input))}")

    return "\n".join(lines) + "\n"
