"""Turning loaded YAML data into sound node graphs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .expression import Expression
from .log import LogCategory, LogLevel, log_message
from .nodes import (
    BlendNode,
    DelayNode,
    LoopNode,
    Node,
    ParallelNode,
    RandomNode,
    ReferenceNode,
    SelectNode,
    SequenceNode,
    SoundNode,
)

_CORE_KEYS = frozenset(
    {"sound", "delay", "random", "sequence", "blend", "select", "loop", "parallel"}
)


class ParseError(ValueError):
    """Raised when YAML data does not describe a valid node."""


@dataclass
class ParseContext:
    """Named node definitions and references waiting to be resolved."""

    definitions: dict[str, Node] = field(default_factory=dict)
    unresolved_refs: list[tuple[ReferenceNode, str]] = field(default_factory=list)


@dataclass
class Modifiers:
    """Modifiers found beside a node's contents."""

    volume: Optional[str] = None
    pitch: Optional[str] = None
    radius: Optional[float] = None
    loop: bool = False


def _is_sequence(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def _is_scalar(data: Any) -> bool:
    return data is not None and not isinstance(data, Mapping) and not _is_sequence(data)


def _scalar_text(data: Any) -> str:
    if isinstance(data, bool):
        return "true" if data else "false"
    return str(data)


def _require_scalar(data: Any, message: str) -> str:
    if not _is_scalar(data):
        raise ParseError(message)
    return _scalar_text(data)


def _to_float(data: Any, message: str) -> float:
    if not _is_scalar(data) or isinstance(data, bool):
        raise ParseError(message)
    try:
        return float(data)
    except (TypeError, ValueError) as exc:
        raise ParseError(message) from exc


def extract_core_key(mapping: Mapping[Any, Any]) -> str:
    """The first key naming a node type."""
    for key in mapping:
        if isinstance(key, str) and key in _CORE_KEYS:
            return key
    log_message(f"UNKNOWN NODETYPE: {dict(mapping)!r}", LogCategory.PARSER, LogLevel.ERROR)
    raise ParseError("Unknown node type in map")


def extract_modifiers(mapping: Mapping[Any, Any]) -> Modifiers:
    """Read volume, pitch and the loop flag from a node's map."""
    mods = Modifiers()
    if "volume" in mapping:
        mods.volume = _require_scalar(mapping["volume"], "volume must be a scalar")
    if "pitch" in mapping:
        mods.pitch = _require_scalar(mapping["pitch"], "pitch must be a scalar")
    if "loop" in mapping:
        mods.loop = True
    return mods


def extract_children(mapping: Mapping[Any, Any]) -> Any:
    """Find the child list of a container map, or None."""
    if len(mapping) == 1:
        (only,) = mapping.values()
        if isinstance(only, Mapping):
            return extract_children(only)

    for key in ("nodes", "sounds", "blends", "cases"):
        if key in mapping:
            return mapping[key]

    for value in mapping.values():
        if _is_sequence(value):
            return value
    return None


def normalize_loops(root: Optional[Node]) -> Optional[Node]:
    """Collapse directly nested loops at the top of a graph into one."""
    while isinstance(root, LoopNode) and isinstance(root.child(), LoopNode):
        root = root.child()
    return root


def _parse_children(container: Node, children: Any, context: ParseContext) -> Node:
    if _is_sequence(children):
        for child in children:
            container.add_child(parse_node(child, context))
    return container


def _parse_blend(sub: Any, context: ParseContext) -> BlendNode:
    if not isinstance(sub, Mapping):
        raise ParseError("blend node not a map")
    node = BlendNode()
    node.parameter = _require_scalar(sub.get("parameter"), "blend missing parameter")
    cases = sub.get("blends")
    if _is_sequence(cases):
        for item in cases:
            if not isinstance(item, Mapping):
                raise ParseError("blend case not a map")
            at = _to_float(item.get("at"), "blend case needs a numeric 'at'")
            if "sound" not in item:
                raise ParseError("blend case missing sound")
            node.add_case(at, parse_node(item["sound"], context))
    return node


def _parse_select(sub: Any, context: ParseContext) -> SelectNode:
    if not isinstance(sub, Mapping):
        raise ParseError("select node not a map")
    node = SelectNode()
    node.parameter = _require_scalar(sub.get("parameter"), "select missing parameter")
    cases = sub.get("cases")
    if _is_sequence(cases):
        for item in cases:
            if not isinstance(item, Mapping):
                raise ParseError("select case not a map")
            pattern = _require_scalar(item.get("at"), "select case needs an 'at' pattern")
            if "sound" not in item:
                raise ParseError("select case missing sound")
            node.add_case(pattern, parse_node(item["sound"], context))
    return node


def parse_node(data: Any, context: ParseContext) -> Node:
    """Build a node graph from loaded YAML data.

    A scalar is a sound file, or a reference when it names a known
    definition; a list is a sequence; a map is keyed by its node type.
    """
    mods = Modifiers()

    if _is_scalar(data):
        text = _scalar_text(data)
        if text in context.definitions:
            ref = ReferenceNode(text)
            context.unresolved_refs.append((ref, text))
            node: Node = ref
        else:
            node = SoundNode(text)
    elif _is_sequence(data):
        node = _parse_children(SequenceNode(), data, context)
    elif isinstance(data, Mapping):
        key = extract_core_key(data)
        sub = data[key]
        if isinstance(sub, Mapping):
            mods = extract_modifiers(sub)
            children = extract_children(sub)
        else:
            children = sub

        if key in ("sound", "delay"):
            text = _require_scalar(sub, f"{key} node missing scalar value")
            node = SoundNode(text) if key == "sound" else DelayNode(text)
        elif key == "random":
            node = _parse_children(RandomNode(), children, context)
        elif key == "sequence":
            node = _parse_children(SequenceNode(), children, context)
        elif key == "parallel":
            node = _parse_children(ParallelNode(), children, context)
        elif key == "blend":
            node = _parse_blend(sub, context)
        elif key == "select":
            node = _parse_select(sub, context)
        else:
            node = LoopNode(parse_node(sub, context))
    else:
        raise ParseError("Invalid YAML node type")

    if mods.volume is not None:
        node.volume = Expression(mods.volume)
    if mods.pitch is not None:
        node.pitch = Expression(mods.pitch)
    if mods.loop:
        node = LoopNode(node)

    result = normalize_loops(node)
    assert result is not None
    return result