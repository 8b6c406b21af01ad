"""Loading behaviour definitions from YAML documents and folders."""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml

from .condition import Condition
from .expression import Expression
from .log import LogCategory, LogLevel, log_message
from .nodes import Node
from .parser import ParseContext, ParseError, parse_node

_EXTENSIONS = frozenset({".audio", ".yaml"})


@dataclass
class BehaviorDef:
    """A named sound behaviour: when it matches and what it plays."""

    name: str = ""
    id: int = 0
    bus_index: int = 0
    match_tags: list[str] = field(default_factory=list)
    match_conditions: list[Condition] = field(default_factory=list)
    root_volume: float = 1.0
    parameters: dict[str, Expression] = field(default_factory=dict)
    on_start: Optional[Node] = None
    on_active: Optional[Node] = None
    on_end: Optional[Node] = None


def _log(message: str, level: LogLevel) -> None:
    log_message(message, LogCategory.BEHAVIOR_LOADER, level)


def _scalar_text(value: Any, what: str) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple)):
        raise ParseError(f"{what} must be a scalar")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _parse_definition(document: Any, context: ParseContext) -> BehaviorDef:
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise ParseError("behavior definition must be a map")

    raw_id = document.get("id")
    name = "" if raw_id is None or isinstance(raw_id, (Mapping, list)) else _scalar_text(raw_id, "id")
    definition = BehaviorDef(name=name, bus_index=_as_int(document.get("bus"), 0))

    if "matchTags" in document:
        tags = document["matchTags"]
        if not isinstance(tags, list):
            _log(f"warning: matchTags for {name} is not a sequence", LogLevel.WARNING)
        else:
            definition.match_tags = [_scalar_text(t, "match tag") for t in tags]

    if "matchConditions" in document:
        conditions = document["matchConditions"]
        if not isinstance(conditions, list):
            _log(f"warning: matchConditions for {name} is not a sequence", LogLevel.WARNING)
        else:
            definition.match_conditions = [
                Condition(_scalar_text(c, "match condition")) for c in conditions
            ]

    if "parameters" in document:
        parameters = document["parameters"]
        if not isinstance(parameters, Mapping):
            _log(f"warning: parameters block for {name} is not a map", LogLevel.WARNING)
        else:
            for key, value in parameters.items():
                key_text = _scalar_text(key, "parameter name")
                definition.parameters[key_text] = Expression(
                    _scalar_text(value, f"parameter {key_text}")
                )
                _log(f" --> {name} has parameter: {key_text}", LogLevel.DEBUG)

    if "onStart" in document:
        definition.on_start = parse_node(document["onStart"], context)
    if document.get("onActive") is not None:
        definition.on_active = parse_node(document["onActive"], context)
    if "onEnd" in document:
        definition.on_end = parse_node(document["onEnd"], context)

    for graph in (definition.on_start, definition.on_active, definition.on_end):
        if graph is not None:
            graph.describe()
    return definition


def parse_behaviors(documents: Iterable[Any]) -> list[BehaviorDef]:
    """Build behaviour definitions from loaded YAML maps, resolving references.

    Raises ParseError when a definition or one of its graphs is malformed.
    """
    context = ParseContext()
    definitions = [_parse_definition(doc, context) for doc in documents]

    for ref, target_name in context.unresolved_refs:
        target = context.definitions.get(target_name)
        if target is not None:
            ref.resolve(target)
        else:
            _log(f"Unresolved reference '{target_name}'", LogLevel.ERROR)
    context.unresolved_refs.clear()

    for definition in definitions:
        definition.id = random.randrange(2**31)

    _log(f"{len(definitions)} behaviors loaded. ", LogLevel.DEBUG)
    return definitions


def load_behaviors_from_folder(folder_path: Union[str, Path]) -> list[BehaviorDef]:
    """Load every ``.audio`` and ``.yaml`` file in a folder.

    A missing folder or a non-directory gives an empty list; files that fail
    to read or parse as YAML are logged and skipped.
    """
    folder = Path(folder_path)
    if not folder.exists():
        _log(f"folder not found: {folder_path}", LogLevel.WARNING)
        return []
    if not folder.is_dir():
        _log(f"not a directory: {folder_path}", LogLevel.WARNING)
        return []

    documents: list[Any] = []
    for entry in sorted(folder.iterdir()):
        if not entry.is_file() or entry.suffix not in _EXTENSIONS:
            continue
        try:
            with entry.open(encoding="utf-8") as handle:
                root = yaml.safe_load(handle)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            _log(f"YAML parse error in {entry}: {exc}", LogLevel.ERROR)
            continue
        shape = f"sequence of {len(root)}" if isinstance(root, list) else "single map"
        _log(f"loading file {entry.name} -> {shape}", LogLevel.DEBUG)
        if isinstance(root, list):
            documents.extend(root)
        else:
            documents.append(root)

    return parse_behaviors(documents)