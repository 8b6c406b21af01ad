"""Tag pattern matching and behaviour match scoring."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, TypeVar

from .tags import TagMap
from .values import ValueMap

_B = TypeVar("_B")


def _segments(tag: str) -> list[str]:
    """Dot-separated segments; a trailing empty segment is not counted."""
    parts = tag.split(".")
    if parts[-1] == "":
        parts.pop()
    return parts


def pattern_match(pattern: str, value: str) -> bool:
    """Exact match, or a match around the first ``*`` in the pattern."""
    star = pattern.find("*")
    if star < 0:
        return pattern == value
    prefix, suffix = pattern[:star], pattern[star + 1 :]
    if len(value) < len(prefix) + len(suffix):
        return False
    return value.startswith(prefix) and value.endswith(suffix)


def tag_specificity(tag: str) -> int:
    """10 per literal segment, 5 per ``*`` segment."""
    return sum(5 if segment == "*" else 10 for segment in _segments(tag))


def tag_matches(pattern: str, actual: str) -> bool:
    """Segment-wise match where ``*`` matches any single segment."""
    pattern_parts = _segments(pattern)
    actual_parts = _segments(actual)
    if len(pattern_parts) != len(actual_parts):
        return False
    return all(p == "*" or p == a for p, a in zip(pattern_parts, actual_parts))


def match_score(
    definition: Any,
    tags: TagMap,
    global_tags: TagMap,
    values: ValueMap,
    global_values: ValueMap,
) -> int:
    """Score how well a behaviour definition matches; -1 if it does not match.

    ``definition`` needs ``match_tags`` (patterns) and ``match_conditions``
    (objects with ``evaluate(values, global_values)``).
    """
    all_tags = tags.all_tags() + global_tags.all_tags()
    score = 0
    for required in definition.match_tags:
        if not any(tag_matches(required, actual) for actual in all_tags):
            return -1
        score += 10 + tag_specificity(required)

    for condition in definition.match_conditions:
        if not condition.evaluate(values, global_values):
            return -1
    return score


def matching_behaviors_for_tag(
    tag: str,
    exact_match_map: Mapping[str, Sequence[_B]],
    wildcard_matchers: Iterable[tuple[str, _B]],
) -> list[_B]:
    """Behaviours registered for ``tag`` exactly, then those whose prefix it starts with."""
    found = list(exact_match_map.get(tag, ()))
    found.extend(behavior for prefix, behavior in wildcard_matchers if tag.startswith(prefix))
    return found


def join_tags(tags: Iterable[str]) -> str:
    return "[" + ", ".join(tags) + "]"