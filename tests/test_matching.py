from dataclasses import dataclass, field

import pytest

from declsound.condition import Condition
from declsound.matching import (
    join_tags,
    match_score,
    matching_behaviors_for_tag,
    pattern_match,
    tag_matches,
    tag_specificity,
)
from declsound.tags import TagMap
from declsound.values import ValueMap


@dataclass
class _Def:
    match_tags: list = field(default_factory=list)
    match_conditions: list = field(default_factory=list)


@pytest.mark.parametrize(
    "pattern, value, expected",
    [
        ("grass", "grass", True),
        ("grass", "gravel", False),
        ("gr*", "gravel", True),
        ("*el", "gravel", True),
        ("g*l", "gravel", True),
        ("gr*x", "gravel", False),
        ("ab*ba", "aba", False),
        ("*", "", True),
    ],
)
def test_pattern_match(pattern, value, expected):
    assert pattern_match(pattern, value) is expected


def test_tag_specificity_weights():
    assert tag_specificity("a") == 10
    assert tag_specificity("*") == 5
    assert tag_specificity("") == 0
    assert tag_specificity("a.*") > tag_specificity("*.*")
    assert tag_specificity("a.b") > tag_specificity("a.*")


@pytest.mark.parametrize(
    "pattern, actual, expected",
    [
        ("player.walk", "player.walk", True),
        ("player.*", "player.walk", True),
        ("*.walk", "npc.walk", True),
        ("player.*", "player", False),
        ("player", "player.walk", False),
        ("player.run", "player.walk", False),
    ],
)
def test_tag_matches(pattern, actual, expected):
    assert tag_matches(pattern, actual) is expected


def test_match_score_with_tags():
    tags = TagMap()
    tags.add_tag("player.walk")
    score = match_score(_Def(["player.walk"]), tags, TagMap(), ValueMap(), ValueMap())
    assert score == 30


def test_match_score_uses_global_tags():
    glob = TagMap()
    glob.add_tag("weather.rain")
    score = match_score(_Def(["weather.*"]), TagMap(), glob, ValueMap(), ValueMap())
    assert score > 0


def test_match_score_missing_tag():
    assert match_score(_Def(["x"]), TagMap(), TagMap(), ValueMap(), ValueMap()) == -1


def test_match_score_conditions():
    definition = _Def([], [Condition("speed > 1")])
    assert match_score(definition, TagMap(), TagMap(), ValueMap({"speed": 2.0}), ValueMap()) == 0
    assert match_score(definition, TagMap(), TagMap(), ValueMap({"speed": 0.0}), ValueMap()) == -1


def test_matching_behaviors_for_tag_order():
    exact = {"hit": ["a", "b"]}
    wildcards = [("hi", "c"), ("no", "d")]
    assert matching_behaviors_for_tag("hit", exact, wildcards) == ["a", "b", "c"]
    assert matching_behaviors_for_tag("nope", exact, wildcards) == ["d"]


def test_join_tags():
    assert join_tags(["a", "b"]) == "[a, b]"
    assert join_tags([]) == "[]"