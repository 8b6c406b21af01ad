import pytest

from declsound.condition import Condition
from declsound.values import ValueMap


def test_entity_value_comparison():
    entity = ValueMap({"speed": 10.0})
    assert Condition("speed > 5").evaluate(entity, ValueMap())
    assert not Condition("speed < 5").evaluate(entity, ValueMap())


@pytest.mark.parametrize(
    "text, expected",
    [
        ("v>=2", True),
        ("v<=2", True),
        ("v==2", True),
        ("v!=2", False),
        ("v>2", False),
        ("v<2", False),
    ],
)
def test_all_operators(text, expected):
    assert Condition(text).evaluate(ValueMap({"v": 2.0}), ValueMap()) is expected


def test_global_fallback():
    assert Condition("rain > 0.5").evaluate(ValueMap(), ValueMap({"rain": 0.9}))


def test_entity_takes_precedence():
    entity = ValueMap({"x": 1.0})
    glob = ValueMap({"x": 100.0})
    assert Condition("x < 10").evaluate(entity, glob)


def test_non_float_entity_value_falls_to_global():
    entity = ValueMap({"x": "text"})
    glob = ValueMap({"x": 5.0})
    assert Condition("x == 5").evaluate(entity, glob)


def test_missing_value_is_zero():
    assert Condition("missing == 0").evaluate(ValueMap(), ValueMap())


def test_unknown_operator_is_false():
    assert not Condition("x => 0").evaluate(ValueMap({"x": 1.0}), ValueMap())


def test_malformed_is_false():
    assert not Condition("x > abc").evaluate(ValueMap({"x": 1.0}), ValueMap())
    assert not Condition("").evaluate(ValueMap(), ValueMap())


def test_number_without_digits_raises():
    with pytest.raises(ValueError):
        Condition("x > .").evaluate(ValueMap(), ValueMap())