import pytest

from declsound.expression import Expression
from declsound.values import ValueMap


@pytest.fixture
def params():
    return ValueMap({"x": 3.0, "speed": 0.25, "name": "grass"})


def test_variable_only(params):
    assert Expression("x").evaluate(params) == 3.0
    assert Expression("  speed ").evaluate(params) == 0.25


def test_missing_or_non_numeric_variable_is_zero(params):
    assert Expression("unknown").evaluate(params) == 0.0
    assert Expression("name").evaluate(params) == 0.0


def test_numeric_literal(params):
    assert Expression("2.5").evaluate(params) == 2.5
    assert Expression("-0.75").evaluate(params) == -0.75
    assert Expression(".5").evaluate(params) == 0.5


def test_var_op_number(params):
    assert Expression("x * 2").evaluate(params) == 6.0
    assert Expression("x+0").evaluate(params) == 3.0


def test_number_op_var(params):
    assert Expression("10 - x").evaluate(params) == 7.0


def test_division_round_trip(params):
    assert Expression("x / 4").evaluate(params) * 4 == pytest.approx(3.0)


def test_division_by_zero_is_zero(params):
    assert Expression("x / 0").evaluate(params) == 0.0
    assert Expression("1 / missing").evaluate(params) == 0.0


def test_missing_lhs_treated_as_zero(params):
    assert Expression("missing + 1.5").evaluate(params) == 1.5


def test_unparseable_is_zero(params):
    assert Expression("x * y * z").evaluate(params) == 0.0
    assert Expression("").evaluate(params) == 0.0


def test_default_volume_text():
    assert Expression("1.0").evaluate(ValueMap()) == 1.0