"""Comparison conditions such as ``speed > 5`` against value maps."""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass

from .values import ValueMap

_PATTERN = re.compile(r"(\w+)\s*([<>=!]+)\s*([\d\.]+)", re.ASCII)
_LEADING_NUMBER = re.compile(r"\d+\.?\d*|\.\d+", re.ASCII)

_OPERATORS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}


def _leading_float(text: str) -> float:
    m = _LEADING_NUMBER.match(text)
    if not m:
        raise ValueError(f"no number in {text!r}")
    return float(m.group(0))


@dataclass(frozen=True)
class Condition:
    """``name OP number``; the name is looked up in entity then global values."""

    text: str = ""

    def evaluate(self, entity_values: ValueMap, global_values: ValueMap) -> bool:
        """True if the comparison holds; malformed text or unknown operators give False.

        A missing value compares as 0. Raises ValueError when the number part
        holds no digits at all.
        """
        m = _PATTERN.fullmatch(self.text)
        if not m:
            return False
        key, op, number = m.groups()
        threshold = _leading_float(number)
        actual = entity_values.get(key, float)
        if actual is None:
            actual = global_values.get(key, float, 0.0)
        compare = _OPERATORS.get(op)
        if compare is None:
            return False
        return bool(compare(actual, threshold))