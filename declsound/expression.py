"""Evaluation of simple numeric parameter expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .log import LogCategory, LogLevel, log_message
from .values import ValueMap

_NUMBER = r"[0-9]*\.?[0-9]+"
_NAME = r"[A-Za-z_]\w*"

_VAR_ONLY = re.compile(rf"\s*({_NAME})\s*", re.ASCII)
_NUM_ONLY = re.compile(rf"\s*([+\-]?{_NUMBER})\s*", re.ASCII)
_VAR_OP_NUM = re.compile(rf"\s*({_NAME})\s*([+\-*/])\s*({_NUMBER})\s*", re.ASCII)
_NUM_OP_VAR = re.compile(rf"\s*({_NUMBER})\s*([+\-*/])\s*({_NAME})\s*", re.ASCII)


def _apply(lhs: float, op: str, rhs: float) -> float:
    if op == "+":
        return lhs + rhs
    if op == "-":
        return lhs - rhs
    if op == "*":
        return lhs * rhs
    return lhs / rhs if rhs != 0.0 else 0.0


@dataclass(frozen=True)
class Expression:
    """A number, a variable, or ``var OP number`` / ``number OP var``.

    Division by zero yields 0; anything unparseable evaluates to 0.
    """

    text: str = ""

    def evaluate(self, params: ValueMap) -> float:
        m = _VAR_ONLY.fullmatch(self.text)
        if m:
            return params.get(m.group(1), float, 0.0)

        m = _NUM_ONLY.fullmatch(self.text)
        if m:
            return float(m.group(1))

        m = _VAR_OP_NUM.fullmatch(self.text)
        if m:
            lhs = params.get(m.group(1), float)
            if lhs is None:
                log_message(
                    f"[EXPRESSION::EVAL] could not get value : {self.text}",
                    LogCategory.GENERAL,
                    LogLevel.WARNING,
                )
                lhs = 0.0
            return _apply(lhs, m.group(2), float(m.group(3)))

        m = _NUM_OP_VAR.fullmatch(self.text)
        if m:
            lhs = float(m.group(1))
            rhs = params.get(m.group(3), float, 0.0)
            log_message(
                f"[EXPRESSION::EVAL]: {lhs:f} / {rhs:f}",
                LogCategory.GENERAL,
                LogLevel.WARNING,
            )
            return _apply(lhs, m.group(2), rhs)

        log_message(
            f"[Expression] Failed to parse: {self.text}",
            LogCategory.GENERAL,
            LogLevel.WARNING,
        )
        return 0.0

    def __str__(self) -> str:
        return self.text