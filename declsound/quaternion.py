"""Quaternions for rotations, with scalar helpers and text formatting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from numbers import Real

from .vec3 import Vec3


def is_scalar_zero(x: float, eps: float = 0) -> bool:
    """True if |x| <= eps; with eps 0 this is an exact zero test."""
    return abs(x) <= eps


def is_nearly_equal(x: float, y: float, eps: float = 0) -> bool:
    """Compare two numbers relative to the smaller of them."""
    if x == 0:
        return is_scalar_zero(y, eps)
    if y == 0:
        return is_scalar_zero(x, eps)
    return is_scalar_zero((x - y) / min(x, y), eps)


@dataclass(frozen=True, eq=False)
class Quaternion:
    """Quaternion a + b*i + c*j + d*k."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0

    @property
    def norm_squared(self) -> float:
        return self.a * self.a + self.b * self.b + self.c * self.c + self.d * self.d

    def conjugate(self) -> Quaternion:
        return Quaternion(self.a, -self.b, -self.c, -self.d)

    def __mul__(self, other: Quaternion | float) -> Quaternion:
        if isinstance(other, Quaternion):
            a1, b1, c1, d1 = self.a, self.b, self.c, self.d
            a2, b2, c2, d2 = other.a, other.b, other.c, other.d
            return Quaternion(
                a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
                a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
                a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
                a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
            )
        if isinstance(other, Real):
            return Quaternion(self.a * other, self.b * other, self.c * other, self.d * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Quaternion:
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def rotate(self, vector: Vec3) -> Vec3:
        """Rotate a vector by this quaternion (q v q^-1)."""
        n = self.norm_squared
        if n == 0:
            raise ValueError("cannot rotate by a zero quaternion")
        r = self * Quaternion(0.0, vector.x, vector.y, vector.z) * self.conjugate()
        return Vec3(r.b / n, r.c / n, r.d / n)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Quaternion):
            return (self.a, self.b, self.c, self.d) == (other.a, other.b, other.c, other.d)
        if isinstance(other, Real):
            return self.a == other and self.b == 0 and self.c == 0 and self.d == 0
        return NotImplemented

    def __hash__(self) -> int:
        if self.b == 0 and self.c == 0 and self.d == 0:
            return hash(self.a)
        return hash((self.a, self.b, self.c, self.d))

    def __str__(self) -> str:
        return format_quaternion(self)


class DisplayStyle(IntEnum):
    """How quaternions are rendered as text."""

    NICE = 0
    COMPACT = 1


_UNITS = (
    (Quaternion(0), "0"),
    (Quaternion(1), "1"),
    (Quaternion(-1), "-1"),
    (Quaternion(0, 1), "i"),
    (Quaternion(0, -1), "-i"),
    (Quaternion(0, 0, 1), "j"),
    (Quaternion(0, 0, -1), "-j"),
    (Quaternion(0, 0, 0, 1), "k"),
    (Quaternion(0, 0, 0, -1), "-k"),
)


def _num(x: float) -> str:
    return f"{x:g}"


def format_quaternion(
    q: Quaternion, style: DisplayStyle = DisplayStyle.NICE, eps: float = 0
) -> str:
    """Render a quaternion; components within eps of zero are omitted in NICE style."""
    if DisplayStyle(style) is DisplayStyle.COMPACT:
        return "{" + ",".join(_num(v) for v in (q.a, q.b, q.c, q.d)) + "}"

    for unit, text in _UNITS:
        if q == unit:
            return text

    parts = []
    if not is_scalar_zero(q.a, eps):
        parts.append(_num(q.a))
    for value, suffix in ((q.b, "i"), (q.c, "j"), (q.d, "k")):
        if not is_scalar_zero(value, eps):
            sign = "" if value < 0 else "+"
            parts.append(f"{sign}{_num(value)}{suffix}")
    return "".join(parts)