"""Typed key/value store for entity and global parameters."""

from __future__ import annotations

from typing import Any, Optional, TypeVar, Union

from .quaternion import Quaternion
from .vec3 import Vec3

Value = Union[float, str, Vec3, bool, Quaternion]

_T = TypeVar("_T")

_ALLOWED = (bool, float, str, Vec3, Quaternion)


class ValueMap:
    """Maps names to values of type float, str, Vec3, bool or Quaternion."""

    def __init__(self, values: Optional[dict[str, Value]] = None) -> None:
        self._values: dict[str, Value] = {}
        for key, value in (values or {}).items():
            self.set_value(key, value)

    def set_value(self, key: str, value: Value) -> None:
        """Store a value, replacing any earlier one; integers are stored as floats."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if not isinstance(value, _ALLOWED):
            raise TypeError(f"unsupported value type for {key!r}: {type(value).__name__}")
        self._values[key] = value

    def has_value(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, kind: type[_T], default: Any = None) -> Any:
        """Return the value under ``key`` if it holds a ``kind``, else ``default``."""
        value = self._values.get(key)
        if value is None:
            return default
        if kind is float and isinstance(value, bool):
            return default
        if isinstance(value, kind):
            return value
        return default

    def clear_value(self, key: str) -> None:
        self._values.pop(key, None)

    def all_values(self) -> dict[str, Value]:
        """A copy of every stored value."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)