"""Persistent and transient tag sets."""

from __future__ import annotations

from .log import LogCategory, LogLevel, log_message


class TagMap:
    """Holds tags, some of which are transient and cleared in bulk."""

    def __init__(self) -> None:
        self._persistent: dict[str, None] = {}
        self._transient: dict[str, None] = {}

    def add_tag(self, tag: str, transient: bool = False) -> None:
        (self._transient if transient else self._persistent)[tag] = None

    def remove_tag(self, tag: str) -> None:
        self._persistent.pop(tag, None)
        self._transient.pop(tag, None)

    def has_tag(self, tag: str) -> bool:
        return tag in self._persistent or tag in self._transient

    def all_tags(self) -> list[str]:
        """Persistent tags followed by transient ones."""
        return [*self._persistent, *self._transient]

    def clear_transient(self) -> None:
        if self._transient:
            log_message(
                f"clearing {len(self._transient)} transient tags",
                LogCategory.ENTITY,
                LogLevel.INFO,
            )
        self._transient.clear()

    def transient_tags(self) -> list[str]:
        return list(self._transient)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.has_tag(tag)