"""Per-engine progress of in-flight key sequences."""

from __future__ import annotations

from typing import AbstractSet, Dict, Optional

from spicykeys.keymaps.models import EventKind


class SequenceTracker:
    """Plain state container; the engine decides when to mutate it.

    ``ignore_next_keyup`` holds the key whose trailing keyup should be
    swallowed after a sequence completed on keydown/keypress.
    ``ignore_next_keypress`` is set after a sequence step fired on keydown so
    the browser's follow-up keypress for the same press does not reset
    progress.
    """

    def __init__(self) -> None:
        self._levels: Dict[str, int] = {}
        self.next_expected: Optional[EventKind] = None
        self.ignore_next_keyup: Optional[str] = None
        self.ignore_next_keypress = False

    def level(self, name: str) -> int:
        return self._levels.get(name, 0)

    def advance(self, name: str) -> int:
        self._levels[name] = self._levels.get(name, 0) + 1
        return self._levels[name]

    def reset_all_except(self, keep: AbstractSet[str] = frozenset()) -> None:
        for name in self._levels:
            if name not in keep:
                self._levels[name] = 0
        if not keep or not self.active():
            self.next_expected = None

    def mark_expectation(self, kind: EventKind) -> None:
        self.next_expected = kind

    def is_expected(self, kind: EventKind) -> bool:
        return self.next_expected is not None and self.next_expected is kind

    def active(self) -> Dict[str, int]:
        return {name: level for name, level in self._levels.items() if level > 0}

    def forget(self, name: str) -> None:
        self._levels.pop(name, None)

    def clear(self) -> None:
        self._levels.clear()
        self.next_expected = None
        self.ignore_next_keyup = None
        self.ignore_next_keypress = False


__all__ = ["SequenceTracker"]
