"""Dataclasses describing raw key events, parsed combinations and bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional


class EventKind(str, Enum):
    """Which keyboard event a binding listens for."""

    KEYDOWN = "keydown"
    KEYUP = "keyup"
    KEYPRESS = "keypress"

    def __str__(self) -> str:
        return self.value


MODIFIERS: frozenset[str] = frozenset({"shift", "alt", "ctrl", "meta"})


def is_modifier(key: str) -> bool:
    return key in MODIFIERS


def normalize_modifiers(modifiers: Iterable[str]) -> frozenset[str]:
    values = frozenset(m.strip().lower() for m in modifiers if m.strip())
    unknown = values - MODIFIERS
    if unknown:
        raise ValueError(f"Unknown modifiers: {sorted(unknown)}")
    return values


@dataclass(slots=True)
class KeyEvent:
    """One raw keyboard event as delivered by the host.

    ``which`` mirrors the browser field of the same name; hosts that only
    populate ``key_code`` get it as a fallback. ``target`` is the node the
    event was dispatched on and ``composed_path`` the full propagation path,
    whose first entry is the original target inside an open shadow tree.
    """

    kind: EventKind
    key_code: int = 0
    which: Optional[int] = None
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    target: Any = None
    composed_path: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        self.kind = EventKind(self.kind)

    @property
    def code(self) -> int:
        if self.which is None:
            return self.key_code
        return self.which


Callback = Callable[[KeyEvent, str], object]


@dataclass(frozen=True, slots=True)
class KeyInfo:
    """Result of parsing a single combination like ``"command+shift+l"``."""

    key: str
    modifiers: frozenset[str]
    kind: EventKind


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one canonical key event with a callback.

    Sequence steps carry the sequence name (its normalized text), their
    1-based ``level`` and, for every step but the last, the event kind the
    following step listens for.
    """

    callback: Callback
    key: str
    modifiers: frozenset[str]
    kind: EventKind
    combination: str
    sequence: Optional[str] = None
    level: Optional[int] = None
    next_kind: Optional[EventKind] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        if not callable(self.callback):
            raise TypeError("callback must be callable")
        if (self.sequence is None) != (self.level is None):
            raise ValueError("sequence and level must be given together")
        if self.level is not None and self.level < 1:
            raise ValueError("level is 1-based")

    @property
    def is_sequence_step(self) -> bool:
        return self.sequence is not None

    @property
    def is_final_step(self) -> bool:
        return self.is_sequence_step and self.next_kind is None


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named callback registered through an action map."""

    id: str
    handler: Callback
    combinations: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")


__all__ = [
    "EventKind",
    "MODIFIERS",
    "is_modifier",
    "normalize_modifiers",
    "KeyEvent",
    "Callback",
    "KeyInfo",
    "Binding",
    "ActionRef",
]
