"""Simulated physical key presses for driving a MatchEngine in tests."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from spicykeys.engine import MatchEngine
from spicykeys.keymaps import EventKind, KeyEvent

MODIFIER_CODES = {"shift": 16, "ctrl": 17, "alt": 18, "meta": 91}

NAMED_CODES = {
    "backspace": 8,
    "tab": 9,
    "enter": 13,
    "shift": 16,
    "ctrl": 17,
    "alt": 18,
    "esc": 27,
    "space": 32,
    "pageup": 33,
    "pagedown": 34,
    "end": 35,
    "home": 36,
    "left": 37,
    "up": 38,
    "right": 39,
    "down": 40,
    "del": 46,
    "meta": 91,
    "f5": 116,
}

PUNCTUATION_CODES = {
    "*": 106,
    "+": 107,
    ";": 186,
    "=": 187,
    ",": 188,
    "-": 189,
    ".": 190,
    "/": 191,
    "`": 192,
    "[": 219,
    "\\": 220,
    "]": 221,
    "'": 222,
}


class FakeClock:
    """Monotonic clock advanced by hand, in milliseconds."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


def key_code_for(key: str) -> int:
    if key in NAMED_CODES:
        return NAMED_CODES[key]
    if key in PUNCTUATION_CODES:
        return PUNCTUATION_CODES[key]
    if len(key) == 1:
        return ord(key.upper())
    raise KeyError(f"no key code for {key!r}")


def make_event(
    kind: EventKind,
    code: int,
    held: Iterable[str] = (),
    *,
    target: Any = None,
    composed_path: tuple[Any, ...] = (),
) -> KeyEvent:
    flags = {name: name in set(held) for name in ("shift", "alt", "ctrl", "meta")}
    return KeyEvent(
        kind,
        key_code=code,
        which=code,
        target=target,
        composed_path=composed_path,
        **flags,
    )


def press(
    key: str,
    *,
    modifiers: Iterable[str] = (),
    char_code: Optional[int] = None,
    key_code: Optional[int] = None,
    target: Any = None,
    composed_path: tuple[Any, ...] = (),
) -> list[KeyEvent]:
    """Build the events a browser emits for one press of ``key``.

    Modifiers go down first, then keydown/keypress/keyup for the key, then
    the modifiers are released in reverse order.
    """

    if char_code is None:
        char_code = ord(key) if len(key) == 1 else 0
    if key_code is None:
        key_code = key_code_for(key)

    def event(kind: EventKind, code: int, held: list[str]) -> KeyEvent:
        return make_event(
            kind, code, held, target=target, composed_path=composed_path
        )

    held: list[str] = []
    events = []
    for modifier in modifiers:
        held.append(modifier)
        events.append(event(EventKind.KEYDOWN, MODIFIER_CODES[modifier], held))

    if key_code not in MODIFIER_CODES.values():
        events.append(event(EventKind.KEYDOWN, key_code, held))
        events.append(event(EventKind.KEYPRESS, char_code, held))
    events.append(event(EventKind.KEYUP, key_code, held))

    for modifier in reversed(list(held)):
        held.remove(modifier)
        events.append(event(EventKind.KEYUP, MODIFIER_CODES[modifier], held))
    return events


def simulate(engine: MatchEngine, key: str, **kwargs: Any) -> None:
    for event in press(key, **kwargs):
        engine.handle_raw_event(event)


def type_keys(engine: MatchEngine, *keys: str, **kwargs: Any) -> None:
    for key in keys:
        simulate(engine, key, **kwargs)
