"""Turn raw keyboard events into canonical characters and modifier sets."""

from __future__ import annotations

from typing import Optional

from .models import EventKind, KeyEvent
from .tables import PUNCTUATION_KEYS, SPECIAL_KEYS


def character_from_event(event: KeyEvent) -> Optional[str]:
    """Return the canonical key for ``event`` or ``None`` if it carries no code."""

    # codes wrap to 16 bits like browser character codes
    code = event.code & 0xFFFF
    if not code:
        return None

    if event.kind is EventKind.KEYPRESS:
        character = chr(code)
        # caps lock without shift still matches lowercase bindings
        if not event.shift:
            character = character.lower()
        return character

    special = SPECIAL_KEYS.get(code)
    if special is not None:
        return special

    punctuation = PUNCTUATION_KEYS.get(code)
    if punctuation is not None:
        return punctuation

    # keydown/keyup report the uppercase code whether or not shift is held
    return chr(code).lower()


def event_modifiers(event: KeyEvent) -> frozenset[str]:
    modifiers = set()
    if event.shift:
        modifiers.add("shift")
    if event.alt:
        modifiers.add("alt")
    if event.ctrl:
        modifiers.add("ctrl")
    if event.meta:
        modifiers.add("meta")
    return frozenset(modifiers)


__all__ = ["character_from_event", "event_modifiers"]
