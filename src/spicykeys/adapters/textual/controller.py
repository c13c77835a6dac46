"""Bridge Textual key events into the browser-style events the engine expects."""

from __future__ import annotations

from typing import Any, Callable, Optional

from spicykeys.engine import MatchEngine
from spicykeys.keymaps.models import EventKind, KeyEvent, normalize_modifiers
from spicykeys.keymaps.tables import PUNCTUATION_KEYS, SHIFT_MAP


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _build_named_codes() -> dict[str, int]:
    codes = {
        "backspace": 8,
        "tab": 9,
        "enter": 13,
        "escape": 27,
        "space": 32,
        "pageup": 33,
        "pagedown": 34,
        "end": 35,
        "home": 36,
        "left": 37,
        "up": 38,
        "right": 39,
        "down": 40,
        "insert": 45,
        "delete": 46,
    }
    for index in range(1, 20):
        codes[f"f{index}"] = 111 + index
    return codes


NAMED_CODES = _build_named_codes()

# main keyboard punctuation codes; numpad duplicates live below 186
_PUNCTUATION_CODES = {char: code for code, char in PUNCTUATION_KEYS.items() if code >= 186}

_TEXTUAL_MODIFIERS = {"ctrl": "ctrl", "shift": "shift", "alt": "alt", "meta": "meta", "super": "meta"}


def translate_key(
    key: str,
    character: Optional[str] = None,
    *,
    target: Any = None,
) -> tuple[KeyEvent, ...]:
    """Expand one Textual key into a keydown/keypress/keyup triple.

    Returns an empty tuple when the key has no browser key code equivalent.
    """

    parts = key.split("+") if key != "+" else ["+"]
    base = parts[-1]
    modifiers = set(
        normalize_modifiers(_TEXTUAL_MODIFIERS[p] for p in parts[:-1] if p in _TEXTUAL_MODIFIERS)
    )

    text = character if character and len(character) == 1 and character.isprintable() else None
    if text is None and len(base) == 1:
        text = base

    code = NAMED_CODES.get(base)
    if code is None:
        if text is None:
            return ()
        code = _key_code(text)
        if code is None:
            return ()
        if text in SHIFT_MAP or text.isupper():
            modifiers.add("shift")

    flags = {name: name in modifiers for name in ("shift", "alt", "ctrl", "meta")}
    events = [KeyEvent(EventKind.KEYDOWN, key_code=code, target=target, **flags)]
    if text is not None and not (flags["ctrl"] or flags["meta"]):
        events.append(
            KeyEvent(EventKind.KEYPRESS, key_code=ord(text), target=target, **flags)
        )
    events.append(KeyEvent(EventKind.KEYUP, key_code=code, target=target, **flags))
    return tuple(events)


def _key_code(text: str) -> Optional[int]:
    base = SHIFT_MAP.get(text, text)
    if base.isalnum() and base.isascii():
        return ord(base.upper())
    return _PUNCTUATION_CODES.get(base)


class TextualKeyAdapter:
    """Feeds Textual key presses into a :class:`MatchEngine`."""

    def __init__(
        self,
        engine: MatchEngine,
        *,
        target: Optional[Callable[[], Any]] = None,
        log: Callable[[str], None] = _noop,
    ) -> None:
        self.engine = engine
        self._target = target
        self._log = log

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> tuple[KeyEvent, ...]:
        target = self._target() if self._target else None
        events = translate_key(key, character, target=target)
        self._log(f"key -> {key!r} events={len(events)}")
        for event in events:
            self.engine.handle_raw_event(event)
        pending = self.engine.pending_sequences()
        if pending:
            self._log(f"pending <- {pending!r}")
        return events

    def process_timeouts(self) -> bool:
        expired = self.engine.process_timeouts()
        if expired:
            self._log("timeout -> sequences reset")
        return expired


__all__ = ["NAMED_CODES", "TextualKeyAdapter", "translate_key"]
