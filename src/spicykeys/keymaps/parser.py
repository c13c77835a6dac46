"""Parse combination strings such as ``"command+shift+l"`` or ``"g i"``."""

from __future__ import annotations

import re
from typing import Optional

from spicykeys.errors import CombinationSyntaxError

from .models import EventKind, KeyInfo, is_modifier
from .tables import KEYDOWN_ONLY, SHIFT_MAP, resolve_alias

_DOUBLE_PLUS = re.compile(r"\+{2}")
_WHITESPACE = re.compile(r"\s+")


def keys_from_string(combination: str) -> list[str]:
    """Split ``combination`` on ``+``; ``++`` spells the plus key itself."""

    if combination == "+":
        return ["+"]
    return _DOUBLE_PLUS.sub("+plus", combination).split("+")


def split_sequence(combination: str) -> list[str]:
    """Collapse whitespace runs and split a sequence into its step tokens."""

    normalized = normalize_combination(combination)
    if not normalized:
        raise CombinationSyntaxError(combination, "combination is empty")
    return normalized.split(" ")


def normalize_combination(combination: str) -> str:
    return _WHITESPACE.sub(" ", combination).strip()


def parse_combination(
    combination: str,
    kind: Optional[EventKind] = None,
    *,
    apple: bool = False,
) -> KeyInfo:
    """Resolve one combination into its key, modifier set and event kind.

    Shifted symbols are rewritten to their base key plus ``shift`` only when
    an explicit non-keypress kind is requested; keypress events already
    report the shifted character.
    """

    modifiers: set[str] = set()
    key = ""

    tokens = keys_from_string(combination)
    if not tokens[-1]:
        raise CombinationSyntaxError(combination, "combination ends without a key")

    for token in tokens:
        if not token:
            continue
        token = resolve_alias(token, apple=apple)

        if kind is not None and kind is not EventKind.KEYPRESS and token in SHIFT_MAP:
            token = SHIFT_MAP[token]
            modifiers.add("shift")

        if is_modifier(token):
            modifiers.add(token)

        key = token

    if kind is None:
        kind = EventKind.KEYDOWN if key in KEYDOWN_ONLY else EventKind.KEYPRESS

    # keypress does not report modifier state reliably
    if kind is EventKind.KEYPRESS and modifiers:
        kind = EventKind.KEYDOWN

    return KeyInfo(key=key, modifiers=frozenset(modifiers), kind=kind)


__all__ = [
    "keys_from_string",
    "split_sequence",
    "normalize_combination",
    "parse_combination",
]
