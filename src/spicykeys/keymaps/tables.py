"""Fixed lookup tables for browser key codes and US keyboard layouts."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping


def _build_special_keys() -> Dict[int, str]:
    keys: Dict[int, str] = {
        8: "backspace",
        9: "tab",
        13: "enter",
        16: "shift",
        17: "ctrl",
        18: "alt",
        20: "capslock",
        27: "esc",
        32: "space",
        33: "pageup",
        34: "pagedown",
        35: "end",
        36: "home",
        37: "left",
        38: "up",
        39: "right",
        40: "down",
        45: "ins",
        46: "del",
        91: "meta",
        93: "meta",
        224: "meta",
    }
    for index in range(1, 20):
        keys[111 + index] = f"f{index}"
    # numpad digits report their own codes on keydown/keyup
    for digit in range(10):
        keys[96 + digit] = str(digit)
    return keys


# Keys that never produce a keypress; keydown/keyup only.
SPECIAL_KEYS: Mapping[int, str] = MappingProxyType(_build_special_keys())

# Punctuation whose keydown/keyup code differs from its character code.
PUNCTUATION_KEYS: Mapping[int, str] = MappingProxyType(
    {
        106: "*",
        107: "+",
        109: "-",
        110: ".",
        111: "/",
        186: ";",
        187: "=",
        188: ",",
        189: "-",
        190: ".",
        191: "/",
        192: "`",
        219: "[",
        220: "\\",
        221: "]",
        222: "'",
    }
)

# Shifted symbols on a US layout mapped back to the key that produces them.
SHIFT_MAP: Mapping[str, str] = MappingProxyType(
    {
        "~": "`",
        "!": "1",
        "@": "2",
        "#": "3",
        "$": "4",
        "%": "5",
        "^": "6",
        "&": "7",
        "*": "8",
        "(": "9",
        ")": "0",
        "_": "-",
        "+": "=",
        ":": ";",
        '"': "'",
        "<": ",",
        ">": ".",
        "?": "/",
        "|": "\\",
    }
)

ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "option": "alt",
        "command": "meta",
        "return": "enter",
        "escape": "esc",
        "plus": "+",
    }
)


def _build_reverse_map() -> Dict[str, int]:
    reverse: Dict[str, int] = {}
    for code, name in SPECIAL_KEYS.items():
        # numpad digits can be detected from their keypress character
        if 95 < code < 112:
            continue
        reverse.setdefault(name, code)
    return reverse


# Key names that default to keydown when bound without an explicit kind.
KEYDOWN_ONLY: Mapping[str, int] = MappingProxyType(_build_reverse_map())


def resolve_alias(token: str, *, apple: bool) -> str:
    if token == "mod":
        return "meta" if apple else "ctrl"
    return ALIASES.get(token, token)


def is_known_key(name: str) -> bool:
    """Return ``True`` when the normalizer can ever produce ``name``."""

    if len(name) == 1:
        return True
    return name in KEYDOWN_ONLY or name in SPECIAL_KEYS.values()


__all__ = [
    "SPECIAL_KEYS",
    "PUNCTUATION_KEYS",
    "SHIFT_MAP",
    "ALIASES",
    "KEYDOWN_ONLY",
    "resolve_alias",
    "is_known_key",
]
