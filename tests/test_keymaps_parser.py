from __future__ import annotations

import pytest

from spicykeys.errors import CombinationSyntaxError
from spicykeys.keymaps import (
    EventKind,
    keys_from_string,
    normalize_combination,
    parse_combination,
    split_sequence,
)


def test_keys_from_string_splits_on_plus() -> None:
    assert keys_from_string("command+shift+l") == ["command", "shift", "l"]


def test_keys_from_string_plus_special_cases() -> None:
    assert keys_from_string("+") == ["+"]
    assert keys_from_string("alt++") == ["alt", "plus"]
    assert keys_from_string("alt+shift++") == ["alt", "shift", "plus"]


def test_plain_character_defaults_to_keypress() -> None:
    info = parse_combination("a")

    assert info.key == "a"
    assert info.modifiers == frozenset()
    assert info.kind is EventKind.KEYPRESS


def test_named_key_defaults_to_keydown() -> None:
    assert parse_combination("enter").kind is EventKind.KEYDOWN
    assert parse_combination("left").kind is EventKind.KEYDOWN
    assert parse_combination("f5").kind is EventKind.KEYDOWN


def test_numpad_digits_still_default_to_keypress() -> None:
    assert parse_combination("5").kind is EventKind.KEYPRESS


def test_modifiers_force_keydown() -> None:
    info = parse_combination("command+shift+p")

    assert info.key == "p"
    assert info.modifiers == frozenset({"meta", "shift"})
    assert info.kind is EventKind.KEYDOWN


def test_explicit_keypress_with_modifier_becomes_keydown() -> None:
    assert parse_combination("ctrl+a", EventKind.KEYPRESS).kind is EventKind.KEYDOWN


def test_explicit_keyup_is_kept() -> None:
    assert parse_combination("a", EventKind.KEYUP).kind is EventKind.KEYUP


@pytest.mark.parametrize(
    ("text", "key"),
    [
        ("option", "alt"),
        ("command", "meta"),
        ("return", "enter"),
        ("escape", "esc"),
        ("plus", "+"),
    ],
)
def test_aliases_resolve_before_matching(text: str, key: str) -> None:
    assert parse_combination(text).key == key


def test_modifier_alias_is_its_own_modifier() -> None:
    info = parse_combination("option")

    assert info.modifiers == frozenset({"alt"})
    assert info.kind is EventKind.KEYDOWN


def test_mod_alias_depends_on_platform() -> None:
    assert parse_combination("mod+s", apple=True).modifiers == frozenset({"meta"})
    assert parse_combination("mod+s", apple=False).modifiers == frozenset({"ctrl"})


def test_plus_key_combinations() -> None:
    assert parse_combination("+").key == "+"
    info = parse_combination("alt++")
    assert info.key == "+"
    assert info.modifiers == frozenset({"alt"})


def test_shift_map_applies_for_explicit_non_keypress_kinds() -> None:
    info = parse_combination("!", EventKind.KEYDOWN)

    assert info.key == "1"
    assert info.modifiers == frozenset({"shift"})


def test_shift_map_skipped_without_kind_or_for_keypress() -> None:
    assert parse_combination("!").key == "!"
    assert parse_combination("?", EventKind.KEYPRESS).key == "?"


def test_last_non_modifier_token_wins() -> None:
    info = parse_combination("a+ctrl+b")

    assert info.key == "b"
    assert info.modifiers == frozenset({"ctrl"})


@pytest.mark.parametrize("text", ["", "ctrl+", "a+"])
def test_combination_without_key_is_rejected(text: str) -> None:
    with pytest.raises(CombinationSyntaxError):
        parse_combination(text)


def test_split_sequence_collapses_whitespace() -> None:
    assert split_sequence("c  a   t") == ["c", "a", "t"]
    assert split_sequence(" g\ti ") == ["g", "i"]
    assert normalize_combination("a   ctrl+b") == "a ctrl+b"


def test_split_sequence_rejects_blank_text() -> None:
    with pytest.raises(CombinationSyntaxError):
        split_sequence("   ")
