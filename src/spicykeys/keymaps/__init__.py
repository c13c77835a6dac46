"""Key normalization, combination parsing and the binding table."""

from .models import (
    MODIFIERS,
    ActionRef,
    Binding,
    Callback,
    EventKind,
    KeyEvent,
    KeyInfo,
    is_modifier,
)
from .normalizer import character_from_event, event_modifiers
from .parser import keys_from_string, normalize_combination, parse_combination, split_sequence
from .registry import BindingTable, TableStats

__all__ = [
    "MODIFIERS",
    "ActionRef",
    "Binding",
    "Callback",
    "EventKind",
    "KeyEvent",
    "KeyInfo",
    "is_modifier",
    "character_from_event",
    "event_modifiers",
    "keys_from_string",
    "normalize_combination",
    "parse_combination",
    "split_sequence",
    "BindingTable",
    "TableStats",
]
