"""Keyboard combination and sequence bindings for event-driven hosts."""

from .config import EngineConfig
from .engine import Element, MatchEngine
from .errors import (
    CombinationSyntaxError,
    SequencesUnsupportedError,
    SpicyKeysError,
    UnknownActionError,
)
from .keymaps import EventKind, KeyEvent

__all__ = [
    "EngineConfig",
    "Element",
    "MatchEngine",
    "EventKind",
    "KeyEvent",
    "SpicyKeysError",
    "CombinationSyntaxError",
    "SequencesUnsupportedError",
    "UnknownActionError",
]

__version__ = "0.1.0"
