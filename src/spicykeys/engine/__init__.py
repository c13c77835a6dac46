"""Sequence tracking, scope filtering and the match engine."""

from .match_engine import MatchEngine
from .scope import Element, ScopeFilter, belongs_to, is_editable
from .timeouts import PendingTimeout, SequenceTimer
from .tracker import SequenceTracker

__all__ = [
    "MatchEngine",
    "Element",
    "ScopeFilter",
    "belongs_to",
    "is_editable",
    "PendingTimeout",
    "SequenceTimer",
    "SequenceTracker",
]
