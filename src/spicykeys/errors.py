"""Exceptions raised by the binding and registration surface."""

from __future__ import annotations


class SpicyKeysError(Exception):
    """Base class for every error raised by this package."""


class CombinationSyntaxError(SpicyKeysError, ValueError):
    """Raised when a combination string has no usable key token."""

    def __init__(self, combination: str, reason: str) -> None:
        super().__init__(f"Invalid key combination {combination!r}: {reason}")
        self.combination = combination
        self.reason = reason


class SequencesUnsupportedError(SpicyKeysError):
    """Raised when a multi-step sequence is bound on an engine without sequences."""

    def __init__(self, combination: str) -> None:
        super().__init__(
            f"Key sequence {combination!r} cannot be bound: sequences are disabled"
        )
        self.combination = combination


class UnknownActionError(SpicyKeysError, KeyError):
    """Raised when an action map references an action with no handler."""

    def __init__(self, action: str, combinations: tuple[str, ...]) -> None:
        message = (
            f"No handler found for action '{action}' "
            f"(referenced for key combinations {', '.join(combinations)})"
        )
        super().__init__(message)
        self.action = action
        self.combinations = combinations

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "SpicyKeysError",
    "CombinationSyntaxError",
    "SequencesUnsupportedError",
    "UnknownActionError",
]
