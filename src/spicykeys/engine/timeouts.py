"""Debounce window that expires partially typed sequences."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int
    generation: int


class SequenceTimer:
    """Single cancellable deadline, re-armed after every sequence step.

    The timer never runs on its own thread; ``process`` fires the callback
    when the host (or the engine, on the next key event) polls after the
    deadline has passed.
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        *,
        timeout_ms: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self._on_expire = on_expire
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._pending: Optional[PendingTimeout] = None
        self._counter = 0

    @property
    def pending(self) -> Optional[PendingTimeout]:
        return self._pending

    def arm(self) -> PendingTimeout:
        self._counter += 1
        self._pending = PendingTimeout(
            deadline=self._clock() + self._timeout_ms / 1000.0,
            timeout_ms=self._timeout_ms,
            generation=self._counter,
        )
        return self._pending

    def cancel(self) -> None:
        self._pending = None

    def process(self) -> bool:
        """Fire the expiry callback if the deadline passed; return whether it did."""

        timer = self._pending
        if timer is None or timer.deadline > self._clock():
            return False
        self._pending = None
        self._on_expire()
        return True


__all__ = ["PendingTimeout", "SequenceTimer"]
