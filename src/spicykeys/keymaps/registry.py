"""Binding table keyed by canonical character."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from spicykeys.runtime.telemetry import span

from .models import Binding, Callback


@dataclass(slots=True)
class TableStats:
    """Lightweight snapshot describing table state."""

    binding_count: int
    sequence_count: int
    keys: tuple[str, ...]


class BindingTable:
    """Owns every binding for one engine, bucketed by canonical key.

    Within a bucket sequence steps always come first so they are evaluated
    before plain combinations on the same key.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._buckets: Dict[str, list[Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def lookup(self, key: str) -> tuple[Binding, ...]:
        return tuple(self._buckets.get(key, ()))

    def insert(self, binding: Binding) -> Binding:
        with span(
            "keymaps::insert",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"key": binding.key, "combination": binding.combination},
        ) as handle:
            replaced = self._insert(binding)
            if replaced:
                handle.add_metadata("replaced", len(replaced))
            self._touch()
            return binding

    def insert_many(self, bindings: Iterable[Binding]) -> tuple[Binding, ...]:
        """Insert several bindings as one revision (used for sequences)."""

        batch = tuple(bindings)
        with span(
            "keymaps::insert_many",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"count": len(batch)},
        ):
            for binding in batch:
                self._insert(binding)
            if batch:
                self._touch()
            return batch

    def remove(self, combination: str, callback: Optional[Callback] = None) -> list[Binding]:
        """Remove the plain combo or every step of the sequence named ``combination``.

        When ``callback`` is given only bindings carrying that exact callback
        are removed.
        """

        with span(
            "keymaps::remove",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"combination": combination},
        ) as handle:
            removed: list[Binding] = []
            for key in list(self._buckets):
                kept: list[Binding] = []
                for binding in self._buckets[key]:
                    if _names(binding, combination) and (
                        callback is None or binding.callback is callback
                    ):
                        removed.append(binding)
                    else:
                        kept.append(binding)
                if kept:
                    self._buckets[key] = kept
                else:
                    del self._buckets[key]
            handle.add_metadata("removed", len(removed))
            if removed:
                self._touch()
            return removed

    def clear(self) -> None:
        self._buckets.clear()
        self._touch()

    def iter_bindings(self, key: Optional[str] = None) -> Iterator[Binding]:
        if key is not None:
            yield from self._buckets.get(key, ())
            return
        for bucket in self._buckets.values():
            yield from bucket

    def sequences(self) -> tuple[str, ...]:
        names = {b.sequence for b in self.iter_bindings() if b.sequence is not None}
        return tuple(sorted(names))

    def stats(self) -> TableStats:
        return TableStats(
            binding_count=sum(len(bucket) for bucket in self._buckets.values()),
            sequence_count=len(self.sequences()),
            keys=tuple(sorted(self._buckets)),
        )

    def _insert(self, binding: Binding) -> list[Binding]:
        bucket = self._buckets.setdefault(binding.key, [])
        replaced = [existing for existing in bucket if _overrides(binding, existing)]
        for existing in replaced:
            bucket.remove(existing)
        if binding.is_sequence_step:
            bucket.insert(0, binding)
        else:
            bucket.append(binding)
        return replaced

    def _touch(self) -> None:
        self._revision += 1


def _overrides(new: Binding, existing: Binding) -> bool:
    if new.is_sequence_step:
        return existing.sequence == new.sequence and existing.level == new.level
    return (
        not existing.is_sequence_step
        and existing.combination == new.combination
        and existing.modifiers == new.modifiers
        and existing.kind is new.kind
    )


def _names(binding: Binding, combination: str) -> bool:
    if binding.is_sequence_step:
        return binding.sequence == combination
    return binding.combination == combination


__all__ = ["BindingTable", "TableStats"]
