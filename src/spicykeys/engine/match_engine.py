"""Key combination and sequence matching for one keyboard scope."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from spicykeys.config import EngineConfig
from spicykeys.errors import SequencesUnsupportedError, UnknownActionError
from spicykeys.keymaps.models import (
    ActionRef,
    Binding,
    Callback,
    EventKind,
    KeyEvent,
    is_modifier,
)
from spicykeys.keymaps.normalizer import character_from_event, event_modifiers
from spicykeys.keymaps.parser import parse_combination, split_sequence
from spicykeys.keymaps.registry import BindingTable
from spicykeys.keymaps.tables import is_known_key
from spicykeys.runtime import telemetry

from .scope import Element, ScopeFilter
from .timeouts import SequenceTimer
from .tracker import SequenceTracker


class MatchEngine:
    """Maps raw key events onto bound combinations and sequences.

    Each engine owns its binding table, sequence tracker and debounce timer;
    engines never share state. Callbacks run synchronously inside
    :meth:`handle_raw_event` and may dispatch further events, which nest.
    All tracker bookkeeping for an event is finished before the first
    callback runs, so a raising callback leaves progress consistent.
    """

    def __init__(
        self,
        root: Any = None,
        *,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EngineConfig()
        self.table = BindingTable(logger_name=self.config.logger_name)
        self.tracker = SequenceTracker()
        self.timer = SequenceTimer(
            self._expire_sequences,
            timeout_ms=self.config.sequence_timeout_ms,
            clock=clock,
        )
        self.scope = ScopeFilter()
        self._actions: Dict[str, ActionRef] = {}
        self.set_root(root if root is not None else Element(tag_name="BODY"))

    @property
    def root(self) -> Any:
        return self.scope.root

    def set_root(self, root: Any) -> None:
        """Attach to ``root``; pending sequences and timers are discarded."""

        self.timer.cancel()
        self.tracker.clear()
        self.scope.root = root
        self._debug("root.set", root=getattr(root, "tag_name", root))

    def bind(
        self,
        combination: str,
        callback: Callback,
        kind: Optional[EventKind] = None,
    ) -> tuple[Binding, ...]:
        """Bind a single combination or a space separated sequence."""

        kind = EventKind(kind) if kind is not None else None
        steps = split_sequence(combination)
        if len(steps) == 1:
            binding = self._make_binding(steps[0], callback, kind)
            self.table.insert(binding)
            return (binding,)

        if not self.config.sequences:
            raise SequencesUnsupportedError(combination)
        bindings = self._make_sequence(" ".join(steps), steps, callback, kind)
        return self.table.insert_many(bindings)

    def unbind(self, combination: str, callback: Optional[Callback] = None) -> int:
        name = " ".join(split_sequence(combination))
        removed = self.table.remove(name, callback)
        if any(binding.is_sequence_step for binding in removed):
            self.tracker.forget(name)
        return len(removed)

    def register_actions(
        self,
        combinations: Mapping[str, Sequence[str]],
        handlers: Mapping[str, Callback],
    ) -> None:
        """Bind every combination listed for an action to that action's handler."""

        refs = []
        for action, combos in combinations.items():
            handler = handlers.get(action)
            if handler is None:
                raise UnknownActionError(action, tuple(combos))
            refs.append(ActionRef(id=action, handler=handler, combinations=tuple(combos)))

        for ref in refs:
            for combination in ref.combinations:
                self.bind(combination, ref.handler)
            self._actions[ref.id] = ref

    def unregister_actions(
        self,
        combinations: Mapping[str, Sequence[str]],
        handlers: Mapping[str, Callback],
    ) -> None:
        for action, combos in combinations.items():
            handler = handlers.get(action)
            for combination in combos:
                self.unbind(combination, handler)
            self._actions.pop(action, None)

    def actions(self) -> tuple[ActionRef, ...]:
        return tuple(self._actions.values())

    def reset(self) -> None:
        """Drop every binding and all sequence progress; the root is kept."""

        self.table.clear()
        self.tracker.clear()
        self.timer.cancel()
        self._actions.clear()

    def pending_sequences(self) -> Dict[str, int]:
        return self.tracker.active()

    def process_timeouts(self) -> bool:
        return self.timer.process()

    def handle_raw_event(self, event: KeyEvent) -> None:
        self.timer.process()

        character = character_from_event(event)
        if character is None:
            return
        modifiers = event_modifiers(event)
        self._debug(
            "key.normalized",
            character=character,
            which=event.code,
            kind=event.kind,
            modifiers=modifiers,
        )

        if event.kind is EventKind.KEYUP and self.tracker.ignore_next_keyup == character:
            self.tracker.ignore_next_keyup = None
            return

        self.handle_key(character, modifiers, event)

    def handle_key(
        self, character: str, modifiers: frozenset[str], event: KeyEvent
    ) -> None:
        matches = self._matches(character, modifiers, event)
        max_level = max(
            (b.level or 0 for b in matches if b.is_sequence_step), default=0
        )
        sequence_hits = [
            b for b in matches if b.is_sequence_step and b.level == max_level
        ]
        if sequence_hits:
            fired = sequence_hits
        else:
            fired = [b for b in matches if not b.is_sequence_step]

        keep = {b.sequence for b in sequence_hits if b.sequence is not None}
        completed = self._advance(sequence_hits)

        ignore_this_keypress = (
            event.kind is EventKind.KEYPRESS and self.tracker.ignore_next_keypress
        )
        if (
            self.tracker.is_expected(event.kind)
            and not is_modifier(character)
            and not ignore_this_keypress
        ):
            self.tracker.reset_all_except(keep)
            if not self.tracker.active():
                self.timer.cancel()

        self.tracker.ignore_next_keypress = (
            bool(sequence_hits) and event.kind is EventKind.KEYDOWN
        )

        if completed:
            self.tracker.reset_all_except()
            self.timer.cancel()
            if event.kind is not EventKind.KEYUP:
                self.tracker.ignore_next_keyup = character

        for binding in fired:
            if binding.is_sequence_step and not binding.is_final_step:
                continue
            self._fire(binding, event)

    def _matches(
        self, character: str, modifiers: frozenset[str], event: KeyEvent
    ) -> list[Binding]:
        kind = event.kind
        # a modifier released on its own matches itself
        if kind is EventKind.KEYUP and is_modifier(character):
            modifiers = frozenset({character})

        loose_keypress = kind is EventKind.KEYPRESS and not event.meta and not event.ctrl
        matches = []
        for binding in self.table.lookup(character):
            if binding.kind is not kind:
                continue
            if binding.sequence is not None and binding.level is not None:
                if self.tracker.level(binding.sequence) != binding.level - 1:
                    continue
            if loose_keypress or binding.modifiers == modifiers:
                matches.append(binding)
        return matches

    def _advance(self, steps: Iterable[Binding]) -> bool:
        completed = False
        for step in steps:
            if step.sequence is None:
                continue
            if step.next_kind is None:
                completed = True
                continue
            self.tracker.mark_expectation(step.next_kind)
            self.tracker.advance(step.sequence)
            self.timer.arm()
        return completed

    def _expire_sequences(self) -> None:
        self._debug("sequence.timeout", pending=self.tracker.active())
        self.tracker.reset_all_except()

    def _fire(self, binding: Binding, event: KeyEvent) -> None:
        if not self.scope.allows(event):
            self._debug("handler.suppressed", combination=binding.combination)
            return
        self._debug("handler.fired", combination=binding.combination, kind=binding.kind)
        binding.callback(event, binding.combination)

    def _make_binding(
        self, combination: str, callback: Callback, kind: Optional[EventKind]
    ) -> Binding:
        info = parse_combination(combination, kind, apple=self.config.is_apple)
        self._warn_unreachable(combination, info.key)
        return Binding(
            callback=callback,
            key=info.key,
            modifiers=info.modifiers,
            kind=info.kind,
            combination=combination,
        )

    def _make_sequence(
        self,
        name: str,
        steps: Sequence[str],
        callback: Callback,
        kind: Optional[EventKind],
    ) -> list[Binding]:
        infos = [parse_combination(step, kind, apple=self.config.is_apple) for step in steps]
        bindings = []
        for index, info in enumerate(infos):
            self._warn_unreachable(steps[index], info.key)
            is_last = index + 1 == len(infos)
            bindings.append(
                Binding(
                    callback=callback,
                    key=info.key,
                    modifiers=info.modifiers,
                    kind=info.kind,
                    combination=name,
                    sequence=name,
                    level=index + 1,
                    next_kind=None if is_last else infos[index + 1].kind,
                )
            )
        return bindings

    def _warn_unreachable(self, combination: str, key: str) -> None:
        if is_known_key(key):
            return
        telemetry.record_event(
            "binding.unreachable",
            level="warning",
            data={"combination": combination, "key": key},
            logger_name=self.config.logger_name,
        )

    def _debug(self, name: str, **data: object) -> None:
        if not self.config.debug:
            return
        telemetry.record_event(
            name, level="debug", data=data, logger_name=self.config.logger_name
        )


__all__ = ["MatchEngine"]
