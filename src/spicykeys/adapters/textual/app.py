"""Executable Textual app that shows bindings firing."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use spicykeys.adapters.textual.app"
    ) from exc

from spicykeys.config import EngineConfig
from spicykeys.engine import Element, MatchEngine
from spicykeys.keymaps.models import KeyEvent

from .controller import TextualKeyAdapter

DEMO_BINDINGS = {
    "ctrl+k": "command palette",
    "?": "help",
    "g i": "go to inbox",
    "g t": "go to trash",
    "up up down down left right left right b a enter": "konami",
}


class SpicyKeysApp(App[None]):
    """Minimal Textual UI that reports every fired binding."""

    CSS = """
	#events {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._root = Element(tag_name="BODY", name="app")
        self._plain_target = Element(tag_name="DIV", parent=self._root)
        self._editable_target = Element(tag_name="INPUT", parent=self._root)
        self.engine = MatchEngine(self._root, config=config)
        self.adapter = TextualKeyAdapter(
            self.engine, target=self._focused_element, log=self._log_line
        )
        self._lines: list[str] = []
        self._events_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            yield Input(placeholder="typing here never triggers bindings")
            self._events_widget = Static("", id="events")
            yield self._events_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        for combination, label in DEMO_BINDINGS.items():
            self.engine.bind(combination, self._reporter(label))
        self._update_status("bindings: " + ", ".join(DEMO_BINDINGS))
        self.set_interval(0.1, self.adapter.process_timeouts)

    def on_key(self, event: events.Key) -> None:
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)

    def _focused_element(self) -> Element:
        if isinstance(self.focused, (Input, TextArea)):
            return self._editable_target
        return self._plain_target

    def _reporter(self, label: str) -> Any:
        def report(_event: KeyEvent, combination: str) -> None:
            self._append(f"{combination!r} -> {label}")

        return report

    def _append(self, line: str) -> None:
        self._lines = (self._lines + [line])[-200:]
        if self._events_widget:
            self._events_widget.update("\n".join(self._lines))

    def _log_line(self, line: str) -> None:
        if self.engine.config.debug:
            self._append(line)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the spicykeys Textual demo.")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=_env_int("SPICYKEYS_SEQUENCE_TIMEOUT_MS", 1000),
        help="Sequence debounce window in milliseconds (default: 1000)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace normalized events and fired handlers",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    overrides: dict[str, object] = {"sequence_timeout_ms": args.timeout_ms}
    if args.debug:
        overrides["debug"] = True
    config = EngineConfig.from_env(**overrides)
    SpicyKeysApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
