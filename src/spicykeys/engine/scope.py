"""Decide whether a matched binding may invoke its callback.

Hosts describe their element tree with any object exposing ``parent`` (and
optionally ``host`` for shadow roots), ``tag_name`` and
``is_content_editable``. :class:`Element` is a ready-made implementation for
hosts without a DOM of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from spicykeys.keymaps.models import KeyEvent

EDITABLE_TAGS = frozenset({"INPUT", "SELECT", "TEXTAREA"})


@dataclass(eq=False)
class Element:
    """Minimal element node; identity is object identity."""

    tag_name: str = "DIV"
    parent: Optional[Any] = None
    is_content_editable: bool = False
    host: Optional[Any] = None
    name: str = ""
    children: list["Element"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.tag_name = self.tag_name.upper()
        if isinstance(self.parent, Element):
            self.parent.children.append(self)

    def append(self, child: "Element") -> "Element":
        child.parent = self
        self.children.append(child)
        return child


def _next_node(node: Any) -> Any:
    parent = getattr(node, "parent", None)
    if parent is None:
        # shadow roots link to their host instead of a parent
        parent = getattr(node, "host", None)
    return parent


def belongs_to(node: Any, ancestor: Any) -> bool:
    """Return ``True`` if ``node`` is ``ancestor`` or one of its descendants."""

    current = node
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        if current is ancestor:
            return True
        seen.add(id(current))
        current = _next_node(current)
    return False


def is_editable(node: Any) -> bool:
    """Form fields, or any node inside a content-editable region."""

    tag = str(getattr(node, "tag_name", "") or "").upper()
    if tag in EDITABLE_TAGS:
        return True
    current = node
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        if getattr(current, "is_content_editable", False):
            return True
        seen.add(id(current))
        current = _next_node(current)
    return False


def originating_node(event: KeyEvent) -> Any:
    """The innermost target, looking through open shadow-tree re-targeting."""

    if event.composed_path:
        initial = event.composed_path[0]
        if initial is not None and initial is not event.target:
            return initial
    return event.target


class ScopeFilter:
    """Callback gate for one engine root."""

    def __init__(self, root: Any = None) -> None:
        self.root = root

    def allows(self, event: KeyEvent) -> bool:
        if self.root is None:
            return False

        target = event.target if event.target is not None else self.root
        origin = originating_node(event)
        if origin is None:
            origin = target

        if not (belongs_to(target, self.root) or belongs_to(origin, self.root)):
            return False

        return not is_editable(origin)


__all__ = [
    "EDITABLE_TAGS",
    "Element",
    "ScopeFilter",
    "belongs_to",
    "is_editable",
    "originating_node",
]
