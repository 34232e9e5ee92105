"""View actions, the fixed key-to-action table, and key-binding help text."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .ui_theme import CMP_HELPBAR_KEY, CMP_HELPBAR_TEXT
from .window import LineBuilder

ACTION_PREV_LINE = "prev-line"
ACTION_NEXT_LINE = "next-line"
ACTION_SCROLL_LEFT = "scroll-left"
ACTION_SCROLL_RIGHT = "scroll-right"
ACTION_FIRST_LINE = "first-line"
ACTION_LAST_LINE = "last-line"
ACTION_SELECT = "select"
ACTION_NEXT_VIEW = "next-view"
ACTION_QUIT = "quit"
ACTION_SHRINK_REF_PANE = "shrink-ref-pane"
ACTION_GROW_REF_PANE = "grow-ref-pane"

VIEW_REF = "ref"
VIEW_COMMIT = "commit"


@dataclass(frozen=True)
class KeyActionBinding:
    """Mapping from one or more key tokens to a single action id."""

    combos: tuple[str, ...]
    action: str
    label: str


class KeyActionRegistry:
    """Key-dispatch table resolving decoded key tokens to action ids."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        """Initialize empty registry with optional token normalizer."""
        self._normalize = normalize if normalize is not None else self._identity
        self._actions: dict[str, str] = {}
        self._labels: dict[str, str] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyActionBinding) -> KeyActionRegistry:
        """Register one binding, overwriting existing actions for same combos."""
        for combo in binding.combos:
            self._actions[self._normalize(combo)] = binding.action
        self._labels.setdefault(binding.action, binding.label)
        return self

    def register_bindings(self, *bindings: KeyActionBinding) -> KeyActionRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def action_for(self, key: str) -> str | None:
        """Return the action bound to ``key`` or ``None`` when unbound."""
        return self._actions.get(self._normalize(key))

    def label_for(self, action: str) -> str | None:
        """Return the key label shown in help text for ``action``."""
        return self._labels.get(action)


DEFAULT_KEY_BINDINGS: tuple[KeyActionBinding, ...] = (
    KeyActionBinding(("UP", "k"), ACTION_PREV_LINE, "k/Up"),
    KeyActionBinding(("DOWN", "j"), ACTION_NEXT_LINE, "j/Down"),
    KeyActionBinding(("LEFT", "h"), ACTION_SCROLL_LEFT, "h/Left"),
    KeyActionBinding(("RIGHT", "l"), ACTION_SCROLL_RIGHT, "l/Right"),
    KeyActionBinding(("g",), ACTION_FIRST_LINE, "g"),
    KeyActionBinding(("G",), ACTION_LAST_LINE, "G"),
    KeyActionBinding(("ENTER",), ACTION_SELECT, "Enter"),
    KeyActionBinding(("TAB",), ACTION_NEXT_VIEW, "Tab"),
    KeyActionBinding(("q", "\x03"), ACTION_QUIT, "q"),
    KeyActionBinding(("<",), ACTION_SHRINK_REF_PANE, "<"),
    KeyActionBinding((">",), ACTION_GROW_REF_PANE, ">"),
)


def default_key_registry() -> KeyActionRegistry:
    return KeyActionRegistry().register_bindings(*DEFAULT_KEY_BINDINGS)


@dataclass(frozen=True)
class ActionMessage:
    action: str
    message: str


def render_key_binding_help(
    line_builder: LineBuilder,
    registry: KeyActionRegistry,
    messages: list[ActionMessage],
) -> None:
    """Append ``<key> <message>`` pairs for each bound action to the help bar."""
    for action_message in messages:
        label = registry.label_for(action_message.action)
        if label is None:
            continue
        line_builder.append(CMP_HELPBAR_KEY, f" {label}")
        line_builder.append(CMP_HELPBAR_TEXT, f" {action_message.message} ")


__all__ = [
    "ACTION_PREV_LINE",
    "ACTION_NEXT_LINE",
    "ACTION_SCROLL_LEFT",
    "ACTION_SCROLL_RIGHT",
    "ACTION_FIRST_LINE",
    "ACTION_LAST_LINE",
    "ACTION_SELECT",
    "ACTION_NEXT_VIEW",
    "ACTION_QUIT",
    "ACTION_SHRINK_REF_PANE",
    "ACTION_GROW_REF_PANE",
    "VIEW_REF",
    "VIEW_COMMIT",
    "KeyActionBinding",
    "KeyActionRegistry",
    "DEFAULT_KEY_BINDINGS",
    "default_key_registry",
    "ActionMessage",
    "render_key_binding_help",
]
