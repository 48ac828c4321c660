"""Key bindings interpreted by the viewer and its help strips."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens bound to a single action, plus help text."""

    keys: tuple[str, ...]
    help_key: str
    help_desc: str

    def matches(self, key: str) -> bool:
        return key in self.keys


def _binding(keys: tuple[str, ...], help_key: str, help_desc: str):
    return field(default_factory=lambda: KeyBinding(keys, help_key, help_desc))


@dataclass(frozen=True)
class KeyMap:
    """Application key map. Tokens follow :func:`lazylog.input.read_key`."""

    back: KeyBinding = _binding(("ESC", "q"), "esc", "back")
    open: KeyBinding = _binding(("ENTER",), "enter", "apply")
    filter: KeyBinding = _binding(("f", "/"), "f", "filter")
    reload: KeyBinding = _binding(("r",), "r", "reload")
    quit: KeyBinding = _binding(("CTRL_C",), "ctrl+c", "quit")
    up: KeyBinding = _binding(("UP", "k"), "↑/k", "up")
    down: KeyBinding = _binding(("DOWN", "j"), "↓/j", "down")
    page_up: KeyBinding = _binding(("PGUP", "b"), "pgup", "page up")
    page_down: KeyBinding = _binding(("PGDN", " "), "pgdn", "page down")
    top: KeyBinding = _binding(("HOME", "g"), "g", "top")
    bottom: KeyBinding = _binding(("END", "G"), "G", "bottom")


DEFAULT_KEYMAP = KeyMap()


__all__ = ["DEFAULT_KEYMAP", "KeyBinding", "KeyMap"]
