"""Short help strip rendering for key bindings."""

from __future__ import annotations

from collections.abc import Iterable

from ..input.keymap import KeyBinding
from ..ui_theme import UITheme

HELP_SEPARATOR = " • "


def render_short_help(bindings: Iterable[KeyBinding], theme: UITheme) -> str:
    """Render ``key desc`` pairs joined on one line."""
    parts = [
        f"{theme.help_key}{binding.help_key}{theme.reset} {theme.help_dim}{binding.help_desc}{theme.reset}"
        for binding in bindings
    ]
    return f"{theme.help_dim}{HELP_SEPARATOR}{theme.reset}".join(parts)


__all__ = ["HELP_SEPARATOR", "render_short_help"]
