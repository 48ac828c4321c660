"""Application-wide context shared by every view.

Updated first for every message, before the active view sees it, so terminal
size and the tick counter stay current while any overlay is open.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from ..input.keymap import DEFAULT_KEYMAP, KeyMap
from ..messages import Effect, Msg, ResizeMsg, TickMsg, emit
from ..table.loading import load_records_effect
from ..table.records import DEFAULT_FIELDS, FieldSpec
from ..ui_theme import DEFAULT_THEME, UITheme


@dataclass(frozen=True)
class Application:
    """Immutable application context: configuration plus terminal bookkeeping."""

    fields: tuple[FieldSpec, ...] = DEFAULT_FIELDS
    theme: UITheme = DEFAULT_THEME
    keymap: KeyMap = DEFAULT_KEYMAP
    source_path: Path | None = None
    columns: int = 80
    lines: int = 24
    ticks: int = 0

    @property
    def field_names(self) -> tuple[str, ...]:
        """Configured field titles in suggestion order."""
        return tuple(spec.title for spec in self.fields)

    @property
    def cursor_visible(self) -> bool:
        """Blink phase for text cursors, driven by ticks."""
        return self.ticks % 2 == 0

    def update(self, msg: Msg) -> Application:
        if isinstance(msg, ResizeMsg):
            return replace(self, columns=msg.columns, lines=msg.lines)
        if isinstance(msg, TickMsg):
            return replace(self, ticks=self.ticks + 1)
        return self

    def refresh_effect(self) -> Effect:
        """Re-deliver the current terminal size so a restored view re-lays out."""
        return emit(ResizeMsg(self.columns, self.lines))

    def load_effect(self) -> Effect | None:
        if self.source_path is None:
            return None
        return load_records_effect(self.source_path)


__all__ = ["Application"]
