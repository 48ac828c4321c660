"""Log table: immutable record rows with a cursor and a scrolled viewport.

The table is the collaborator every view renders. It reacts to resize,
record-load, and navigation-key messages and knows how to derive a filtered
copy of itself for one (field, term) pair.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..ansi import fit_cell
from ..input.keymap import DEFAULT_KEYMAP, KeyMap
from ..messages import Effect, KeyMsg, Msg, RecordsLoadedMsg, ResizeMsg
from ..ui_theme import UITheme
from .records import FieldSpec, LogRecord, filter_records

# Header row above the records plus two footer rows for status or filter input.
TABLE_CHROME_ROWS = 3
MAX_COLUMN_WIDTH = 24
COLUMN_GAP = " "


def level_style(value: str, theme: UITheme) -> str:
    """Return the theme color for a log level value."""
    lowered = value.strip().lower()
    if lowered.startswith(("err", "fatal", "panic", "crit")):
        return theme.level_error
    if lowered.startswith("warn"):
        return theme.level_warn
    if lowered.startswith("info"):
        return theme.level_info
    if lowered.startswith(("debug", "trace")):
        return theme.level_debug
    return ""


@dataclass(frozen=True)
class LogTable:
    """Rows of log records and the viewport showing them."""

    fields: tuple[FieldSpec, ...]
    records: tuple[LogRecord, ...] = ()
    cursor: int = 0
    offset: int = 0
    width: int = 80
    height: int = 21
    keymap: KeyMap = DEFAULT_KEYMAP

    def update(self, msg: Msg) -> tuple[LogTable, list[Effect]]:
        """Apply one message; the table itself never schedules work."""
        if isinstance(msg, ResizeMsg):
            return self.resized(msg.columns, msg.lines), []
        if isinstance(msg, RecordsLoadedMsg):
            return self.with_records(msg.records), []
        if isinstance(msg, KeyMsg):
            return self.navigate(msg.key), []
        return self, []

    def resized(self, columns: int, lines: int) -> LogTable:
        resized = replace(self, width=max(1, columns), height=max(1, lines - TABLE_CHROME_ROWS))
        return resized._scrolled_to(resized.cursor)

    def with_records(self, records: tuple[LogRecord, ...]) -> LogTable:
        """Replace rows, keeping the cursor inside the new range."""
        return replace(self, records=tuple(records))._scrolled_to(self.cursor)

    def filtered(self, spec: FieldSpec | None, term: str) -> LogTable:
        """Return a copy restricted to rows matching ``term``, cursor at top."""
        return replace(self, records=filter_records(self.records, spec, term), cursor=0, offset=0)

    def navigate(self, key: str) -> LogTable:
        keys = self.keymap
        if keys.up.matches(key):
            return self._scrolled_to(self.cursor - 1)
        if keys.down.matches(key):
            return self._scrolled_to(self.cursor + 1)
        if keys.page_up.matches(key):
            return self._scrolled_to(self.cursor - self.height)
        if keys.page_down.matches(key):
            return self._scrolled_to(self.cursor + self.height)
        if keys.top.matches(key):
            return self._scrolled_to(0)
        if keys.bottom.matches(key):
            return self._scrolled_to(len(self.records) - 1)
        return self

    def _scrolled_to(self, cursor: int) -> LogTable:
        """Clamp ``cursor`` and move the viewport just enough to show it."""
        if not self.records:
            return replace(self, cursor=0, offset=0)
        cursor = max(0, min(cursor, len(self.records) - 1))
        offset = self.offset
        if cursor < offset:
            offset = cursor
        elif cursor >= offset + self.height:
            offset = cursor - self.height + 1
        offset = max(0, min(offset, max(0, len(self.records) - self.height)))
        return replace(self, cursor=cursor, offset=offset)

    @property
    def visible_records(self) -> tuple[LogRecord, ...]:
        return self.records[self.offset : self.offset + self.height]

    def column_widths(self) -> list[int]:
        """Size leading columns to their content; the last column takes the rest."""
        if not self.fields:
            return []
        visible = self.visible_records
        widths: list[int] = []
        for spec in self.fields[:-1]:
            longest = max((len(record.value(spec)) for record in visible), default=0)
            widths.append(min(MAX_COLUMN_WIDTH, max(len(spec.title), longest)))
        used = sum(widths) + len(COLUMN_GAP) * len(widths)
        widths.append(max(1, self.width - used))
        return widths

    def render(self, theme: UITheme) -> str:
        """Render header and exactly ``height`` record rows."""
        widths = self.column_widths()
        header = COLUMN_GAP.join(fit_cell(spec.title, width) for spec, width in zip(self.fields, widths))
        lines = [f"{theme.table_header}{header}{theme.reset}"]
        for idx, record in enumerate(self.visible_records, start=self.offset):
            selected = idx == self.cursor
            cells: list[str] = []
            for spec, width in zip(self.fields, widths):
                cell = fit_cell(record.value(spec), width)
                style = level_style(cell, theme) if spec.title == "level" and not selected else ""
                cells.append(f"{style}{cell}{theme.reset}" if style else cell)
            row = COLUMN_GAP.join(cells)
            lines.append(f"{theme.table_selected}{row}{theme.reset}" if selected else row)
        lines.extend("" for _ in range(self.height - len(self.visible_records)))
        return "\n".join(lines)


__all__ = ["LogTable", "MAX_COLUMN_WIDTH", "TABLE_CHROME_ROWS", "level_style"]
