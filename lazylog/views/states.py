"""Loaded, filtering, filtered, and error views.

Views are immutable snapshots kept on a stack; the view below the top is the
one "back" returns to. ``update`` receives the views beneath it (``history``)
and returns the complete new stack together with the effects to run, so a
transition can push, pop, or replace without touching shared state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from loguru import logger

from ..input.keymap import KeyBinding, KeyMap
from ..messages import Effect, KeyMsg, Msg, RecordsLoadedMsg, quit_effect
from ..table.model import LogTable
from ..table.records import filter_records, find_field
from ..widgets.help import render_short_help
from ..widgets.pill_input import FilterInputState, commit, handle_key, new_filter_input, render_filter_input
from .application import Application

def is_filter_back_key(keymap: KeyMap, key: str) -> bool:
    """Back closes the filter, except ``q`` which is ordinary text there."""
    return keymap.back.matches(key) and key != "q"


def _status_line(app: Application, text: str, bindings: tuple[KeyBinding, ...]) -> str:
    theme = app.theme
    return f"{theme.status}{text}{theme.reset}\n{render_short_help(bindings, theme)}"


@dataclass(frozen=True)
class LoadedView:
    """All records of the log source."""

    table: LogTable

    def update(self, app: Application, history: tuple[View, ...], msg: Msg) -> Transition:
        keys = app.keymap
        if isinstance(msg, KeyMsg):
            if keys.back.matches(msg.key):
                return (*history, self), [quit_effect()]
            if keys.filter.matches(msg.key):
                logger.debug("opening filter over {} records", len(self.table.records))
                return (*history, self, FilteringView.open(app, self.table)), []
            if keys.reload.matches(msg.key):
                effect = app.load_effect()
                return (*history, self), [effect] if effect is not None else []
        table, effects = self.table.update(msg)
        return (*history, replace(self, table=table)), effects

    def render(self, app: Application) -> str:
        keys = app.keymap
        source = f" • {app.source_path}" if app.source_path is not None else ""
        status = f"{len(self.table.records)} records{source}"
        bindings = (keys.filter, keys.reload, KeyBinding(keys.back.keys, "q", "quit"))
        return f"{self.table.render(app.theme)}\n{_status_line(app, status, bindings)}"


@dataclass(frozen=True)
class FilteringView:
    """Filter input open over a snapshot of the loaded table."""

    table: LogTable
    input: FilterInputState

    @classmethod
    def open(cls, app: Application, table: LogTable) -> FilteringView:
        return cls(table=table, input=new_filter_input(app.field_names))

    def update(self, app: Application, history: tuple[View, ...], msg: Msg) -> Transition:
        if isinstance(msg, KeyMsg):
            if is_filter_back_key(app.keymap, msg.key):
                return self._close(app, history)
            if app.keymap.open.matches(msg.key):
                return self._commit(app, history)

        effects: list[Effect] = []
        table = self.table
        filter_input = self.input
        if not isinstance(msg, KeyMsg):
            # Typed keys belong to the input, never to table navigation.
            table, table_effects = self.table.update(msg)
            effects.extend(table_effects)
        else:
            filter_input = handle_key(self.input, msg.key)
        return (*history, replace(self, table=table, input=filter_input)), effects

    def _close(self, app: Application, history: tuple[View, ...]) -> Transition:
        logger.debug("filter closed")
        return history, [app.refresh_effect()]

    def _commit(self, app: Application, history: tuple[View, ...]) -> Transition:
        result = commit(self.input)
        if result.is_cancel:
            return self._close(app, history)

        loaded = history[-1]
        spec = find_field(app.fields, result.field)
        logger.debug("filter committed field={!r} term={!r}", result.field, result.term)
        filtered = FilteredView(
            table=loaded.table.filtered(spec, result.term),
            field=result.field,
            term=result.term,
        )
        return (*history, filtered), [app.refresh_effect()]

    def render(self, app: Application) -> str:
        rendered_input = render_filter_input(self.input, app.theme, cursor_visible=app.cursor_visible)
        return f"{self.table.render(app.theme)}\n{rendered_input}"


@dataclass(frozen=True)
class FilteredView:
    """Records of the loaded view that match one (field, term) pair."""

    table: LogTable
    field: str | None
    term: str

    def update(self, app: Application, history: tuple[View, ...], msg: Msg) -> Transition:
        keys = app.keymap
        if isinstance(msg, KeyMsg):
            if keys.back.matches(msg.key):
                logger.debug("filter cleared")
                return history, [app.refresh_effect()]
            if keys.filter.matches(msg.key):
                return (*history, FilteringView.open(app, history[-1].table)), []
        if isinstance(msg, RecordsLoadedMsg):
            *below, loaded = history
            stack, effects = loaded.update(app, tuple(below), msg)
            spec = find_field(app.fields, self.field)
            table = self.table.with_records(filter_records(msg.records, spec, self.term))
            return (*stack, replace(self, table=table)), effects
        table, effects = self.table.update(msg)
        return (*history, replace(self, table=table)), effects

    def describe(self) -> str:
        return f"{self.field}:{self.term}" if self.field else self.term

    def render(self, app: Application) -> str:
        keys = app.keymap
        status = f"filter {self.describe()} • {len(self.table.records)} records"
        bindings = (keys.filter, keys.back)
        return f"{self.table.render(app.theme)}\n{_status_line(app, status, bindings)}"


@dataclass(frozen=True)
class ErrorView:
    """Terminal error display; only quitting leaves it."""

    error: BaseException

    def update(self, app: Application, history: tuple[View, ...], msg: Msg) -> Transition:
        if isinstance(msg, KeyMsg) and (app.keymap.back.matches(msg.key) or app.keymap.quit.matches(msg.key)):
            return (*history, self), [quit_effect()]
        return (*history, self), []

    def render(self, app: Application) -> str:
        theme = app.theme
        body = str(self.error) or type(self.error).__name__
        return f"{theme.error_title}Error{theme.reset}\n\n{body}\n\n{render_short_help((KeyBinding(('ESC',), 'esc', 'quit'),), theme)}"


View = Union[LoadedView, FilteringView, FilteredView, ErrorView]
Transition = tuple[tuple[View, ...], list[Effect]]


__all__ = [
    "ErrorView",
    "FilteredView",
    "FilteringView",
    "LoadedView",
    "Transition",
    "View",
    "is_filter_back_key",
]
