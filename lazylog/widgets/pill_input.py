"""Two-phase filter input: pick a field by autocomplete, then type a term.

The widget starts in field selection, where the edit buffer is a field-name
query and suggestions are the configured field names that start with it.
Tab accepts the highlighted suggestion and switches to value entry, where
the chosen field is shown as a pill in front of the buffer. Backspace on an
empty value buffer undoes that step and puts the field name back into the
buffer.

All operations are pure: every key produces a new :class:`FilterInputState`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from ..input.keymap import KeyBinding
from ..ui_theme import UITheme
from .help import render_short_help
from .line_edit import LineBuffer, edit_line

COMPLETE_KEY = "TAB"
BACKSPACE_KEY = "BACKSPACE"
NEXT_SUGGESTION_KEYS = frozenset({"DOWN", "CTRL_N"})
PREV_SUGGESTION_KEYS = frozenset({"UP", "CTRL_P"})

PROMPT = "> "
FIELD_PLACEHOLDER = "Field name or search term..."
VALUE_PLACEHOLDER = "Search term..."

INPUT_HELP_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("TAB",), "tab", "complete"),
    KeyBinding(("DOWN", "CTRL_N"), "↓/ctrl+n", "next"),
    KeyBinding(("UP", "CTRL_P"), "↑/ctrl+p", "prev"),
    KeyBinding(("ESC",), "esc", "back"),
)


class Phase(Enum):
    """Meaning of the edit buffer."""

    FIELD_SELECT = "field_select"
    VALUE_ENTRY = "value_entry"


@dataclass(frozen=True)
class FilterCommit:
    """Finalized filter input: optional field plus free-text term."""

    field: str | None
    term: str

    @property
    def is_cancel(self) -> bool:
        """An empty term cancels the filter, whether or not a field was chosen."""
        return self.term == ""


@dataclass(frozen=True)
class FilterInputState:
    """Immutable filter input state.

    ``selected_field`` is set exactly when ``phase`` is value entry, and
    ``active_suggestions`` is empty in value entry.
    """

    line: LineBuffer
    phase: Phase
    selected_field: str | None
    suggestion_source: tuple[str, ...]
    active_suggestions: tuple[str, ...]
    highlighted: int = 0

    def __post_init__(self) -> None:
        has_field = bool(self.selected_field)
        if has_field != (self.phase is Phase.VALUE_ENTRY):
            raise ValueError(f"selected field {self.selected_field!r} is inconsistent with phase {self.phase}")
        if self.phase is Phase.VALUE_ENTRY and self.active_suggestions:
            raise ValueError("value entry cannot carry suggestions")
        if self.active_suggestions and not 0 <= self.highlighted < len(self.active_suggestions):
            raise ValueError(f"highlighted index {self.highlighted} out of range")

    @property
    def buffer(self) -> str:
        return self.line.text

    @property
    def current_suggestion(self) -> str | None:
        """Return the suggestion Tab would accept, if any."""
        if not self.active_suggestions:
            return None
        return self.active_suggestions[self.highlighted]


def matching_suggestions(source: Sequence[str], prefix: str) -> tuple[str, ...]:
    """Return entries of ``source`` starting with ``prefix``, in source order."""
    return tuple(name for name in source if name.startswith(prefix))


def new_filter_input(suggestions: Sequence[str]) -> FilterInputState:
    """Create a field-selection state offering ``suggestions`` in order."""
    source = tuple(suggestions)
    if not all(source):
        raise ValueError(f"suggestions must be non-empty: {source!r}")
    if len(set(source)) != len(source):
        raise ValueError(f"suggestions must be distinct: {source!r}")
    return FilterInputState(
        line=LineBuffer(),
        phase=Phase.FIELD_SELECT,
        selected_field=None,
        suggestion_source=source,
        active_suggestions=source,
    )


def _select_field(state: FilterInputState) -> FilterInputState:
    return replace(
        state,
        line=LineBuffer(),
        phase=Phase.VALUE_ENTRY,
        selected_field=state.current_suggestion,
        active_suggestions=(),
        highlighted=0,
    )


def _reopen_field_select(state: FilterInputState) -> FilterInputState:
    field = state.selected_field or ""
    source = state.suggestion_source
    # Keep the restored field highlighted.
    highlighted = source.index(field) if field in source else 0
    return replace(
        state,
        line=LineBuffer.at_end(field),
        phase=Phase.FIELD_SELECT,
        selected_field=None,
        active_suggestions=source,
        highlighted=highlighted,
    )


def _cycle_highlight(state: FilterInputState, step: int) -> FilterInputState:
    count = len(state.active_suggestions)
    return replace(state, highlighted=(state.highlighted + step) % count)


def handle_key(state: FilterInputState, key: str) -> FilterInputState:
    """Return the state after one key. Every (state, key) pair is defined."""
    field_select = state.phase is Phase.FIELD_SELECT

    if key == COMPLETE_KEY:
        if field_select and state.active_suggestions:
            return _select_field(state)
        # Tab never reaches the line editor, with or without suggestions.
        return state

    if key == BACKSPACE_KEY and not field_select and not state.line.text:
        return _reopen_field_select(state)

    if field_select and state.active_suggestions:
        if key in NEXT_SUGGESTION_KEYS:
            return _cycle_highlight(state, 1)
        if key in PREV_SUGGESTION_KEYS:
            return _cycle_highlight(state, -1)

    line = edit_line(state.line, key)
    if not field_select:
        return replace(state, line=line)
    if line.text == state.line.text:
        return replace(state, line=line)
    return replace(
        state,
        line=line,
        active_suggestions=matching_suggestions(state.suggestion_source, line.text),
        highlighted=0,
    )


def commit(state: FilterInputState) -> FilterCommit:
    """Read the current (field, term) pair without changing ``state``."""
    return FilterCommit(field=state.selected_field, term=state.line.text)


def _render_buffer(state: FilterInputState, theme: UITheme, cursor_visible: bool) -> str:
    text = state.line.text
    cursor = state.line.clamped_cursor()
    reverse = theme.reverse if cursor_visible else ""
    end_reverse = theme.reset if cursor_visible else ""

    if not text:
        placeholder = FIELD_PLACEHOLDER if state.phase is Phase.FIELD_SELECT else VALUE_PLACEHOLDER
        return f"{reverse}{placeholder[0]}{end_reverse}{theme.input_placeholder}{placeholder[1:]}{theme.reset}"

    completion = ""
    suggestion = state.current_suggestion
    if suggestion is not None and suggestion.startswith(text) and cursor == len(text):
        completion = suggestion[len(text) :]

    before = text[:cursor]
    if cursor < len(text):
        return f"{before}{reverse}{text[cursor]}{end_reverse}{text[cursor + 1 :]}"
    if completion:
        return (
            f"{before}{reverse}{theme.input_completion}{completion[0]}{theme.reset}"
            f"{theme.input_completion}{completion[1:]}{theme.reset}"
        )
    return f"{before}{reverse} {end_reverse}"


def render_filter_input(state: FilterInputState, theme: UITheme, *, cursor_visible: bool = True) -> str:
    """Render pill, prompt, and buffer on one line, then the help strip."""
    parts: list[str] = []
    if state.phase is Phase.VALUE_ENTRY:
        parts.append(f"{theme.pill} {state.selected_field}: {theme.reset} ")
    parts.append(f"{theme.input_prompt}{PROMPT}{theme.reset}")
    parts.append(_render_buffer(state, theme, cursor_visible))
    return "".join(parts) + "\n" + render_short_help(INPUT_HELP_BINDINGS, theme)


__all__ = [
    "FilterCommit",
    "FilterInputState",
    "INPUT_HELP_BINDINGS",
    "Phase",
    "commit",
    "handle_key",
    "matching_suggestions",
    "new_filter_input",
    "render_filter_input",
]
