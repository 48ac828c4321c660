"""Input widgets: single-line editing and the two-phase filter input."""

from .line_edit import LineBuffer, edit_line, is_text_key
from .pill_input import (
    FilterCommit,
    FilterInputState,
    Phase,
    commit,
    handle_key,
    matching_suggestions,
    new_filter_input,
    render_filter_input,
)

__all__ = [
    "FilterCommit",
    "FilterInputState",
    "LineBuffer",
    "Phase",
    "commit",
    "edit_line",
    "handle_key",
    "is_text_key",
    "matching_suggestions",
    "new_filter_input",
    "render_filter_input",
]
