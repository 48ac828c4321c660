"""Single-line text editing on immutable buffers.

Applies one normalized key token to a ``(text, cursor)`` pair.
Unknown keys leave the buffer untouched, so callers can forward every key.
"""

from __future__ import annotations

from dataclasses import dataclass

_MOVE_LEFT_KEYS = frozenset({"LEFT", "CTRL_B"})
_MOVE_RIGHT_KEYS = frozenset({"RIGHT", "CTRL_F"})
_HOME_KEYS = frozenset({"HOME", "CTRL_A"})
_END_KEYS = frozenset({"END", "CTRL_E"})


@dataclass(frozen=True)
class LineBuffer:
    """Edit buffer text plus cursor offset in characters."""

    text: str = ""
    cursor: int = 0

    @classmethod
    def at_end(cls, text: str) -> LineBuffer:
        """Return a buffer holding ``text`` with the cursor after its last character."""
        return cls(text=text, cursor=len(text))

    def clamped_cursor(self) -> int:
        return max(0, min(self.cursor, len(self.text)))


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a printable character token."""
    return len(key) == 1 and key.isprintable()


def _previous_word_start(text: str, cursor: int) -> int:
    idx = cursor
    while idx > 0 and text[idx - 1].isspace():
        idx -= 1
    while idx > 0 and not text[idx - 1].isspace():
        idx -= 1
    return idx


def edit_line(buffer: LineBuffer, key: str) -> LineBuffer:
    """Return ``buffer`` after applying one editing key."""
    text = buffer.text
    cursor = buffer.clamped_cursor()

    if is_text_key(key):
        return LineBuffer(text[:cursor] + key + text[cursor:], cursor + 1)
    if key == "BACKSPACE":
        if cursor == 0:
            return buffer
        return LineBuffer(text[: cursor - 1] + text[cursor:], cursor - 1)
    if key == "DELETE":
        if cursor >= len(text):
            return buffer
        return LineBuffer(text[:cursor] + text[cursor + 1 :], cursor)
    if key in _MOVE_LEFT_KEYS:
        return LineBuffer(text, max(0, cursor - 1))
    if key in _MOVE_RIGHT_KEYS:
        return LineBuffer(text, min(len(text), cursor + 1))
    if key in _HOME_KEYS:
        return LineBuffer(text, 0)
    if key in _END_KEYS:
        return LineBuffer(text, len(text))
    if key == "CTRL_U":
        return LineBuffer(text[cursor:], 0)
    if key == "CTRL_K":
        return LineBuffer(text[:cursor], cursor)
    if key == "CTRL_W":
        start = _previous_word_start(text, cursor)
        return LineBuffer(text[:start] + text[cursor:], start)
    return buffer


__all__ = ["LineBuffer", "edit_line", "is_text_key"]
