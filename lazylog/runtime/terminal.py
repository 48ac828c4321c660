"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and full-frame drawing.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from ..ansi import clip_ansi_line


class TerminalController:
    """Manage terminal mode transitions and frame output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show cursor, restore the main screen buffer and tty settings."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def draw(self, frame: str, columns: int, lines: int) -> None:
        """Replace the screen with ``frame``, clipped to ``columns`` x ``lines``."""
        rows = frame.split("\n")[:lines]
        body = "\r\n".join(f"{clip_ansi_line(row, columns)}\x1b[0m\x1b[K" for row in rows)
        os.write(self.stdout_fd, f"\x1b[H{body}\x1b[J".encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
