"""Viewer bootstrap: build the initial model and run the event loop."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from loguru import logger

from ..table.records import FieldSpec
from ..ui_theme import resolve_theme
from ..views.application import Application
from ..views.model import ViewModel
from .effects import EffectRunner
from .loop import DEFAULT_TIMING, run_main_loop
from .terminal import TerminalController


def build_view_model(
    path: Path,
    fields: tuple[FieldSpec, ...],
    theme_name: str | None,
    no_color: bool,
) -> ViewModel:
    """Return the starting model for ``path`` sized to the current terminal."""
    term = shutil.get_terminal_size((80, 24))
    app = Application(
        fields=fields,
        theme=resolve_theme(theme_name, no_color=no_color),
        source_path=path,
        columns=term.columns,
        lines=term.lines,
    )
    return ViewModel.start(app)


def run_viewer(path: Path, fields: tuple[FieldSpec, ...], theme_name: str | None, no_color: bool) -> None:
    """Open ``path`` in the interactive viewer and block until the user quits."""
    if not os.isatty(sys.stdin.fileno()) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("lazylog needs an interactive terminal.")

    model = build_view_model(path, fields, theme_name, no_color)
    logger.info("starting viewer for {} with fields {}", path, model.app.field_names)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    runner = EffectRunner()
    try:
        run_main_loop(model, terminal, stdin_fd, DEFAULT_TIMING, runner, model.init_effects())
    finally:
        runner.shutdown()
    logger.info("viewer closed")


__all__ = ["build_view_model", "run_viewer"]
