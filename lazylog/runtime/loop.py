"""Main interactive event loop for the terminal UI.

Turns terminal input, size changes, and the clock into messages, feeds them
to the view model one at a time, hands returned effects to the effect
runner, and redraws after any change. Feature logic lives in the views.
"""

from __future__ import annotations

import shutil
import time
from dataclasses import dataclass

from ..input import read_key
from ..messages import Effect, KeyMsg, QuitMsg, ResizeMsg, TickMsg
from ..views.model import ViewModel
from .effects import EffectRunner
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int
    tick_seconds: float


DEFAULT_TIMING = RuntimeLoopTiming(key_poll_ms=50, tick_seconds=0.5)


def run_main_loop(
    model: ViewModel,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    runner: EffectRunner,
    initial_effects: list[Effect] | None = None,
) -> ViewModel:
    """Run until a quit message is processed; return the final model.

    Each iteration posts resize/key/tick messages, drains the message queue
    through ``model.update``, and redraws when anything was processed.
    """
    size: tuple[int, int] | None = None
    dirty = True
    last_tick = time.monotonic()
    runner.submit(initial_effects or [])

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            if (term.columns, term.lines) != size:
                size = (term.columns, term.lines)
                runner.post(ResizeMsg(term.columns, term.lines))

            while True:
                msg = runner.next_message()
                if msg is None:
                    break
                if isinstance(msg, QuitMsg):
                    return model
                model, effects = model.update(msg)
                runner.submit(effects)
                dirty = True

            if dirty:
                terminal.draw(model.render(), term.columns, term.lines)
                dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_poll_ms)
            except KeyboardInterrupt:
                key = "CTRL_C"
            if key:
                runner.post(KeyMsg(key))

            now = time.monotonic()
            if now - last_tick >= timing.tick_seconds:
                last_tick = now
                runner.post(TickMsg(now))


__all__ = ["DEFAULT_TIMING", "RuntimeLoopTiming", "run_main_loop"]
