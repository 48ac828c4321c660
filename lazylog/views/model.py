"""Top-level view model: application context plus the view stack.

``ViewModel.update`` is the only entry point the host loop calls. It runs the
application-wide updater first, then the error check, then the global quit
key, and finally hands the message to the view on top of the stack.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from ..messages import Effect, ErrorOccurredMsg, KeyMsg, Msg, quit_effect
from ..table.model import LogTable
from .application import Application
from .states import ErrorView, LoadedView, View


@dataclass(frozen=True)
class ViewModel:
    """Immutable snapshot of everything the viewer renders."""

    app: Application
    stack: tuple[View, ...]

    def __post_init__(self) -> None:
        if not self.stack or not isinstance(self.stack[0], LoadedView):
            raise ValueError("view stack must start with a loaded view")

    @classmethod
    def start(cls, app: Application) -> ViewModel:
        """Return an empty loaded view sized for ``app``'s terminal."""
        table = LogTable(fields=app.fields, keymap=app.keymap).resized(app.columns, app.lines)
        return cls(app=app, stack=(LoadedView(table),))

    def init_effects(self) -> list[Effect]:
        """Effects to run once before the first message."""
        effect = self.app.load_effect()
        return [effect] if effect is not None else []

    @property
    def current(self) -> View:
        return self.stack[-1]

    def update(self, msg: Msg) -> tuple[ViewModel, list[Effect]]:
        app = self.app.update(msg)

        if isinstance(msg, ErrorOccurredMsg):
            logger.error("error signal: {!r}", msg.error)
            stack = self.stack[:-1] if isinstance(self.current, ErrorView) else self.stack
            return ViewModel(app=app, stack=(*stack, ErrorView(msg.error))), []

        if isinstance(msg, KeyMsg) and app.keymap.quit.matches(msg.key):
            return ViewModel(app=app, stack=self.stack), [quit_effect()]

        stack, effects = self.current.update(app, self.stack[:-1], msg)
        if type(stack[-1]) is not type(self.current):
            logger.debug("view {} -> {}", type(self.current).__name__, type(stack[-1]).__name__)
        return ViewModel(app=app, stack=stack), effects

    def render(self) -> str:
        return self.current.render(self.app)


__all__ = ["ViewModel"]
