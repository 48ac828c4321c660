"""Messages delivered to the view model and the effects that produce them.

Every state transition consumes exactly one message and returns a list of
effects. An effect is a zero-argument callable run by the host loop; its
return value, when not ``None``, is queued as a later message.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .table.records import LogRecord


@dataclass(frozen=True)
class KeyMsg:
    """One decoded key token (see :func:`lazylog.input.read_key`)."""

    key: str


@dataclass(frozen=True)
class ResizeMsg:
    columns: int
    lines: int


@dataclass(frozen=True)
class TickMsg:
    """Periodic heartbeat from the host loop."""

    now: float


@dataclass(frozen=True)
class RecordsLoadedMsg:
    records: tuple[LogRecord, ...]


@dataclass(frozen=True)
class ErrorOccurredMsg:
    """A collaborator failed; the view model switches to the error view."""

    error: BaseException


@dataclass(frozen=True)
class QuitMsg:
    pass


Msg = Union[KeyMsg, ResizeMsg, TickMsg, RecordsLoadedMsg, ErrorOccurredMsg, QuitMsg]
Effect = Callable[[], Union[Msg, None]]


def emit(msg: Msg) -> Effect:
    """Return an effect that simply produces ``msg``."""

    def _effect() -> Msg:
        return msg

    return _effect


def quit_effect() -> Effect:
    return emit(QuitMsg())


__all__ = [
    "Effect",
    "ErrorOccurredMsg",
    "KeyMsg",
    "Msg",
    "QuitMsg",
    "RecordsLoadedMsg",
    "ResizeMsg",
    "TickMsg",
    "emit",
    "quit_effect",
]
