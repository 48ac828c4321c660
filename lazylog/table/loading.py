"""Deferred log-file loading."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..messages import Effect, ErrorOccurredMsg, Msg, RecordsLoadedMsg
from .records import read_log_records


def load_records_effect(path: Path) -> Effect:
    """Return an effect that reads ``path`` and reports records or the failure."""

    def _load() -> Msg:
        try:
            records = read_log_records(path)
        except OSError as exc:
            logger.error("failed to read {}: {}", path, exc)
            return ErrorOccurredMsg(exc)
        return RecordsLoadedMsg(records)

    return _load


__all__ = ["load_records_effect"]
