"""Logging configuration for lazylog using loguru.

The terminal belongs to the viewer while it runs, so the default stderr sink
is always removed and log output goes to a file only when one is configured.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    log_file: Path | None = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Route loguru output to ``log_file``, or silence it when ``None``."""
    logger.remove()
    if log_file is None:
        return
    logger.add(
        str(log_file),
        level=log_level,
        format=LOG_FORMAT,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )


__all__ = ["LOG_FORMAT", "setup_logger"]
