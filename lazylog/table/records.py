"""Log record parsing and single-field filter predicates.

Each input line becomes one :class:`LogRecord`. JSON object lines keep their
decoded fields; anything else is kept as a record whose ``message`` is the
raw line, so plain-text logs still display and filter.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from loguru import logger


@dataclass(frozen=True)
class FieldSpec:
    """Displayed field title plus the record keys probed for its value."""

    title: str
    keys: tuple[str, ...] = ()

    @property
    def lookup_keys(self) -> tuple[str, ...]:
        return self.keys or (self.title,)


DEFAULT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("time", ("timestamp", "time", "ts", "@timestamp")),
    FieldSpec("level", ("level", "lvl", "severity")),
    FieldSpec("message", ("message", "msg", "error")),
)


def _lookup(data: Mapping[str, object], key: str) -> object | None:
    """Return ``data[key]``, falling back to a dotted walk into nested objects."""
    if key in data:
        return data[key]
    current: object = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


@dataclass(frozen=True, eq=False)
class LogRecord:
    """One log line and its decoded fields."""

    line_number: int
    raw: str
    fields: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    def value(self, spec: FieldSpec) -> str:
        """Return the first non-missing key of ``spec`` as display text."""
        for key in spec.lookup_keys:
            found = _lookup(self.fields, key)
            if found is not None:
                return _stringify(found)
        return ""

    def matches(self, spec: FieldSpec | None, term: str) -> bool:
        """Case-insensitive substring match on one field, or the whole line."""
        needle = term.lower()
        if spec is None:
            return needle in self.raw.lower()
        return needle in self.value(spec).lower()


def parse_log_line(line: str, line_number: int) -> LogRecord:
    """Decode one line; non-object or invalid JSON becomes a message-only record."""
    text = line.rstrip("\r\n")
    try:
        decoded = json.loads(text)
    except ValueError:
        decoded = None
    if not isinstance(decoded, dict):
        decoded = {"message": text}
    return LogRecord(line_number=line_number, raw=text, fields=MappingProxyType(decoded))


def parse_log_lines(lines: Iterable[str]) -> tuple[LogRecord, ...]:
    """Parse non-blank lines, numbering them by their position in the input."""
    return tuple(
        parse_log_line(line, idx)
        for idx, line in enumerate(lines, start=1)
        if line.strip()
    )


def read_log_records(path: Path) -> tuple[LogRecord, ...]:
    """Read and parse ``path``. Raises ``OSError`` when it cannot be read."""
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        records = parse_log_lines(handle)
    logger.info("loaded {} records from {}", len(records), path)
    return records


def find_field(fields: Iterable[FieldSpec], title: str | None) -> FieldSpec | None:
    """Return the spec titled ``title``, or an ad-hoc spec for unknown titles."""
    if not title:
        return None
    for spec in fields:
        if spec.title == title:
            return spec
    return FieldSpec(title)


def filter_records(
    records: Iterable[LogRecord],
    spec: FieldSpec | None,
    term: str,
) -> tuple[LogRecord, ...]:
    """Return records matching ``term`` in ``spec`` (or anywhere), in order."""
    return tuple(record for record in records if record.matches(spec, term))


__all__ = [
    "DEFAULT_FIELDS",
    "FieldSpec",
    "LogRecord",
    "filter_records",
    "find_field",
    "parse_log_line",
    "parse_log_lines",
    "read_log_records",
]
