"""Log records and the table that displays them."""

from .model import LogTable, TABLE_CHROME_ROWS
from .records import (
    DEFAULT_FIELDS,
    FieldSpec,
    LogRecord,
    filter_records,
    find_field,
    parse_log_line,
    parse_log_lines,
    read_log_records,
)

__all__ = [
    "DEFAULT_FIELDS",
    "FieldSpec",
    "LogRecord",
    "LogTable",
    "TABLE_CHROME_ROWS",
    "filter_records",
    "find_field",
    "parse_log_line",
    "parse_log_lines",
    "read_log_records",
]
