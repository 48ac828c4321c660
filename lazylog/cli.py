"""Command-line front door for lazylog.

Parses CLI options, merges them over the persisted config, configures
logging, then dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .logger import setup_logger
from .runtime import config, run_viewer
from .table.records import FieldSpec
from .ui_theme import available_theme_names


def _field_list(value: str) -> tuple[FieldSpec, ...]:
    """argparse type for comma-separated field titles."""
    fields = config.fields_from_titles([part.strip() for part in value.split(",")])
    if not fields:
        raise argparse.ArgumentTypeError(f"no field names in {value!r}")
    return fields


def _log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in config.LOG_LEVELS:
        raise argparse.ArgumentTypeError(f"unknown log level: {value!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse and filter JSON log files in the terminal."
    )
    parser.add_argument("path", help="Log file to open.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--fields",
        type=_field_list,
        default=None,
        help="Comma-separated field names, in column and suggestion order.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--log-level", type=_log_level, default=None, help="Diagnostic log level.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the viewer on a log file.

    Command-line values win over the persisted config; the config wins over
    built-in defaults.
    """
    args = build_parser().parse_args(argv)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if path.is_dir():
        raise SystemExit(f"Not a file: {path}")

    log_file = args.log_file if args.log_file is not None else config.load_log_file()
    log_level = args.log_level if args.log_level is not None else config.load_log_level()
    setup_logger(log_file, log_level)

    fields = args.fields if args.fields is not None else config.load_fields()
    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    run_viewer(path, fields, theme_name, args.no_color)


if __name__ == "__main__":
    main()
