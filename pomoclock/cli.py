"""Argument parsing and subcommand handlers for the ``pomoclock`` CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="pomoclock",
        description="PomoClock - a Pomodoro timer with session statistics",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    start_parser = subparsers.add_parser(
        "start",
        help="Start a new Pomodoro session",
    )
    start_parser.add_argument(
        "-w",
        "--work",
        type=_positive_int,
        help="Work duration in minutes (default: from settings, 25)",
    )
    start_parser.add_argument(
        "-b",
        "--break-time",
        type=_positive_int,
        help="Break duration in minutes (default: from settings, 5)",
    )

    subparsers.add_parser(
        "stats",
        help="Show productivity statistics",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Export session data to JSON",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: print to stdout)",
    )

    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply ``start`` flag overrides on top of the saved settings."""
    settings = base or load_settings()
    work = getattr(args, "work", None)
    break_time = getattr(args, "break_time", None)
    if work is not None:
        settings.work_minutes = work
    if break_time is not None:
        settings.break_minutes = break_time
    return settings


# ── handlers ──────────────────────────────────────────────────────────────


def cmd_start(args: argparse.Namespace) -> int:
    from PyQt6.QtWidgets import QApplication

    from .app import PomoClockApp

    settings = resolve_settings(args)
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("PomoClock")

    window = PomoClockApp(settings)
    window.show()
    window.start_session()
    return app.exec()


def cmd_stats(args: argparse.Namespace) -> int:
    from .stats import format_report, load_stats

    print(format_report(load_stats()))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    from .export import export_sessions

    payload = export_sessions(args.output)
    if args.output is None:
        print(payload)
    else:
        print(f"Data exported to {args.output}")
    return 0


COMMANDS = {
    "start": cmd_start,
    "stats": cmd_stats,
    "export": cmd_export,
}


def run(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, initialise the database and dispatch."""
    from sqlalchemy.exc import SQLAlchemyError

    from .database.db import init_db

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = args.command or "start"
    try:
        init_db()
        return COMMANDS[command](args)
    except SQLAlchemyError as exc:
        logger.debug("Storage failure", exc_info=True)
        print(f"pomoclock: database error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.debug("File failure", exc_info=True)
        print(f"pomoclock: {exc}", file=sys.stderr)
        return 1
