"""CLI bootstrap entry point for cmdconsole."""

import argparse
import asyncio
import logging
import sys
import time
from typing import Optional, Sequence

from . import __version__, profile
from .commands.types import DispatchOutcome
from .console import Console, build_console, load_source
from .errors import AppError
from .formatting import format_outcome, is_failure
from .history import CommandHistory, load_history
from .logging import build_run_log_path, log_event, sanitize_error_message, setup_logging
from .repl import console_loop

__all__ = ["main"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdconsole",
        description="cmdconsole - interactive command console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p",
        "--profile",
        help="Path to profile file (optional; used by init to create profile)",
    )
    parser.add_argument("-l", "--log", help="Path to log file (optional)")
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        default=[],
        metavar="MODULE[:ATTR]",
        help="Extra command source to register (repeatable)",
    )
    parser.add_argument(
        "-e",
        "--execute",
        action="append",
        default=[],
        metavar="COMMAND",
        help="Run a command line and exit instead of starting the console (repeatable)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "command", nargs="?", help="Command to run (currently: 'init')"
    )
    return parser


def _resolve_log_file(log_arg: Optional[str], prof: profile.ConsoleProfile) -> Optional[str]:
    if log_arg:
        return profile.map_path(log_arg)
    if prof.logs_dir:
        return build_run_log_path(prof.logs_dir)
    return None


def _print_outcome(outcome: DispatchOutcome) -> None:
    print(format_outcome(outcome))


async def _run_batch(console: Console, lines: Sequence[str]) -> bool:
    """Run command lines in order; returns True when every one succeeded."""
    all_ok = True
    for line in lines:
        outcome = await console.dispatcher.dispatch(line)
        print(format_outcome(outcome))
        if is_failure(outcome):
            all_ok = False
        if console.exit_requested:
            break
    return all_ok


def _run_init(args: argparse.Namespace) -> int:
    if not args.profile:
        print("Error: -p/--profile is required for init command")
        print("Usage: cmdconsole init -p <profile-path>")
        return 1
    try:
        _, messages = profile.create_profile(args.profile)
    except (AppError, OSError) as e:
        print(f"Error: {e}")
        return 1
    for message in messages:
        print(message)
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the console, and return the exit code."""
    args = _build_parser().parse_args(argv)

    if args.command == "init":
        return _run_init(args)

    if args.command:
        print(f"Error: unknown command '{args.command}'")
        print("Supported commands: init")
        print("Usage:")
        print("  cmdconsole init -p <profile-path>")
        print("  cmdconsole [-p <profile-path>] [-l <log-path>] [-s MODULE[:ATTR]] [-e COMMAND]")
        return 1

    app_started = time.perf_counter()
    try:
        prof = profile.load_profile(args.profile) if args.profile else profile.ConsoleProfile()
        log_file = _resolve_log_file(args.log, prof)
        setup_logging(log_file)

        if prof.history_file:
            history = load_history(prof.history_file, prof.history_size)
        else:
            history = CommandHistory(prof.history_size)

        sources = [load_source(spec) for spec in args.source]
        console = build_console(
            sources,
            reporter=None if args.execute else _print_outcome,
            history=history,
        )
    except (AppError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    log_event(
        "app_start",
        level=logging.INFO,
        version=__version__,
        profile_file=args.profile,
        log_file=log_file,
        history_file=prof.history_file,
        command_count=len(console.registry),
    )

    exit_code = 0
    reason = "completed"
    try:
        if args.execute:
            exit_code = 0 if asyncio.run(_run_batch(console, args.execute)) else 1
        else:
            reason = asyncio.run(console_loop(console, prof))
    except KeyboardInterrupt:
        reason = "interrupted"
        exit_code = 130
    except Exception as e:
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="error",
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
            error_type=type(e).__name__,
            error=sanitize_error_message(str(e)),
        )
        print(f"Error: {sanitize_error_message(str(e))}")
        return 1

    log_event(
        "app_stop",
        level=logging.INFO,
        reason=reason,
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
    return exit_code


def main() -> None:
    """Main entry point for cmdconsole CLI."""
    sys.exit(run())
