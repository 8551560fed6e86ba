"""Main console REPL loop."""

from __future__ import annotations

import logging

from .. import __version__
from ..console import Console
from ..constants import BORDERLINE_CHAR, BORDERLINE_WIDTH
from ..history import save_history
from ..logging import log_event
from ..profile import ConsoleProfile
from .input import create_prompt_session


def print_startup_banner(console: Console) -> None:
    """Print console startup context and key usage hints."""
    borderline = BORDERLINE_CHAR * BORDERLINE_WIDTH
    print(borderline)
    print(f"cmdconsole {__version__}")
    print(borderline)
    print(f"Commands: {len(console.registry)} registered")
    print("Tab completes command names • Up/Down recalls history")
    print("Type 'help' for commands • 'exit' or Ctrl-D to quit")
    print(borderline)


async def console_loop(console: Console, profile: ConsoleProfile) -> str:
    """Run the REPL loop until exit; returns the stop reason."""
    prompt_session = create_prompt_session(console, profile)
    print_startup_banner(console)

    reason = "exit_command"
    while True:
        try:
            user_input = await prompt_session.prompt_async(profile.prompt)
        except EOFError:
            print()
            reason = "eof"
            break
        except KeyboardInterrupt:
            console.history.reset_cursor()
            continue

        console.history.record(user_input)
        if not user_input.strip():
            continue

        await console.dispatcher.submit(user_input)
        if console.exit_requested:
            break

    if profile.history_file:
        try:
            save_history(console.history, profile.history_file)
        except OSError as e:
            print(f"ERROR: Could not save history: {e}")
            log_event(
                "history_save_failed",
                level=logging.ERROR,
                history_file=profile.history_file,
                error_type=type(e).__name__,
                error=str(e),
            )

    return reason
