"""One-line user-facing rendering of dispatch outcomes."""

from __future__ import annotations

from .commands.types import (
    CommandNotFound,
    CommandSucceeded,
    DispatchOutcome,
    EmptyInput,
    ExecutionFailed,
)


def format_outcome(outcome: DispatchOutcome) -> str:
    """Render an outcome as a single line naming the command and the result."""
    if isinstance(outcome, CommandSucceeded):
        return f"Command '{outcome.command}' executed successfully."
    if isinstance(outcome, EmptyInput):
        return "Error: Command input is empty."
    if isinstance(outcome, CommandNotFound):
        return f"Error: Command '{outcome.command}' not found."
    if isinstance(outcome, ExecutionFailed):
        message = " ".join(outcome.message.split())
        return f"Error: Command '{outcome.command}' failed: {message}"
    raise TypeError(f"Unknown dispatch outcome: {outcome!r}")


def is_failure(outcome: DispatchOutcome) -> bool:
    """Return True for every outcome other than success."""
    return not isinstance(outcome, CommandSucceeded)
