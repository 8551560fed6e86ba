"""Typed values exchanged between registry, dispatcher and UI layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Sequence, TypeAlias


SyncCallable = Callable[[Sequence[str]], Any]
AsyncCallable = Callable[[Sequence[str]], Awaitable[Any]]


@dataclass(slots=True, frozen=True)
class SyncHandler:
    """Handler called directly with the argument tokens."""

    func: SyncCallable
    kind: Literal["sync"] = "sync"


@dataclass(slots=True, frozen=True)
class AsyncHandler:
    """Handler whose call returns an awaitable completion signal."""

    func: AsyncCallable
    kind: Literal["async"] = "async"


CommandHandler: TypeAlias = SyncHandler | AsyncHandler


@dataclass(slots=True, frozen=True)
class CommandEntry:
    """One explicit registration triple.

    An empty ``name`` means the handler's own identifier is used.
    ``handler`` may be a plain callable; coroutine functions are
    wrapped as ``AsyncHandler`` and everything else as ``SyncHandler``.
    """

    name: str
    help_text: str
    handler: CommandHandler | Callable[..., Any]


@dataclass(slots=True, frozen=True)
class CommandDescriptor:
    """Stored record for one registered command."""

    name: str
    handler: CommandHandler
    help_text: str = ""
    source_name: str = ""


@dataclass(slots=True, frozen=True)
class ParsedInput:
    """Command name plus argument tokens for one submission."""

    command_name: str
    args: tuple[str, ...] = field(default_factory=tuple)


# ============================================================================
# Dispatch outcomes
# ============================================================================


@dataclass(slots=True, frozen=True)
class CommandSucceeded:
    """The handler ran to completion."""

    command: str
    kind: Literal["success"] = "success"


@dataclass(slots=True, frozen=True)
class EmptyInput:
    """Submitted text had no usable tokens."""

    kind: Literal["empty_input"] = "empty_input"


@dataclass(slots=True, frozen=True)
class CommandNotFound:
    """No command is registered under the attempted name."""

    command: str
    kind: Literal["not_found"] = "not_found"


@dataclass(slots=True, frozen=True)
class ExecutionFailed:
    """The handler raised, or its completion signaled failure."""

    command: str
    message: str
    error_type: str = ""
    kind: Literal["execution_error"] = "execution_error"


DispatchFailure: TypeAlias = EmptyInput | CommandNotFound | ExecutionFailed
DispatchOutcome: TypeAlias = CommandSucceeded | DispatchFailure

OutcomeReporter = Callable[[DispatchOutcome], None]


@dataclass(slots=True, frozen=True)
class DuplicateCommandName:
    """Diagnostic for a registration rejected because its name was taken."""

    name: str
    rejected_source: str
    existing_source: str
