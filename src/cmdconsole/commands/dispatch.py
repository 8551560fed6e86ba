"""Command dispatch: raw input -> resolved handler -> reported outcome."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from ..logging import log_event, sanitize_error_message, summarize_command_args
from .parsing import is_blank, tokenize
from .registry import CommandRegistry
from .types import (
    AsyncHandler,
    CommandDescriptor,
    CommandNotFound,
    CommandSucceeded,
    DispatchOutcome,
    EmptyInput,
    ExecutionFailed,
    OutcomeReporter,
)


def _error_message(error: BaseException) -> str:
    message = str(error)
    return message if message else type(error).__name__


class CommandDispatcher:
    """Turn raw input into one command invocation and isolate its failures.

    The dispatcher holds no per-submission state; overlapping async
    submissions are allowed and may complete in any order.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        reporter: Optional[OutcomeReporter] = None,
    ) -> None:
        if registry is None:
            raise ValueError("registry is required")
        self.registry = registry
        self.reporter = reporter

    async def dispatch(self, text: Optional[str]) -> DispatchOutcome:
        """Parse, resolve and run one submission, returning its outcome.

        Handler errors are converted to ``ExecutionFailed``; only
        cancellation and interpreter-exit exceptions propagate.
        """
        if is_blank(text):
            return EmptyInput()

        parsed = tokenize(text)
        if not parsed.command_name:
            return EmptyInput()

        descriptor = self.registry.resolve(parsed.command_name)
        if descriptor is None:
            log_event(
                "command_not_found",
                level=logging.INFO,
                command=parsed.command_name,
                args_summary=summarize_command_args(parsed.args),
            )
            return CommandNotFound(parsed.command_name)

        return await self._invoke(descriptor, list(parsed.args))

    async def _invoke(
        self, descriptor: CommandDescriptor, args: list[str]
    ) -> DispatchOutcome:
        handler = descriptor.handler
        args_summary = summarize_command_args(args)
        started = time.perf_counter()

        try:
            if isinstance(handler, AsyncHandler):
                await handler.func(args)
            else:
                handler.func(args)
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            log_event(
                "command_error",
                level=logging.ERROR,
                command=descriptor.name,
                args_summary=args_summary,
                handler_kind=handler.kind,
                elapsed_ms=elapsed_ms,
                error_type=type(e).__name__,
                error=sanitize_error_message(_error_message(e)),
            )
            return ExecutionFailed(
                command=descriptor.name,
                message=_error_message(e),
                error_type=type(e).__name__,
            )

        log_event(
            "command_exec",
            level=logging.INFO,
            command=descriptor.name,
            args_summary=args_summary,
            handler_kind=handler.kind,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return CommandSucceeded(descriptor.name)

    async def submit(self, text: Optional[str]) -> None:
        """Dispatch and hand the outcome to the reporter."""
        outcome = await self.dispatch(text)
        self._report(outcome)

    def dispatch_sync(self, text: Optional[str]) -> DispatchOutcome:
        """Blocking ``dispatch`` for hosts without a running event loop."""
        _ensure_no_running_loop("dispatch_sync")
        return asyncio.run(self.dispatch(text))

    def submit_sync(self, text: Optional[str]) -> None:
        """Blocking ``submit`` for hosts without a running event loop."""
        _ensure_no_running_loop("submit_sync")
        asyncio.run(self.submit(text))

    def _report(self, outcome: DispatchOutcome) -> None:
        if self.reporter is not None:
            self.reporter(outcome)


def _ensure_no_running_loop(caller: str) -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise RuntimeError(
        f"{caller}() cannot be called from a running event loop; "
        "await dispatch() instead"
    )
