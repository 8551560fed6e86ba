"""Pytest configuration and fixtures for cmdconsole tests."""

import asyncio
import logging
from typing import Sequence

import pytest

from cmdconsole.commands import (
    AutocompleteProvider,
    CommandDispatcher,
    CommandRegistry,
    command,
)


class SampleCommands:
    """Command source exercising every handler shape."""

    def __init__(self):
        self.calls: list[tuple[str, list[str]]] = []

    @command(help="Print the arguments")
    def echo(self, args: Sequence[str]) -> None:
        self.calls.append(("echo", list(args)))

    @command("Quit", help="Leave")
    def leave(self, args: Sequence[str]) -> None:
        self.calls.append(("quit", list(args)))

    @command
    def status(self, args: Sequence[str]) -> None:
        self.calls.append(("status", list(args)))

    @command(help="Always fails")
    def boom(self, args: Sequence[str]) -> None:
        self.calls.append(("boom", list(args)))
        raise RuntimeError("kaboom")

    @command(help="Suspends, then completes")
    async def fetch(self, args: Sequence[str]) -> None:
        await asyncio.sleep(0)
        self.calls.append(("fetch", list(args)))

    @command(help="Suspends, then fails")
    async def explode(self, args: Sequence[str]) -> None:
        await asyncio.sleep(0)
        self.calls.append(("explode", list(args)))
        raise ValueError("late failure")

    def not_a_command(self, args: Sequence[str]) -> None:
        self.calls.append(("not_a_command", list(args)))


SAMPLE_COMMAND_NAMES = {"echo", "quit", "status", "boom", "fetch", "explode"}


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo global logging changes made by setup_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    logging.disable(logging.NOTSET)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def sample_source():
    return SampleCommands()


@pytest.fixture
def registry(sample_source):
    return CommandRegistry(sample_source)


@pytest.fixture
def reported():
    return []


@pytest.fixture
def dispatcher(registry, reported):
    return CommandDispatcher(registry, reporter=reported.append)


@pytest.fixture
def autocomplete(registry):
    return AutocompleteProvider(registry)
