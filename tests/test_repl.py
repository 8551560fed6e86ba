"""Tests for the prompt_toolkit console host."""

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from cmdconsole.commands import CommandCompleter, CommandNotFound, CommandSucceeded
from cmdconsole.console import build_console
from cmdconsole.history import CommandHistory
from cmdconsole.profile import ConsoleProfile
from cmdconsole.repl import input as repl_input
from cmdconsole.repl import loop as repl_loop


class _ScriptedSession:
    """Stands in for PromptSession; raises EOFError when the script runs out."""

    def __init__(self, lines):
        self._lines = list(lines)
        self.prompts = []

    async def prompt_async(self, message):
        self.prompts.append(message)
        if not self._lines:
            raise EOFError
        item = self._lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def reported():
    return []


@pytest.fixture
def output():
    return []


@pytest.fixture
def console(reported, output):
    return build_console(write=output.append, reporter=reported.append)


def _script(monkeypatch, lines):
    session = _ScriptedSession(lines)
    monkeypatch.setattr(repl_loop, "create_prompt_session", lambda console, profile: session)
    return session


class TestConsoleLoop:
    """Test the REPL loop with scripted input."""

    @pytest.mark.asyncio
    async def test_exit_command_stops_loop(self, monkeypatch, console, reported, output):
        _script(monkeypatch, ["echo hi", "exit", "echo never"])

        reason = await repl_loop.console_loop(console, ConsoleProfile())

        assert reason == "exit_command"
        assert output == ["hi"]
        assert reported == [CommandSucceeded("echo"), CommandSucceeded("exit")]

    @pytest.mark.asyncio
    async def test_eof_stops_loop(self, monkeypatch, console):
        _script(monkeypatch, [])

        assert await repl_loop.console_loop(console, ConsoleProfile()) == "eof"

    @pytest.mark.asyncio
    async def test_blank_lines_are_skipped(self, monkeypatch, console, reported):
        _script(monkeypatch, ["", "   ", "frob"])

        await repl_loop.console_loop(console, ConsoleProfile())

        assert reported == [CommandNotFound("frob")]

    @pytest.mark.asyncio
    async def test_keyboard_interrupt_continues(self, monkeypatch, console, reported):
        _script(monkeypatch, [KeyboardInterrupt(), "echo after"])

        await repl_loop.console_loop(console, ConsoleProfile())

        assert reported == [CommandSucceeded("echo")]

    @pytest.mark.asyncio
    async def test_input_is_recorded_in_history(self, monkeypatch, console):
        _script(monkeypatch, ["echo one", "frob", "exit"])

        await repl_loop.console_loop(console, ConsoleProfile())

        assert console.history.entries() == ["echo one", "frob", "exit"]

    @pytest.mark.asyncio
    async def test_uses_profile_prompt(self, monkeypatch, console):
        session = _script(monkeypatch, ["exit"])

        await repl_loop.console_loop(console, ConsoleProfile(prompt="$ "))

        assert session.prompts == ["$ "]

    @pytest.mark.asyncio
    async def test_history_saved_on_exit(self, monkeypatch, console, tmp_path):
        history_file = tmp_path / "history"
        _script(monkeypatch, ["echo saved", "exit"])

        await repl_loop.console_loop(console, ConsoleProfile(history_file=str(history_file)))

        assert history_file.read_text(encoding="utf-8") == "echo saved\nexit\n"


def _binding_handler(key_bindings, key):
    for binding in key_bindings.bindings:
        if binding.keys == (key,):
            return binding.handler
    raise AssertionError(f"no binding for {key}")


class _Event:
    def __init__(self):
        self.current_buffer = Buffer()


class TestKeyBindings:
    """Test up/down history recall bindings."""

    def test_up_and_down_walk_history(self):
        history = CommandHistory()
        history.record("first")
        history.record("second")
        key_bindings = repl_input.build_key_bindings(history)
        up = _binding_handler(key_bindings, Keys.Up)
        down = _binding_handler(key_bindings, Keys.Down)
        event = _Event()

        up(event)
        assert event.current_buffer.text == "second"
        up(event)
        assert event.current_buffer.text == "first"
        assert event.current_buffer.cursor_position == len("first")
        down(event)
        assert event.current_buffer.text == "second"
        down(event)
        assert event.current_buffer.text == ""


class TestCreatePromptSession:
    """Test prompt session construction."""

    def test_completer_enabled(self, console):
        with create_pipe_input() as pipe_input, create_app_session(
            input=pipe_input, output=DummyOutput()
        ):
            session = repl_input.create_prompt_session(console, ConsoleProfile())

        assert isinstance(session.completer, CommandCompleter)
        assert session.completer.provider is console.autocomplete

    def test_completer_disabled(self, console):
        with create_pipe_input() as pipe_input, create_app_session(
            input=pipe_input, output=DummyOutput()
        ):
            session = repl_input.create_prompt_session(
                console, ConsoleProfile(completion=False)
            )

        assert session.completer is None
