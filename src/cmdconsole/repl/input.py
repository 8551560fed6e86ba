"""Prompt session and key-binding setup for the console REPL."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.filters import has_completions
from prompt_toolkit.history import DummyHistory
from prompt_toolkit.key_binding import KeyBindings

from ..commands import CommandCompleter
from ..console import Console
from ..history import CommandHistory
from ..profile import ConsoleProfile


def build_key_bindings(history: CommandHistory) -> KeyBindings:
    """Bind up/down to command history recall."""
    key_bindings = KeyBindings()

    @key_bindings.add("up", filter=~has_completions)
    def _handle_up(event) -> None:
        text = history.previous()
        event.current_buffer.text = text
        event.current_buffer.cursor_position = len(text)

    @key_bindings.add("down", filter=~has_completions)
    def _handle_down(event) -> None:
        text = history.next()
        event.current_buffer.text = text
        event.current_buffer.cursor_position = len(text)

    return key_bindings


def create_prompt_session(console: Console, profile: ConsoleProfile) -> PromptSession:
    """Create prompt-toolkit session for console input."""
    completer = CommandCompleter(console.autocomplete) if profile.completion else None
    return PromptSession(
        # Recall goes through CommandHistory via the key bindings above.
        history=DummyHistory(),
        completer=completer,
        complete_while_typing=False,
        key_bindings=build_key_bindings(console.history),
    )
