"""Prefix autocompletion over registered command names."""

from __future__ import annotations

from typing import Iterable, Optional

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from .parsing import first_token
from .registry import CommandRegistry


class AutocompleteProvider:
    """Stateless case-insensitive prefix search over the registry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def suggest(self, text: Optional[str]) -> list[str]:
        """Return every command name starting with the first token of ``text``."""
        prefix = first_token(text).casefold()
        return [
            name
            for name in self.registry.list_names()
            if name.casefold().startswith(prefix)
        ]


class CommandCompleter(Completer):
    """prompt_toolkit completer for the command-name position.

    Completions are offered only while the cursor is still inside the
    first token; argument positions get nothing.
    """

    def __init__(self, provider: AutocompleteProvider) -> None:
        self.provider = provider

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        before_cursor = document.text_before_cursor
        stripped = before_cursor.lstrip()
        if any(ch.isspace() for ch in stripped):
            return

        for name in sorted(self.provider.suggest(stripped)):
            descriptor = self.provider.registry.resolve(name)
            meta = descriptor.help_text if descriptor is not None else ""
            yield Completion(
                name,
                start_position=-len(stripped),
                display_meta=meta or None,
            )
