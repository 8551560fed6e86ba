"""Command registry: the authoritative name -> descriptor table."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from ..errors import (
    CommandNotFoundError,
    DuplicateCommandNameError,
    InvalidCommandNameError,
    RegistrationError,
)
from ..logging import log_event
from .discovery import (
    DiscoveryCache,
    as_handler,
    collect_entries,
    handler_identifier,
    is_entry_iterable,
)
from .types import CommandDescriptor, CommandEntry, DuplicateCommandName


def normalize_command_name(name: str) -> str:
    """Lower-case and strip a command name."""
    return name.strip().lower()


def _describe_source(source: Any) -> str:
    if is_entry_iterable(source):
        return "entries"
    if isinstance(source, type):
        return source.__name__
    return type(source).__name__


class CommandRegistry:
    """Owns the command table built from one command source.

    ``source`` is either an iterable of ``CommandEntry`` values or a
    module, class or object whose ``@command``-tagged handlers are
    discovered. The table is built eagerly and only ever replaced wholesale, so
    lookups never take a lock.

    Duplicate or untypeable names are logged, recorded in ``rejected``
    (duplicates also in ``diagnostics``) and skipped; the first
    registration of a name wins.

    Raises:
        InvalidRegistrationTargetError: If ``source`` is None, a string,
            an entry iterable holding something other than
            ``CommandEntry``, or a class tagging instance methods.
        RegistrationError: If an entry's handler is not callable.
    """

    def __init__(self, source: Any, *, cache: Optional[DiscoveryCache] = None) -> None:
        self.source_type = _describe_source(source)
        entries = collect_entries(source, cache)

        self.diagnostics: list[DuplicateCommandName] = []
        self.rejected: list[RegistrationError] = []
        self._write_lock = threading.Lock()

        table: dict[str, CommandDescriptor] = {}
        for entry in entries:
            self._add(table, entry)
        self._commands: Mapping[str, CommandDescriptor] = MappingProxyType(table)

        log_event(
            "registry_built",
            level=logging.INFO,
            source_type=self.source_type,
            command_count=len(table),
            rejected_count=len(self.rejected),
            cached=cache is not None,
        )

    @classmethod
    def from_entries(cls, entries: Iterable[CommandEntry]) -> "CommandRegistry":
        """Build from an explicit sequence of registration triples."""
        return cls(list(entries))

    @classmethod
    def from_source(
        cls, source: Any, cache: Optional[DiscoveryCache] = None
    ) -> "CommandRegistry":
        """Build by discovering the tagged handlers on ``source``."""
        return cls(source, cache=cache)

    def _add(self, table: dict[str, CommandDescriptor], entry: CommandEntry) -> bool:
        handler = as_handler(entry.handler)
        source_name = handler_identifier(handler.func)
        name = normalize_command_name(entry.name or source_name)

        if not name or any(ch.isspace() for ch in name):
            self.rejected.append(InvalidCommandNameError(entry.name, source_name))
            log_event(
                "command_invalid_name",
                level=logging.ERROR,
                command=entry.name,
                source=source_name,
            )
            return False

        existing = table.get(name)
        if existing is not None:
            self.rejected.append(
                DuplicateCommandNameError(
                    name,
                    rejected_source=source_name,
                    existing_source=existing.source_name,
                )
            )
            self.diagnostics.append(
                DuplicateCommandName(name, source_name, existing.source_name)
            )
            log_event(
                "command_duplicate",
                level=logging.WARNING,
                command=name,
                rejected_source=source_name,
                existing_source=existing.source_name,
            )
            return False

        table[name] = CommandDescriptor(
            name=name,
            handler=handler,
            help_text=entry.help_text or "",
            source_name=source_name,
        )
        return True

    def register(self, entry: CommandEntry) -> bool:
        """Add one entry after construction.

        Writers are serialized and publish a fresh snapshot; readers keep
        whatever table they already hold. Returns False when the entry
        was rejected.
        """
        if not isinstance(entry, CommandEntry):
            raise RegistrationError(f"Expected CommandEntry, got {type(entry).__name__}")
        with self._write_lock:
            table = dict(self._commands)
            added = self._add(table, entry)
            if added:
                self._commands = MappingProxyType(table)
            return added

    def list_names(self) -> list[str]:
        """Return every registered command name."""
        return list(self._commands)

    def descriptors(self) -> list[CommandDescriptor]:
        return list(self._commands.values())

    def resolve(self, name: str) -> Optional[CommandDescriptor]:
        """Look up a command case-insensitively; None when absent."""
        if not isinstance(name, str):
            return None
        return self._commands.get(normalize_command_name(name))

    def require(self, name: str) -> CommandDescriptor:
        """Look up a command, raising ``CommandNotFoundError`` when absent."""
        descriptor = self.resolve(name)
        if descriptor is None:
            raise CommandNotFoundError(name)
        return descriptor

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_names())

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"CommandRegistry(source={self.source_type!r}, commands={len(self)})"
