"""Console composition: one registry shared by dispatcher and autocomplete."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from .builtins import BuiltinCommands
from .commands import (
    AutocompleteProvider,
    CommandDispatcher,
    CommandEntry,
    CommandRegistry,
    DiscoveryCache,
    collect_entries,
)
from .commands.types import OutcomeReporter
from .errors import ConfigError
from .history import CommandHistory


@dataclass(slots=True)
class Console:
    """Engine components wired together for one console session."""

    registry: CommandRegistry
    dispatcher: CommandDispatcher
    autocomplete: AutocompleteProvider
    history: CommandHistory
    builtins: BuiltinCommands

    @property
    def exit_requested(self) -> bool:
        return self.builtins.exit_requested


def build_console(
    sources: Iterable[Any] = (),
    *,
    write: Callable[[str], None] = print,
    reporter: Optional[OutcomeReporter] = None,
    history: Optional[CommandHistory] = None,
    cache: Optional[DiscoveryCache] = None,
) -> Console:
    """Build a console from the built-in commands plus host command sources.

    Built-ins are registered first, so a host command that reuses a
    built-in name is rejected as a duplicate.
    """
    history = history if history is not None else CommandHistory()
    builtins = BuiltinCommands(write=write, history=history)

    entries: list[CommandEntry] = collect_entries(builtins, cache)
    for source in sources:
        entries.extend(collect_entries(source, cache))

    registry = CommandRegistry(entries)
    builtins.attach(registry)

    return Console(
        registry=registry,
        dispatcher=CommandDispatcher(registry, reporter=reporter),
        autocomplete=AutocompleteProvider(registry),
        history=history,
        builtins=builtins,
    )


def load_source(spec: str) -> Any:
    """Import a command source from ``module:attribute``.

    Classes are instantiated without arguments; anything else
    (instances, modules, entry lists) is used as-is. A bare module
    path uses the module itself as the source.
    """
    module_name, _, attr_name = spec.partition(":")
    if not module_name:
        raise ConfigError(f"Invalid command source: {spec!r}. Expected module[:attribute]")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import command source module {module_name}: {e}") from e

    if not attr_name:
        return module

    source = module
    for part in attr_name.split("."):
        try:
            source = getattr(source, part)
        except AttributeError as e:
            raise ConfigError(f"Command source not found: {spec}") from e

    if isinstance(source, type):
        return source()
    return source
