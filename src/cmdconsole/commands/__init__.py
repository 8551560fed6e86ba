"""Command engine: registry, dispatcher and autocomplete."""

from .autocomplete import AutocompleteProvider, CommandCompleter
from .decorators import command
from .discovery import DiscoveryCache, collect_entries, discover_entries
from .dispatch import CommandDispatcher
from .parsing import tokenize
from .registry import CommandRegistry, normalize_command_name
from .types import (
    AsyncHandler,
    CommandDescriptor,
    CommandEntry,
    CommandNotFound,
    CommandSucceeded,
    DispatchOutcome,
    DuplicateCommandName,
    EmptyInput,
    ExecutionFailed,
    ParsedInput,
    SyncHandler,
)

__all__ = [
    "AsyncHandler",
    "AutocompleteProvider",
    "CommandCompleter",
    "CommandDescriptor",
    "CommandDispatcher",
    "CommandEntry",
    "CommandNotFound",
    "CommandRegistry",
    "CommandSucceeded",
    "DiscoveryCache",
    "DispatchOutcome",
    "DuplicateCommandName",
    "EmptyInput",
    "ExecutionFailed",
    "ParsedInput",
    "SyncHandler",
    "collect_entries",
    "command",
    "discover_entries",
    "normalize_command_name",
    "tokenize",
]
