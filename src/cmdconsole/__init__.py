"""cmdconsole - in-process command console engine."""

from .commands import (
    AutocompleteProvider,
    CommandDispatcher,
    CommandEntry,
    CommandRegistry,
    DiscoveryCache,
    command,
)

__version__ = "0.1.0"

__all__ = [
    "AutocompleteProvider",
    "CommandDispatcher",
    "CommandEntry",
    "CommandRegistry",
    "DiscoveryCache",
    "command",
    "__version__",
]
