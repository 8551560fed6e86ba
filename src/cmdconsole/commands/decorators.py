"""The ``@command`` marker used to tag handler methods on a command source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

COMMAND_MARKER_ATTR = "__cmdconsole_command__"


@dataclass(slots=True, frozen=True)
class CommandMarker:
    """Metadata attached to a tagged function."""

    name: str = ""
    help_text: str = ""


def command(
    name: str | Callable[..., Any] = "",
    help: str = "",
) -> Any:
    """Tag a function or method as a console command.

    Usable bare (``@command``) or with arguments
    (``@command("quit", help="Leave the console")``). An empty name
    means the function's own name is used, lower-cased.
    """
    if callable(name):
        return _tag(name, CommandMarker())

    marker = CommandMarker(name=name, help_text=help)

    def decorator(func: F) -> F:
        return _tag(func, marker)

    return decorator


def _tag(func: F, marker: CommandMarker) -> F:
    # staticmethod/classmethod wrappers carry the marker on the wrapped function
    target = getattr(func, "__func__", func)
    setattr(target, COMMAND_MARKER_ATTR, marker)
    return func


def get_marker(obj: Any) -> Optional[CommandMarker]:
    """Return the command marker attached to ``obj``, if any."""
    target = getattr(obj, "__func__", obj)
    marker = getattr(target, COMMAND_MARKER_ATTR, None)
    if isinstance(marker, CommandMarker):
        return marker
    return None
