"""Discovery of ``@command``-tagged handlers on a command source.

Discovery turns a source object into an explicit list of
``CommandEntry`` values; the registry never inspects the source
itself. Which attributes of a source *type* carry the marker is
stable, so that part can be memoized in a host-owned
``DiscoveryCache`` and shared by every registry built from the
same kind of source.
"""

from __future__ import annotations

import functools
import inspect
import threading
import types
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from ..errors import InvalidRegistrationTargetError, RegistrationError
from .decorators import CommandMarker, get_marker
from .types import AsyncHandler, CommandEntry, CommandHandler, SyncHandler


@dataclass(slots=True, frozen=True)
class TaggedAttribute:
    """One tagged attribute found on a source type."""

    attr_name: str
    marker: CommandMarker


class DiscoveryCache:
    """Memoizes tagged attribute lists per source type.

    The host constructs one instance and passes it to every registry
    that shares a source shape; its lifetime is the host's.
    """

    def __init__(self) -> None:
        self._entries: dict[type, tuple[TaggedAttribute, ...]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_scan(
        self,
        source_type: type,
        scan: Callable[[], tuple[TaggedAttribute, ...]],
    ) -> tuple[TaggedAttribute, ...]:
        with self._lock:
            cached = self._entries.get(source_type)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1
            scanned = scan()
            self._entries[source_type] = scanned
            return scanned

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, source_type: object) -> bool:
        return source_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def handler_identifier(func: Any) -> str:
    """Return the callable's own name, unwrapping partials."""
    while isinstance(func, functools.partial):
        func = func.func
    name = getattr(func, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(func).__name__


def as_handler(obj: Any) -> CommandHandler:
    """Wrap a callable into the sync/async handler variant."""
    if isinstance(obj, (SyncHandler, AsyncHandler)):
        return obj
    if not callable(obj):
        raise RegistrationError(
            f"Command handler must be callable, got {type(obj).__name__}"
        )
    if _is_async_callable(obj):
        return AsyncHandler(obj)
    return SyncHandler(obj)


def _is_async_callable(obj: Any) -> bool:
    """True for coroutine functions and objects with an ``async def __call__``."""
    while isinstance(obj, functools.partial):
        obj = obj.func
    if inspect.iscoroutinefunction(obj):
        return True
    if isinstance(obj, type):
        return False
    return inspect.iscoroutinefunction(getattr(obj, "__call__", None))


def _source_namespaces(source: Any) -> Iterator[dict[str, Any]]:
    """Yield attribute namespaces in base-first definition order."""
    if isinstance(source, types.ModuleType):
        yield vars(source)
        return
    klass = source if isinstance(source, type) else type(source)
    for base in reversed(klass.__mro__):
        if base is object:
            continue
        yield vars(base)


def _scan(source: Any) -> tuple[TaggedAttribute, ...]:
    seen: dict[str, None] = {}
    for namespace in _source_namespaces(source):
        for attr_name in namespace:
            seen.setdefault(attr_name, None)

    tagged: list[TaggedAttribute] = []
    for attr_name in seen:
        try:
            raw = inspect.getattr_static(source, attr_name)
        except AttributeError:
            continue
        marker = get_marker(raw)
        if marker is not None:
            tagged.append(TaggedAttribute(attr_name, marker))
    return tuple(tagged)


def _is_cacheable(source: Any) -> bool:
    # Modules and classes share their type with unrelated sources.
    return not isinstance(source, (types.ModuleType, type))


def discover_entries(
    source: Any,
    cache: Optional[DiscoveryCache] = None,
) -> list[CommandEntry]:
    """Collect ``CommandEntry`` values for every tagged handler on ``source``.

    Handlers are bound to ``source`` so instance methods receive it as
    ``self``. Undeclared names fall back to the attribute name; case
    normalization is left to the registry.

    A class source may only tag static and class methods; tagged
    instance methods raise ``InvalidRegistrationTargetError``.
    """
    if cache is not None and _is_cacheable(source):
        tagged = cache.get_or_scan(type(source), lambda: _scan(source))
    else:
        tagged = _scan(source)

    if isinstance(source, type):
        _require_unbound_callables(source, tagged)

    entries: list[CommandEntry] = []
    for item in tagged:
        bound = getattr(source, item.attr_name)
        entries.append(
            CommandEntry(
                name=item.marker.name or item.attr_name,
                help_text=item.marker.help_text,
                handler=as_handler(bound),
            )
        )
    return entries


def _require_unbound_callables(klass: type, tagged: tuple[TaggedAttribute, ...]) -> None:
    # Instance methods looked up on the class would be called without self.
    for item in tagged:
        raw = inspect.getattr_static(klass, item.attr_name)
        if not isinstance(raw, (staticmethod, classmethod)):
            raise InvalidRegistrationTargetError(
                f"{klass.__name__}.{item.attr_name} is an instance method; "
                f"register an instance of {klass.__name__} instead of the class."
            )


def is_entry_iterable(source: Any) -> bool:
    """True when ``source`` is a collection of entries rather than an object to scan."""
    return isinstance(source, Iterable) and not isinstance(
        source, (str, bytes, types.ModuleType, type)
    )


def collect_entries(
    source: Any,
    cache: Optional[DiscoveryCache] = None,
) -> list[CommandEntry]:
    """Turn any accepted command source into a list of ``CommandEntry`` values.

    Iterables (lists, tuples, generators, sets, dict views) must hold
    only ``CommandEntry`` values; modules, classes and other objects are
    scanned for ``@command`` markers.

    Raises:
        InvalidRegistrationTargetError: If ``source`` is None or a string,
            or an entry iterable holds something other than ``CommandEntry``.
    """
    if source is None:
        raise InvalidRegistrationTargetError("Command source cannot be None.")
    if isinstance(source, (str, bytes)):
        raise InvalidRegistrationTargetError(
            f"Command source cannot be a {type(source).__name__}."
        )
    if not is_entry_iterable(source):
        return discover_entries(source, cache)

    entries = list(source)
    for item in entries:
        if not isinstance(item, CommandEntry):
            raise InvalidRegistrationTargetError(
                "Command entry lists may only contain CommandEntry values, "
                f"got {type(item).__name__}."
            )
    return entries
