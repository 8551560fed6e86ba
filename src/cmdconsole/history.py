"""Bounded command history with an up/down recall cursor."""

from __future__ import annotations

from collections import deque
from pathlib import Path

from .constants import DEFAULT_HISTORY_SIZE


class CommandHistory:
    """Submitted lines, oldest first, with a recall cursor.

    The cursor sits one past the newest entry after each ``record``;
    ``previous`` walks toward older entries and ``next`` back toward the
    blank input line.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: deque[str] = deque(maxlen=max_size)
        self._cursor = 0

    def record(self, line: str) -> None:
        """Append a submitted line; blank lines and immediate repeats are skipped."""
        if line.strip() and (not self._entries or self._entries[-1] != line):
            self._entries.append(line)
        self._cursor = len(self._entries)

    def previous(self) -> str:
        """Move to the next-older entry and return it (stays at the oldest)."""
        if not self._entries:
            return ""
        if self._cursor > 0:
            self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> str:
        """Move to the next-newer entry; returns "" once past the newest."""
        if self._cursor < len(self._entries):
            self._cursor += 1
        if self._cursor >= len(self._entries):
            return ""
        return self._entries[self._cursor]

    def reset_cursor(self) -> None:
        self._cursor = len(self._entries)

    def entries(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)


def load_history(path: str, max_size: int = DEFAULT_HISTORY_SIZE) -> CommandHistory:
    """Load a history file (one entry per line); a missing file gives an empty history."""
    history = CommandHistory(max_size)
    history_path = Path(path)
    if not history_path.exists():
        return history
    with open(history_path, "r", encoding="utf-8") as f:
        for line in f:
            history.record(line.rstrip("\n"))
    return history


def save_history(history: CommandHistory, path: str) -> None:
    """Write history entries to ``path``, oldest first."""
    history_path = Path(path)
    history_path.parent.mkdir(parents=True, exist_ok=True)
    with open(history_path, "w", encoding="utf-8") as f:
        for entry in history.entries():
            f.write(entry + "\n")
