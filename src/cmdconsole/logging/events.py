"""Structured event emission and logging helpers."""

from __future__ import annotations

import dataclasses
import itertools
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from ..constants import (
    APP_NAME,
    ARGS_SUMMARY_MAX_CHARS,
    DATETIME_FORMAT_FILENAME,
    LOG_FILE_EXTENSION,
)
from .formatter import StructuredTextFormatter
from .schema import LOG_PATH_FIELDS

logger = logging.getLogger(APP_NAME)


def _log_safe(value: Any) -> Any:
    """Reduce a field value to something ``json.dumps`` accepts."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        # Dispatch outcomes and diagnostics are frozen dataclasses.
        return {f.name: _log_safe(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_log_safe(v) for v in value]
    return str(value)


def _display_path(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        return value
    return str(Path(stripped).expanduser())


def summarize_text(text: Any, limit: Optional[int] = None) -> str:
    """Collapse whitespace; truncate to ``limit`` characters when given."""
    if text is None:
        return ""
    summary = " ".join(str(text).split())
    if limit is not None and len(summary) > limit:
        return summary[: max(limit - 3, 0)] + "..."
    return summary


def summarize_command_args(args: Sequence[str]) -> str:
    """One-line, bounded rendering of command arguments for logs."""
    if not args:
        return ""
    return summarize_text(" ".join(args), limit=ARGS_SUMMARY_MAX_CHARS)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event as one JSON message on the app logger."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in LOG_PATH_FIELDS and isinstance(value, str):
            payload[key] = _display_path(value)
        else:
            payload[key] = _log_safe(value)
    logger.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def build_run_log_path(logs_dir: str) -> str:
    """Return an unused per-run log file path inside ``logs_dir``."""
    directory = Path(logs_dir)
    directory.mkdir(parents=True, exist_ok=True)

    stem = f"{APP_NAME}_{datetime.now().strftime(DATETIME_FORMAT_FILENAME)}"
    candidates = itertools.chain(
        [directory / f"{stem}{LOG_FILE_EXTENSION}"],
        (directory / f"{stem}_{n}{LOG_FILE_EXTENSION}" for n in itertools.count(1)),
    )
    return str(next(path for path in candidates if not path.exists()))


def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO) -> None:
    """Route logging to ``log_file`` as structured text, or silence it.

    Without a log file every record is dropped; the console itself
    reports outcomes on stdout.
    """
    if not log_file:
        logging.disable(logging.CRITICAL)
        return

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(StructuredTextFormatter())

    logging.disable(logging.NOTSET)
    logging.basicConfig(level=level, handlers=[handler], force=True)
