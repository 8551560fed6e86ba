"""Structured plaintext log formatter."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER


def _decode_payload(message: str) -> Optional[dict[str, Any]]:
    """Return the JSON object emitted by ``log_event``, if this is one."""
    if not (message.startswith("{") and message.endswith("}")):
        return None
    try:
        decoded = json.loads(message)
    except ValueError:
        return None
    return decoded if isinstance(decoded, dict) else None


def _render_value(value: Any) -> str:
    return str(value).replace("\n", "\\n")


def _field_order(event: str, fields: dict[str, Any]) -> list[str]:
    """Schema keys first (in schema order), then the rest alphabetically."""
    preferred = EVENT_KEY_ORDER.get(event, DEFAULT_EVENT_KEY_ORDER)
    present = {key for key, value in fields.items() if value is not None}
    head = [key for key in preferred if key in present]
    tail = sorted(present.difference(preferred))
    return head + tail


class StructuredTextFormatter(logging.Formatter):
    """Render records as ``=== event ===`` blocks of ``key: value`` lines.

    Records produced by ``log_event`` are expanded field by field; any
    other record becomes an event named after its logger with a
    ``message`` field. Consecutive blocks are separated by one blank line.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._emitted = False

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        fields: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        payload = _decode_payload(message)
        if payload is not None:
            fields.update(payload)
        else:
            fields["message"] = message

        event = str(fields.pop("event", record.name))
        lines = [f"=== {event} ==="]
        lines.extend(f"{key}: {_render_value(fields[key])}" for key in _field_order(event, fields))
        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        block = "\n".join(lines)
        if self._emitted:
            return "\n" + block
        self._emitted = True
        return block
