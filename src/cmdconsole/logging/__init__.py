"""Structured logging primitives for cmdconsole."""

from .events import (
    build_run_log_path,
    log_event,
    setup_logging,
    summarize_command_args,
    summarize_text,
)
from .formatter import StructuredTextFormatter
from .sanitization import sanitize_error_message
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER, LOG_PATH_FIELDS

__all__ = [
    "DEFAULT_EVENT_KEY_ORDER",
    "EVENT_KEY_ORDER",
    "LOG_PATH_FIELDS",
    "StructuredTextFormatter",
    "build_run_log_path",
    "log_event",
    "sanitize_error_message",
    "setup_logging",
    "summarize_command_args",
    "summarize_text",
]
