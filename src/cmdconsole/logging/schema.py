"""Event key ordering used by the structured log formatter."""

from __future__ import annotations

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts", "level"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle events
    "app_start": [
        "ts",
        "level",
        "version",
        "profile_file",
        "log_file",
        "history_file",
        "command_count",
    ],
    "app_stop": [
        "ts",
        "level",
        "reason",
        "uptime_ms",
        "error_type",
        "error",
    ],
    # Registry events
    "registry_built": [
        "ts",
        "level",
        "source_type",
        "command_count",
        "rejected_count",
        "cached",
    ],
    "command_duplicate": [
        "ts",
        "level",
        "command",
        "rejected_source",
        "existing_source",
    ],
    "command_invalid_name": [
        "ts",
        "level",
        "command",
        "source",
    ],
    # Dispatch events
    "command_exec": [
        "ts",
        "level",
        "command",
        "args_summary",
        "handler_kind",
        "elapsed_ms",
    ],
    "command_error": [
        "ts",
        "level",
        "command",
        "args_summary",
        "handler_kind",
        "elapsed_ms",
        "error_type",
        "error",
    ],
    "command_not_found": [
        "ts",
        "level",
        "command",
        "args_summary",
    ],
}

LOG_PATH_FIELDS: frozenset[str] = frozenset(
    {
        "profile_file",
        "log_file",
        "history_file",
        "logs_dir",
    }
)
