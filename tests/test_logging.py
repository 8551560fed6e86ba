"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cmdconsole.commands import ExecutionFailed
from cmdconsole.logging import (
    EVENT_KEY_ORDER,
    StructuredTextFormatter,
    build_run_log_path,
    log_event,
    sanitize_error_message,
    setup_logging,
    summarize_command_args,
    summarize_text,
)


def _record(payload) -> logging.LogRecord:
    return logging.LogRecord(
        name="cmdconsole",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=json.dumps(payload),
        args=(),
        exc_info=None,
    )


def _formatted_keys(output: str) -> list[str]:
    keys: list[str] = []
    for line in output.splitlines():
        if line.startswith("==="):
            continue
        if ": " in line:
            key, _ = line.split(": ", 1)
            keys.append(key)
    return keys


def test_command_error_order_matches_schema_prefix() -> None:
    formatter = StructuredTextFormatter()
    payload = {
        "event": "command_error",
        "ts": "2026-02-24T00:00:00+00:00",
        "level": "ERROR",
        "command": "boom",
        "args_summary": "a b",
        "handler_kind": "sync",
        "elapsed_ms": 1.5,
        "error_type": "RuntimeError",
        "error": "kaboom",
        "zzz_extra": "z",
        "aaa_extra": "a",
    }

    output = formatter.format(_record(payload))
    keys = _formatted_keys(output)
    expected_prefix = EVENT_KEY_ORDER["command_error"]

    assert output.startswith("=== command_error ===")
    assert keys[: len(expected_prefix)] == expected_prefix
    assert keys[len(expected_prefix) :] == sorted(keys[len(expected_prefix) :])


def test_plain_messages_are_wrapped() -> None:
    formatter = StructuredTextFormatter()
    record = logging.LogRecord("other", logging.WARNING, __file__, 1, "plain %s", ("text",), None)

    output = formatter.format(record)

    assert output.startswith("=== other ===")
    assert "message: plain text" in output


def test_entries_are_separated_by_blank_line() -> None:
    formatter = StructuredTextFormatter()

    first = formatter.format(_record({"event": "a"}))
    second = formatter.format(_record({"event": "b"}))

    assert not first.startswith("\n")
    assert second.startswith("\n=== b ===")


def test_newlines_in_values_are_escaped() -> None:
    output = StructuredTextFormatter().format(_record({"event": "x", "error": "a\nb"}))

    assert "error: a\\nb" in output


def test_none_values_are_omitted() -> None:
    output = StructuredTextFormatter().format(_record({"event": "x", "error": None}))

    assert "error:" not in output


def test_log_event_emits_json_payload(caplog) -> None:
    with caplog.at_level(logging.INFO):
        log_event("command_exec", command="echo", args_summary="hi", extra=Path("/tmp/x"))

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "command_exec"
    assert payload["command"] == "echo"
    assert payload["extra"] == "/tmp/x"
    assert "ts" in payload


def test_log_event_level(caplog) -> None:
    with caplog.at_level(logging.INFO):
        log_event("command_duplicate", level=logging.WARNING, command="go")

    assert caplog.records[-1].levelno == logging.WARNING


def test_summaries() -> None:
    assert summarize_text("  a \n b  ") == "a b"
    assert summarize_text(None) == ""
    assert summarize_command_args([]) == ""
    assert summarize_command_args(["hello", "world"]) == "hello world"


def test_long_summaries_are_truncated() -> None:
    summary = summarize_command_args(["x" * 500])

    assert len(summary) == 200
    assert summary.endswith("...")


def test_log_event_flattens_outcomes(caplog) -> None:
    with caplog.at_level(logging.INFO):
        log_event("command_error", outcome=ExecutionFailed("boom", "kaboom", "RuntimeError"))

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["outcome"] == {
        "command": "boom",
        "message": "kaboom",
        "error_type": "RuntimeError",
        "kind": "execution_error",
    }


def test_sanitize_error_message() -> None:
    message = "failed with sk-abcdefghijklmnop and password=hunter2"

    sanitized = sanitize_error_message(message)

    assert "sk-abcdefghijklmnop" not in sanitized
    assert "hunter2" not in sanitized
    assert "password=[REDACTED]" in sanitized


def test_build_run_log_path_is_unique(tmp_path) -> None:
    first = build_run_log_path(str(tmp_path / "logs"))
    Path(first).touch()
    second = build_run_log_path(str(tmp_path / "logs"))

    assert first != second
    assert Path(first).name.startswith("cmdconsole_")
    assert second.endswith(".log")


def test_setup_logging_writes_structured_file(tmp_path) -> None:
    log_file = tmp_path / "run.log"

    setup_logging(str(log_file))
    log_event("registry_built", command_count=3)

    content = log_file.read_text(encoding="utf-8")
    assert "=== registry_built ===" in content
    assert "command_count: 3" in content


def test_setup_logging_without_file_disables_logging() -> None:
    setup_logging(None)

    assert logging.getLogger("cmdconsole").isEnabledFor(logging.CRITICAL) is False
