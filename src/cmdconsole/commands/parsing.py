"""Tokenizing of raw console input."""

from __future__ import annotations

from typing import Optional

from .types import ParsedInput


def is_blank(text: Optional[str]) -> bool:
    """Return True for None, empty or all-whitespace input."""
    return text is None or not text.strip()


def tokenize(text: Optional[str]) -> ParsedInput:
    """Split input on whitespace into a command name and argument tokens.

    The command name is lower-cased; arguments keep their original case
    and order. Input without tokens yields an empty command name.

    Examples:
        "Echo  hello world" -> ParsedInput("echo", ("hello", "world"))
        "   "               -> ParsedInput("", ())
    """
    if text is None:
        return ParsedInput("")
    segments = text.split()
    if not segments:
        return ParsedInput("")
    return ParsedInput(segments[0].lower(), tuple(segments[1:]))


def first_token(text: Optional[str]) -> str:
    """Return the first whitespace-delimited token, or an empty string."""
    if text is None:
        return ""
    segments = text.split(None, 1)
    return segments[0] if segments else ""
