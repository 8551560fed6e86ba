"""Redaction of secrets from handler error text before it is logged or shown."""

import re

# Applied in order; each pattern replaces its match with the paired text.
_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(?:sk|pk|xai|pplx)-[A-Za-z0-9_-]{10,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-\.]{20,}"), "Bearer [REDACTED_TOKEN]"),
    (
        re.compile(r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
        "[REDACTED_JWT]",
    ),
    (
        re.compile(r"(?i)\b(password|passwd|secret|token|api_key)=\S+"),
        r"\1=[REDACTED]",
    ),
)


def sanitize_error_message(error_msg: str) -> str:
    """Return ``error_msg`` with API keys, tokens and credentials redacted."""
    sanitized = error_msg
    for pattern, replacement in _REDACTIONS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
