"""Console profile: JSON settings file, validation and path mapping."""

from __future__ import annotations

import json
import unicodedata
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Callable, Optional

from .constants import (
    DEFAULT_HISTORY_FILE,
    DEFAULT_HISTORY_SIZE,
    DEFAULT_LOGS_DIR,
    DEFAULT_PROMPT,
)
from .errors import ConfigError

_PATH_FIELDS = ("history_file", "logs_dir")


@dataclass(slots=True, frozen=True)
class ConsoleProfile:
    """Validated console settings; path fields are absolute once loaded."""

    prompt: str = DEFAULT_PROMPT
    history_size: int = DEFAULT_HISTORY_SIZE
    history_file: Optional[str] = None
    logs_dir: Optional[str] = None
    completion: bool = True

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ConsoleProfile":
        return cls(**raw)

    def with_paths_mapped(self, profile_dir: str) -> "ConsoleProfile":
        """Return a copy whose path fields are resolved against ``profile_dir``."""
        mapped = {
            name: map_path(value, profile_dir)
            for name in _PATH_FIELDS
            if (value := getattr(self, name))
        }
        return replace(self, **mapped)


def _app_root() -> Path:
    return Path(__file__).resolve().parent


def map_path(path: str, profile_dir: Optional[str] = None) -> str:
    """Turn a profile path into an absolute path string.

    ``~``-prefixed paths expand to the home directory and ``@``-prefixed
    paths to the installed package directory. Relative paths are only
    accepted when ``profile_dir`` is given.
    """
    text = unicodedata.normalize("NFC", path)
    if "\0" in text:
        raise ConfigError("Path cannot contain NUL bytes")

    if text.startswith("@"):
        rest = text[1:].replace("\\", "/").strip("/")
        return str((_app_root() / rest).resolve())

    candidate = Path(text).expanduser()
    if candidate.is_absolute():
        return str(candidate.resolve())
    if profile_dir is None:
        raise ConfigError(
            "Relative profile paths are not supported. "
            "Use an absolute path or start with '~/' or '@/'."
        )
    return str((Path(profile_dir) / candidate).resolve())


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_path_or_null(value: Any) -> bool:
    return value is None or (isinstance(value, str) and bool(value.strip()))


_FIELD_CHECKS: dict[str, tuple[Callable[[Any], bool], str]] = {
    "prompt": (lambda v: isinstance(v, str), "a string"),
    "history_size": (_is_positive_int, "a positive integer"),
    "history_file": (_is_path_or_null, "a non-empty string or null"),
    "logs_dir": (_is_path_or_null, "a non-empty string or null"),
    "completion": (lambda v: isinstance(v, bool), "a boolean"),
}


def validate_profile(profile: Any) -> None:
    """Raise ``ConfigError`` unless ``profile`` is a valid settings object.

    Every field is optional; unknown fields are rejected so typos do not
    silently fall back to defaults.
    """
    if not isinstance(profile, dict):
        raise ConfigError("Profile must be a JSON object")

    unknown = sorted(set(profile) - set(_FIELD_CHECKS))
    if unknown:
        raise ConfigError(f"Unknown profile fields: {', '.join(unknown)}")

    for name, value in profile.items():
        check, expected = _FIELD_CHECKS[name]
        if not check(value):
            raise ConfigError(f"{name} must be {expected}")


def load_profile(path: str) -> ConsoleProfile:
    """Read, validate and path-map the profile at ``path``.

    Raises:
        FileNotFoundError: If the profile does not exist
        ConfigError: If the file is not valid JSON or fails validation
    """
    profile_path = Path(map_path(path))
    if not profile_path.is_file():
        raise FileNotFoundError(
            f"Profile not found: {profile_path}\n"
            "Use 'init' command to create a profile"
        )

    try:
        raw = json.loads(profile_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in profile {profile_path}: {e}") from e

    validate_profile(raw)
    return ConsoleProfile.from_dict(raw).with_paths_mapped(str(profile_path.parent))


def create_profile(path: str) -> tuple[ConsoleProfile, list[str]]:
    """Write a default profile to ``path``; refuses to overwrite.

    Returns the loaded profile and status lines for display.
    """
    profile_path = Path(map_path(path))
    if profile_path.exists():
        raise ConfigError(f"Profile already exists: {profile_path}")

    defaults = ConsoleProfile(
        history_file=DEFAULT_HISTORY_FILE,
        logs_dir=DEFAULT_LOGS_DIR,
    )
    profile_path.parent.mkdir(parents=True, exist_ok=True)
    profile_path.write_text(
        json.dumps(asdict(defaults), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )

    created = defaults.with_paths_mapped(str(profile_path.parent))
    return created, [
        f"Profile created: {profile_path}",
        f"History file:    {created.history_file}",
        f"Logs directory:  {created.logs_dir}",
    ]
