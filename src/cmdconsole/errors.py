"""Custom exception hierarchy for cmdconsole."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class InvalidRegistrationTargetError(TypeError, AppError):
    """A registry was built from a missing or unusable command source."""


class RegistrationError(ValueError, AppError):
    """One command entry could not be registered."""


class DuplicateCommandNameError(RegistrationError):
    """A command name collided with an earlier registration."""

    def __init__(self, name: str, rejected_source: str = "", existing_source: str = ""):
        self.name = name
        self.rejected_source = rejected_source
        self.existing_source = existing_source
        super().__init__(
            f"Duplicate command name detected: {name}. Command names must be unique."
        )


class InvalidCommandNameError(RegistrationError):
    """A command name is empty or cannot be typed as a single token."""

    def __init__(self, name: str, source: str = ""):
        self.name = name
        self.source = source
        super().__init__(f"Invalid command name: {name!r}")


class CommandNotFoundError(LookupError, AppError):
    """A command lookup failed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name}")


class UsageError(ValueError, AppError):
    """Command usage or user-input errors."""


class ConfigError(ValueError, AppError):
    """Profile/configuration validation errors."""
