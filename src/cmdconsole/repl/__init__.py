"""Interactive console host built on prompt_toolkit."""

from .loop import console_loop

__all__ = ["console_loop"]
