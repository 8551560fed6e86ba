"""Built-in console commands available in every session."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence

from .commands import CommandRegistry, command
from .errors import UsageError
from .history import CommandHistory


class BuiltinCommands:
    """Command source for the console's own commands.

    The registry is attached after construction because it is built
    from this object.
    """

    def __init__(
        self,
        write: Callable[[str], None] = print,
        history: Optional[CommandHistory] = None,
    ) -> None:
        self.write = write
        self.history = history
        self.registry: Optional[CommandRegistry] = None
        self.exit_requested = False

    def attach(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def _require_registry(self) -> CommandRegistry:
        if self.registry is None:
            raise RuntimeError("No command registry attached")
        return self.registry

    @command(help="Show available commands, or details for one command")
    def help(self, args: Sequence[str]) -> None:
        registry = self._require_registry()
        if len(args) > 1:
            raise UsageError("Usage: help [command]")

        if args:
            descriptor = registry.require(args[0])
            self.write(f"{descriptor.name} - {descriptor.help_text or '(no description)'}")
            return

        descriptors = sorted(registry.descriptors(), key=lambda d: d.name)
        width = max((len(d.name) for d in descriptors), default=0)
        lines = ["Available commands:"]
        for descriptor in descriptors:
            lines.append(f"  {descriptor.name.ljust(width)} - {descriptor.help_text}")
        self.write("\n".join(lines))

    @command("commands", help="List command names")
    def list_commands(self, args: Sequence[str]) -> None:
        if args:
            raise UsageError("Usage: commands")
        self.write(", ".join(sorted(self._require_registry().list_names())))

    @command(help="Print the arguments")
    def echo(self, args: Sequence[str]) -> None:
        self.write(" ".join(args))

    @command("history", help="Show previously submitted input")
    def show_history(self, args: Sequence[str]) -> None:
        if args:
            raise UsageError("Usage: history")
        if self.history is None or not len(self.history):
            self.write("(history is empty)")
            return
        for index, entry in enumerate(self.history.entries(), start=1):
            self.write(f"{index:>4}  {entry}")

    @command(help="Forget previously submitted input")
    def clear(self, args: Sequence[str]) -> None:
        if args:
            raise UsageError("Usage: clear")
        if self.history is not None:
            self.history.clear()
        self.write("History cleared")

    @command(help="Wait the given number of seconds")
    async def wait(self, args: Sequence[str]) -> None:
        if len(args) != 1:
            raise UsageError("Usage: wait <seconds>")
        try:
            seconds = float(args[0])
        except ValueError:
            raise UsageError(f"Invalid number of seconds: {args[0]}")
        if seconds < 0:
            raise UsageError("Seconds cannot be negative")
        await asyncio.sleep(seconds)
        self.write(f"Waited {seconds:g}s")

    @command("exit", help="Leave the console (Ctrl-D also works)")
    def exit_console(self, args: Sequence[str]) -> None:
        self.exit_requested = True

    @command("quit", help="Leave the console")
    def quit_console(self, args: Sequence[str]) -> None:
        self.exit_requested = True
