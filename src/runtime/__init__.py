"""Runtime engine exports."""

from .commands import Command, CommandError, CommandEvent, parse_command
from .dispatch import CommandDispatcher, CommandResult
from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from .ticks import RepeatingTicker, TickEvent

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandError",
    "CommandEvent",
    "CommandResult",
    "RepeatingTicker",
    "RuntimeBootstrap",
    "RuntimeEngine",
    "RuntimeHooks",
    "TickEvent",
    "parse_command",
]
