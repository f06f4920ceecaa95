"""Line-oriented console commands and their parsing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_SELECT = "select"
COMMAND_CLEAR = "clear"
COMMAND_ADD = "add"
COMMAND_DELETE = "delete"
COMMAND_DONE = "done"
COMMAND_LIST = "list"
COMMAND_IMPORT = "import"
COMMAND_STATUS = "status"
COMMAND_QUIT = "quit"

_NO_ARGUMENT: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_CLEAR,
        COMMAND_LIST,
        COMMAND_IMPORT,
        COMMAND_STATUS,
        COMMAND_QUIT,
    }
)
_REQUIRES_ARGUMENT: frozenset[str] = frozenset(
    {
        COMMAND_SELECT,
        COMMAND_ADD,
        COMMAND_DELETE,
        COMMAND_DONE,
    }
)
COMMAND_NAMES: frozenset[str] = _NO_ARGUMENT | _REQUIRES_ARGUMENT

_ALIASES: dict[str, str] = {
    "exit": COMMAND_QUIT,
    "ls": COMMAND_LIST,
    "rm": COMMAND_DELETE,
}


class CommandError(Exception):
    """Raised when a console line is not a valid command."""


@dataclass(frozen=True)
class Command:
    name: str
    argument: str = ""


@dataclass(frozen=True)
class CommandEvent:
    """Raw console line posted to the runtime queue."""
    line: str
    occurred_at: datetime


def parse_command(line: str) -> Optional[Command]:
    """Parse one console line; blank lines yield None."""
    text = line.strip()
    if not text:
        return None

    head, _, rest = text.partition(" ")
    name = head.lower()
    name = _ALIASES.get(name, name)
    argument = rest.strip()

    if name not in COMMAND_NAMES:
        raise CommandError(f"Unknown command: {head}")
    if name in _REQUIRES_ARGUMENT and not argument:
        raise CommandError(f"{name} needs an argument")
    if name in _NO_ARGUMENT and argument:
        raise CommandError(f"{name} takes no argument")
    return Command(name=name, argument=argument)
