"""Console output and workflow commands."""

from .console import (
    ActionsConsole,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
    group,
    make_console,
)

__all__ = [
    "ActionsConsole",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "group",
    "make_console",
]
