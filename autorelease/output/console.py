"""Console output abstraction.

This module provides a protocol for console output that can be implemented
by different backends (Rich for terminals, GitHub Actions workflow commands
for CI logs, mock for testing). Services print through the protocol and never
depend on a specific library.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from .workflow import escape_data

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "ActionsConsole",
    "MockConsole",
    "OutputRecord",
    "group",
    "make_console",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # Green, positive message
    ERROR = auto()  # Red, error message
    WARNING = auto()  # Yellow, warning message
    INFO = auto()  # Cyan, informational
    DIM = auto()  # Dimmed/muted text
    HEADER = auto()  # Section (group) header

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output.

    Besides styled lines, a console can open and close a collapsible
    section (a "group" in GitHub Actions logs). Groups do not nest.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def start_group(self, title: str) -> None:
        """Open a section titled ``title``."""
        ...

    def end_group(self) -> None:
        """Close the current section."""
        ...


class RichConsole:
    """Console implementation using Rich library, for local terminals."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console()
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {escape_markup(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {escape_markup(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {escape_markup(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {escape_markup(message)}")

    def start_group(self, title: str) -> None:
        self._console.rule(f"[blue bold]{escape_markup(title)}[/blue bold]", align="left")

    def end_group(self) -> None:
        self._console.print()


class ActionsConsole:
    """Console implementation for GitHub Actions step logs.

    Plain lines are printed as-is; errors, warnings and groups are emitted as
    workflow commands so the runner renders annotations and folds sections.
    """

    def __init__(self) -> None:
        from rich.console import Console

        # Workflow commands must reach the log byte-for-byte.
        self._console = Console(markup=False, highlight=False, emoji=False, soft_wrap=True)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message)

    def success(self, message: str) -> None:
        self._console.print(message)

    def error(self, message: str) -> None:
        self._console.print(f"::error::{escape_data(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"::warning::{escape_data(message)}")

    def info(self, message: str) -> None:
        self._console.print(message)

    def start_group(self, title: str) -> None:
        self._console.print(f"::group::{escape_data(title)}")

    def end_group(self) -> None:
        self._console.print("::endgroup::")


def escape_markup(message: str) -> str:
    from rich.markup import escape

    return escape(message)


def make_console(*, in_actions: bool) -> ConsoleProtocol:
    """Pick the console backend for the current runner."""
    if in_actions:
        return ActionsConsole()
    return RichConsole()


@contextmanager
def group(console: ConsoleProtocol, title: str) -> Iterator[None]:
    """Wrap a block of output in a console group."""
    console.start_group(title)
    try:
        yield
    finally:
        console.end_group()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def start_group(self, title: str) -> None:
        self.outputs.append(OutputRecord(f"group: {title}", Style.HEADER))

    def end_group(self) -> None:
        self.outputs.append(OutputRecord("endgroup", Style.HEADER))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    @property
    def groups(self) -> list[str]:
        """Titles of all groups opened, in order."""
        prefix = "group: "
        return [
            o.message.removeprefix(prefix) for o in self.outputs if o.message.startswith(prefix)
        ]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
