"""Console output abstraction.

Release steps report progress and dry-run traces through ConsoleProtocol
so they never depend on Rich directly. RichConsole is the production
backend; MockConsole captures output for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "DEBUG_PREFIX",
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "format_debug",
]

DEBUG_PREFIX = "[relfin]"


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    DEBUG = auto()

    def __str__(self) -> str:
        return self.name.lower()


def format_debug(label: str, data: object = None) -> str:
    """Render a debug line: prefix, label and pretty-printed data."""
    if data is None:
        return f"{DEBUG_PREFIX} {label}"

    from rich.pretty import pretty_repr

    return f"{DEBUG_PREFIX} {label} {pretty_repr(data)}"


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    @property
    def silent(self) -> bool:
        """True when debug output is suppressed."""
        ...

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, label: str, data: object = None) -> None:
        """Pretty-print diagnostic data unless silent.

        Args:
            label: Short description printed after the prefix.
            data: Optional value, rendered with Rich's pretty printer.
        """
        ...


class RichConsole:
    """Console implementation using the Rich library.

    Regular messages go to stdout, debug traces and warnings to stderr so
    they do not mix with output a build host may parse.
    """

    def __init__(self, *, silent: bool = False) -> None:
        from rich.console import Console
        from rich.markup import escape

        self._escape = escape
        self._silent = silent
        self._console = Console()
        self._err_console = Console(stderr=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.DEBUG: "magenta",
        }

    @property
    def silent(self) -> bool:
        return self._silent

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False, highlight=False)
        else:
            self._console.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {self._escape(message)}")

    def error(self, message: str) -> None:
        self._err_console.print(f"[red bold]error:[/red bold] {self._escape(message)}")

    def warning(self, message: str) -> None:
        self._err_console.print(f"[yellow]warning:[/yellow] {self._escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {self._escape(message)}")

    def debug(self, label: str, data: object = None) -> None:
        if self._silent:
            return
        self._err_console.print(format_debug(label, data), style="magenta", markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    is_silent: bool = False

    @property
    def silent(self) -> bool:
        return self.is_silent

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

    def debug(self, label: str, data: object = None) -> None:
        if self.is_silent:
            return
        self.outputs.append(OutputRecord(format_debug(label, data), Style.DEBUG))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
