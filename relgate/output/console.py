"""Console output abstraction.

Pipeline code writes through :class:`ConsoleProtocol` and never imports
rich directly. :class:`RichConsole` is used by the CLI; :class:`MockConsole`
captures output for tests.

Errors and hints go to stderr so ``relgate check-release > log`` still shows
why a release is blocked. Stage headers, successes and raw git output go to
stdout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    DIM = auto()
    HEADER = auto()
    HINT = auto()

    def __str__(self) -> str:
        return self.name.lower()


_STDERR_STYLES = frozenset({Style.ERROR, Style.HINT})


class ConsoleProtocol(Protocol):
    """Operator output for the release gate."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message verbatim (no markup interpretation)."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def hint(self, message: str) -> None:
        """Print a remediation hint under an error."""
        ...

    def header(self, message: str) -> None:
        """Announce a pipeline stage."""
        ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self) -> None:
        # Import Rich lazily to keep pipeline modules importable without it.
        from rich.console import Console
        from rich.markup import escape

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._escape = escape
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
            Style.HINT: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        target = self._err if style in _STDERR_STYLES else self._out
        rich_style = self._style_map.get(style, "")
        if rich_style:
            target.print(message, style=rich_style, markup=False)
        else:
            target.print(message, markup=False)

    def success(self, message: str) -> None:
        self._out.print(f"[green]OK[/green] {self._escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {self._escape(message)}")

    def hint(self, message: str) -> None:
        self._err.print(f"hint: {message}", style="dim", markup=False)

    def header(self, message: str) -> None:
        self._out.print(f"\n[blue bold]== {self._escape(message)}[/blue bold]")


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
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

    def hint(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"hint: {message}", Style.HINT))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def stages(self) -> list[str]:
        """Stage headers announced so far."""
        return [o.message for o in self.outputs if o.style == Style.HEADER]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def index_of(self, substring: str) -> int:
        """Position of the first output containing ``substring``, or -1."""
        for i, o in enumerate(self.outputs):
            if substring in o.message:
                return i
        return -1
