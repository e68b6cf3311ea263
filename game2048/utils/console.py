"""Console design system - consistent styling for CLI output.

Color Palette:
- Gold: headers and the score
- Muted Red: errors
- Muted Green: success messages
- Bright Black: secondary information
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

if TYPE_CHECKING:
    from game2048.shared.exceptions import Game2048Exception

GOLD = "rgb(192,150,12)"
RED = "rgb(220,50,47)"
GREEN = "rgb(133,153,0)"
DIM = "bright_black"
YELLOW = "yellow"
TEXT = "bright_white"


class GameConsole:
    """Design system for game2048 CLI output."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the design system.

        Args:
            logger: Logger to check for log levels. If None, uses the root logger.
        """
        self._stdout_console = Console(stderr=False)
        self._stderr_console = Console(stderr=True)
        self._logger = logger or logging.getLogger()

    @property
    def console(self) -> Console:
        return self._stderr_console

    def header(self, title: str, icon: str = "🎲", stderr: bool = True) -> None:
        """Print a header panel with gold border."""
        console = self._stderr_console if stderr else self._stdout_console
        console.print(Panel.fit(f"{icon} [bold]{title}[/bold]", border_style=GOLD))

    def success(self, message: str, stderr: bool = True) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"[{GREEN}]✅ {message}[/{GREEN}]")

    def error(self, message: str, stderr: bool = True) -> None:
        """Print an error message, with the active traceback when debugging."""
        console = self._stderr_console if stderr else self._stdout_console
        tb = traceback.format_exc()
        if "NoneType: None" not in tb and self._logger.isEnabledFor(logging.DEBUG):
            console.print(f"[{RED} not bold]❌ {message}\n{tb}[/{RED} not bold]")
        else:
            console.print(f"[{RED} not bold]❌ {message}[/{RED} not bold]")

    def warning(self, message: str, stderr: bool = True) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"⚠️  [{YELLOW} not bold]{message}[/{YELLOW} not bold]")

    def info(self, message: str, stderr: bool = True) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"[{TEXT} not bold]{message}[/{TEXT} not bold]")

    def score(self, score: int, stderr: bool = False) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"[bold {GOLD}]Score:[/bold {GOLD}] {score}")

    def grid(self, text: str, stderr: bool = False) -> None:
        """Print a pre-formatted grid verbatim."""
        console = self._stderr_console if stderr else self._stdout_console
        console.print(text, markup=False, highlight=False)

    def command_example(self, command: str, stderr: bool = True) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"    [{DIM}]$[/{DIM}] [bold]{command}[/bold]")

    def hint(self, hint: str, stderr: bool = True) -> None:
        console = self._stderr_console if stderr else self._stdout_console
        console.print(f"[rgb(181,137,0)]💡 Hint: {hint}[/rgb(181,137,0)]")

    def render_exception(self, error: BaseException) -> None:
        """Render an exception, including structured hints for game2048 errors."""
        from game2048.shared.exceptions import Game2048Exception
        from game2048.shared.hints import render_hints

        self.error(str(error) or type(error).__name__)
        if isinstance(error, Game2048Exception):
            self._render_cause(error)
            render_hints(error.hints, design=self)

    def _render_cause(self, error: Game2048Exception) -> None:
        if error.__cause__ is not None:
            self._stderr_console.print(f"[{DIM}]Caused by: {error.__cause__!r}[/{DIM}]")


console = GameConsole()
