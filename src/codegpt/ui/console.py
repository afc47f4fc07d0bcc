"""Rich console output for the codegpt CLI."""

from __future__ import annotations

from contextlib import nullcontext
from typing import ContextManager

import click
from rich.console import Console
from rich.markup import escape


class CodegptConsole:
    """Status and error messages go to stderr; answers go to stdout."""

    def __init__(self):
        self.console = Console(stderr=True)

    def thinking(self, message: str = "Thinking...") -> ContextManager:
        """Show a spinner while waiting, when stderr is a terminal."""
        if not self.console.is_terminal:
            return nullcontext()
        return self.console.status(f"[bold cyan]{message}[/]", spinner="dots")

    def print_result(self, text: str):
        """Print the answer verbatim, followed by a newline."""
        # rich would strip carriage returns and interpret [markup]
        click.echo(text)

    def print_error(self, error: str, recoverable: bool = True):
        """Print an error message."""
        style = "yellow" if recoverable else "red"
        icon = "⚠" if recoverable else "✗"
        self.console.print(f"[{style}]{icon} {escape(error)}[/{style}]", highlight=False, soft_wrap=True)

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]", highlight=False, soft_wrap=True)
