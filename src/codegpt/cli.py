"""
codegpt CLI - one prompt, one answer.

Usage:
    codegpt write "a function that adds two numbers" --lang python
    codegpt refactor "$(cat main.go)" --lang go
    codegpt explain "$(cat lib.rs)" --lang rust --comment
    codegpt walkthrough "$(cat app.js)" -l javascript
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

import click

from codegpt import __version__
from codegpt.client import CompletionClient, extract_text
from codegpt.core import (
    Action,
    Invocation,
    double_newlines,
    format_as_comment,
    load_settings,
    wrap_for_display,
)
from codegpt.core.config import (
    API_KEY_ENV,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    ENDPOINT_ENV,
)
from codegpt.exceptions import CodegptError, ConfigError
from codegpt.ui import CodegptConsole

logger = logging.getLogger(__name__)


class _ClickHandler(logging.Handler):
    """Send log records to whatever stderr click currently writes to."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("codegpt")
    if not any(isinstance(h, _ClickHandler) for h in package_logger.handlers):
        handler = _ClickHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def request_options(func: Callable) -> Callable:
    """Options shared by every action subcommand."""
    options = [
        click.option("--lang", "-l", required=True, help="Target language, e.g. python or rust"),
        click.option(
            "--api-key",
            envvar=API_KEY_ENV,
            show_envvar=True,
            help="API key sent as a bearer token",
        ),
        click.option(
            "--model", "-m",
            default=None,
            help=f"Model name (default: {DEFAULT_MODEL}; accepted but not sent)",
        ),
        click.option(
            "--max-tokens", "-t",
            type=int,
            default=None,
            help=f"Token limit (default: {DEFAULT_MAX_TOKENS}; accepted but not sent)",
        ),
        click.option(
            "--endpoint",
            envvar=ENDPOINT_ENV,
            show_envvar=True,
            help="Chat-completion endpoint URL",
        ),
        click.option("--timeout", type=float, default=None, help="Request timeout in seconds (default: 300)"),
        click.option("--comment", is_flag=True, help="Render the answer as comments in --lang"),
        click.option(
            "--double-newlines",
            "extra_newlines",
            is_flag=True,
            help="Add an extra line break to every line (for editor buffers)",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable debug logging"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="codegpt")
def cli():
    """
    Ask a chat-completion API to write, refactor or explain code.

    The API key is read from --api-key, $OPENAI_API_KEY or
    ~/.codegpt/config.json, in that order.
    """


def run_action(
    action: Action,
    text: str,
    lang: str,
    api_key: Optional[str],
    model: Optional[str],
    max_tokens: Optional[int],
    endpoint: Optional[str],
    timeout: Optional[float],
    comment: bool,
    extra_newlines: bool,
    verbose: bool,
) -> None:
    """Build the prompt, send it and print the answer."""
    _configure_logging(verbose)
    ui = CodegptConsole()

    try:
        settings = load_settings(
            api_key=api_key,
            endpoint=endpoint,
            model=model,
            max_tokens=max_tokens,
            timeout=timeout,
        )
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    invocation = Invocation(action=action, body=text, lang=lang, settings=settings)
    logger.debug(f"Action {action.value} for {lang} via {settings.endpoint}")

    try:
        client = CompletionClient.from_settings(settings)
        with ui.thinking():
            body = client.complete(invocation.prompt())
        answer = extract_text(body)
    except CodegptError as e:
        ui.print_error(str(e), recoverable=False)
        sys.exit(1)

    if not answer:
        ui.print_warning("The API returned no completion text")

    ui.print_result(render_answer(invocation, answer, comment, extra_newlines))


def render_answer(
    invocation: Invocation,
    answer: str,
    comment: bool = False,
    extra_newlines: bool = False,
) -> str:
    """Apply the display formatting for the invocation's action."""
    if invocation.action.wraps_output:
        answer = wrap_for_display(answer)
    if comment:
        answer = format_as_comment(answer, invocation.lang)
    if extra_newlines:
        answer = double_newlines(answer)
    return answer


def _action_command(action: Action, help_text: str, metavar: str) -> click.Command:
    @request_options
    @click.argument("text", metavar=metavar)
    def command(text: str, **options):
        run_action(action, text, **options)

    command.__doc__ = help_text
    return cli.command(name=action.value)(command)


write = _action_command(
    Action.WRITE,
    "Write code in --lang from a description.\n\n"
    "    codegpt write \"a function that adds two numbers\" -l python",
    "PROMPT",
)
refactor = _action_command(
    Action.REFACTOR,
    "Refactor a piece of --lang code.",
    "CODE",
)
explain = _action_command(
    Action.EXPLAIN,
    "Explain what a piece of --lang code does.",
    "CODE",
)
walkthrough = _action_command(
    Action.WALKTHROUGH,
    "Walk through a piece of --lang code step by step.",
    "CODE",
)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
