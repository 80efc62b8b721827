"""Command handlers bound to the ``apper`` command tree.

Each handler prints its output through :func:`click.echo` and returns an
:class:`~apper.exit_codes.ExitCode`; the CLI adapter turns that value into the
process exit code. Handlers hold no state between invocations.
"""

from __future__ import annotations

from typing import Callable, Final

import rich_click as click

from .exit_codes import ExitCode
from .observability import log_debug

PROCEED_PROMPT: Final[str] = "Do you want to proceed?"
# Not valid JSON; emitted verbatim.
JSON_OUTPUT: Final[str] = "{'output':'Output in JSON'}"
TEXT_OUTPUT: Final[str] = "Output in text"


def ask_to_proceed(question: str = PROCEED_PROMPT) -> bool:
    """Ask a yes/no *question* on stdin, defaulting to no.

    End of input and interrupts at the prompt count as a "no".
    """

    try:
        return click.confirm(question, default=False)
    except click.Abort:
        click.echo()
        return False


def do_this(arg1: str, arg2: str, *, confirm: Callable[[str], bool] = ask_to_proceed) -> ExitCode:
    """Echo both arguments and run the work only after confirmation.

    Examples
    --------
    >>> do_this("a", "b", confirm=lambda _question: True)
    Doing this with arguments: a & b
    Doing this...
    <ExitCode.SUCCESS: 0>
    """

    click.echo(f"Doing this with arguments: {arg1} & {arg2}")
    if not confirm(PROCEED_PROMPT):
        log_debug("command_declined", command="do this")
        click.echo("Command cancelled.")
        return ExitCode.FAIL
    _do_this_work()
    return ExitCode.SUCCESS


def _do_this_work() -> None:
    click.echo("Doing this...")


def do_that(json_output: bool = False) -> ExitCode:
    """Print a notice followed by the text or the JSON-style payload."""

    click.echo("Doing that...")
    click.echo(JSON_OUTPUT if json_output else TEXT_OUTPUT)
    return ExitCode.SUCCESS


def list_commands() -> ExitCode:
    """Print the hard-coded list of ``do`` subcommands."""

    click.echo()
    click.echo("These are the available commands:")
    click.echo("this")
    click.echo("that")
    click.echo()
    return ExitCode.SUCCESS
