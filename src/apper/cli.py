"""CLI adapter for ``apper`` built on ``rich_click`` and ``lib_cli_exit_tools``.

Purpose
-------
Register the sample command tree (``do this``, ``do that``, ``list``) and
translate each handler's :class:`~apper.exit_codes.ExitCode` into the process
exit code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command; wires traceback handling.
* :func:`cli_do` – branch command grouping ``this`` and ``that``.
* :func:`cli_do_this` / :func:`cli_do_that` / :func:`cli_list` – leaf commands.
* :func:`main` – entry point used by the ``apper`` console script.

System Role
-----------
Outermost layer. It calls the composition root (``load_settings``) and the
handlers in :mod:`apper.handlers` and owns the exit code strategy. Running the
root without a command prints help and succeeds, while ``do`` without a
subcommand prints help and fails.
"""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import load_settings
from .domain.errors import SettingsError
from .exit_codes import ExitCode
from .handlers import do_that, do_this, list_commands
from .observability import disable_console_logging, enable_console_logging, log_debug

PROG_NAME: Final[str] = "apper"
CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` from a source checkout."""

    try:
        return metadata.version(PROG_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="This is a sample Cli that showcases the possibilities of a Cli tool and various ways to interact with it.",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=PROG_NAME,
    message="apper version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--verbose/--no-verbose",
    is_flag=True,
    default=False,
    help="Log settings and dispatch events to stderr",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, verbose: bool) -> None:
    """Root command: wire traceback handling, then show help when no command is given.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``. Reads
        ``local.settings.json`` only when :func:`main` did not already pass
        the settings in through ``ctx.obj``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if verbose:
        enable_console_logging()
        ctx.call_on_close(disable_console_logging)

    if "settings" not in ctx.obj:
        ctx.obj["settings"] = load_settings()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(int(ExitCode.SUCCESS))
    log_debug("command_dispatched", command=ctx.invoked_subcommand)


@cli.group("do", context_settings=CLICK_CONTEXT_SETTINGS, invoke_without_command=True)
@click.pass_context
def cli_do(ctx: click.Context) -> None:
    """Do this or that."""

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(int(ExitCode.FAIL))


@cli_do.command("this", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("arg1")
@click.argument("arg2")
@click.pass_context
def cli_do_this(ctx: click.Context, arg1: str, arg2: str) -> None:
    """Do this."""

    _finish(ctx, do_this(arg1, arg2))


@cli_do.command("that", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--json", "json_output", is_flag=True, default=False, help="Json output format")
@click.pass_context
def cli_do_that(ctx: click.Context, json_output: bool) -> None:
    """Do that."""

    _finish(ctx, do_that(json_output))


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_list(ctx: click.Context) -> None:
    """List the available commands."""

    _finish(ctx, list_commands())


def _finish(ctx: click.Context, code: ExitCode) -> None:
    """Exit the Click context with the handler's *code*."""

    log_debug("command_finished", command=ctx.command_path, exit_code=int(code))
    ctx.exit(int(code))


def _dispatch(argv: Optional[Sequence[str]]) -> int:
    """Load settings, run the command tree, and return the exit code it produced.

    Settings are built before Click parses anything, so a malformed
    ``local.settings.json`` fails even ``--help`` and ``--version``. Usage
    errors and prompt aborts are rendered here and reported as
    :attr:`ExitCode.FAIL`.
    """

    settings = load_settings()
    try:
        result = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name=PROG_NAME,
            standalone_mode=False,
            obj={"settings": settings},
        )
    except click.ClickException as exc:
        exc.show()
        return int(ExitCode.FAIL)
    except click.Abort:
        click.echo("Aborted!", err=True)
        return int(ExitCode.FAIL)
    return int(result) if result is not None else int(ExitCode.SUCCESS)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Run :func:`_dispatch` instead of ``lib_cli_exit_tools.run_cli`` so handler exit codes reach the caller.

    Settings errors print one ``Error:`` line and return 1; anything else goes
    through the shared ``lib_cli_exit_tools`` printers.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return _dispatch(argv)
        except SettingsError as exc:
            click.echo(f"Error: {exc}", err=True)
            return int(ExitCode.FAIL)
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
