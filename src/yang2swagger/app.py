"""Typer application and CLI entry point for yang2swagger.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``generate``, ``inspect``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a signal handler, invokes the Typer app and
maps :class:`~yang2swagger.exceptions.Yang2SwaggerError` to its exit code.

See Also:
    :mod:`yang2swagger.config`: Configuration precedence resolution.
    :mod:`yang2swagger.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from yang2swagger import __version__
from yang2swagger.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="yang2swagger",
    help="Generate Swagger 2.0 API documents from YANG-style schema trees.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from yang2swagger.commands.generate import generate_command  # noqa: E402
from yang2swagger.commands.inspect import inspect_app  # noqa: E402

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect schema documents and tag generators.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"yang2swagger {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool, no_color: bool) -> None:
    """Route library log records to stderr through Rich.

    ``WARNING`` by default, ``DEBUG`` with ``--verbose`` and ``ERROR`` with
    ``--quiet``. Replaces any handler installed by a previous invocation.
    """
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    logger = logging.getLogger("yang2swagger")
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output for tables and trees."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~yang2swagger.output.OutputManager` and
    the log handler from the CLI flags, and stores them in the Typer
    context for sub-commands.
    """
    from yang2swagger.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _configure_logging(verbose, quiet, output.no_color)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``yang2swagger`` console script.

    Unhandled :class:`~yang2swagger.exceptions.Yang2SwaggerError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    print an unexpected-error message and exit with the generic failure
    code (the traceback is shown with ``--verbose``).

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from yang2swagger.exceptions import Yang2SwaggerError
        from yang2swagger.output import error, get_output

        if isinstance(exc, Yang2SwaggerError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logging.getLogger(__name__).debug("Unhandled exception", exc_info=True)
        error(f"Unexpected error: {exc}")
        if not get_output().is_verbose:
            error("Run again with --verbose for details")
        sys.exit(EXIT_GENERIC_FAILURE)
