"""Typer application and CLI entry point for ccstatus.

This module wires the top-level Typer application: the root callback resolves
configuration, installs the output manager and logging, and stores shared
state in ``ctx.obj``; the ``service``, ``incident`` and ``config``
sub-commands read that state.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app, and
turns unexpected exceptions into a crash log under the data directory.

See Also:
    :mod:`ccstatus.config`: Settings resolution used by :func:`main_callback`.
    :mod:`ccstatus.output`: Output manager initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from ccstatus import __version__
from ccstatus.commands.config import config_app
from ccstatus.commands.incident import incident_command
from ccstatus.commands.service import service_command
from ccstatus.exceptions import CCStatusError
from ccstatus.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED

app = typer.Typer(
    name="ccstatus",
    help="Show service status and recent incidents from a Statuspage API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("service")(service_command)
app.command("incident")(incident_command)
app.add_typer(config_app, name="config", help="Configuration inspection.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"ccstatus {__version__}")
        raise typer.Exit()


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
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Read settings from this JSON file only."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the status API base URL."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves :class:`~ccstatus.models.Settings`, installs the global
    :class:`~ccstatus.output.OutputManager`, configures logging, and stores
    the settings in ``ctx.obj["settings"]``. A configuration error is fatal:
    it is reported and the process exits before any request is made.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output and logging.
        config_file: Explicit config file replacing the file search.
        base_url: Base URL override (highest precedence).
    """
    from ccstatus.config import load_settings
    from ccstatus.logging_setup import configure_logging
    from ccstatus.models import LogLevel
    from ccstatus.output import OutputFormat, OutputManager, error, set_output

    ctx.ensure_object(dict)

    overrides: dict[str, Any] = {}
    if base_url is not None:
        overrides["api"] = {"base_url": base_url}

    try:
        settings = load_settings(config_path=config_file, overrides=overrides)
    except CCStatusError as exc:
        set_output(OutputManager(no_color=no_color))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    fmt = OutputFormat(settings.output.format)
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(
        LogLevel.DEBUG if verbose else settings.log.level,
        log_file=settings.log.file,
        no_color=no_color,
    )

    ctx.obj["settings"] = settings


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from ccstatus.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text("".join(traceback.format_exception(exc)))
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``ccstatus`` console script.

    :class:`~ccstatus.exceptions.CCStatusError` instances that escape a
    command cause a clean exit with the error's ``exit_code``. All other
    exceptions produce a crash log and a generic failure exit.

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
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from ccstatus.output import error

        if isinstance(exc, CCStatusError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
