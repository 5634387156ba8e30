"""Helpers shared by the ``ccstatus`` sub-commands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

import typer

from ccstatus.exceptions import CCStatusError, FetchError, FetchErrorKind
from ccstatus.models import Settings
from ccstatus.output import error, suggest
from ccstatus.services import StatusService

logger = logging.getLogger(__name__)

CONNECTION_HINT = "Check your internet connection and try again."


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings resolved by the root callback."""
    return ctx.obj["settings"]


def open_service(ctx: typer.Context) -> StatusService:
    """Build a :class:`StatusService` from the invocation context.

    ``ctx.obj["transport"]``, when present, is handed to the fetch client;
    tests use it to inject an :class:`httpx.MockTransport`.
    """
    return StatusService.from_settings(get_settings(ctx), transport=ctx.obj.get("transport"))


@contextmanager
def command_errors(context: str) -> Iterator[None]:
    """Report a :class:`CCStatusError` on stderr and exit with its code.

    Args:
        context: What the command was doing, prefixed to the message.

    Raises:
        typer.Exit: With the error's ``exit_code``.
    """
    try:
        yield
    except CCStatusError as exc:
        logger.debug("%s", context, exc_info=True)
        error(f"{context}: {exc}")
        if isinstance(exc, FetchError) and exc.kind is FetchErrorKind.NETWORK:
            suggest(CONNECTION_HINT)
        raise typer.Exit(code=exc.exit_code) from exc


def format_timestamp(value: Optional[datetime], missing: str = "-") -> str:
    """Render *value* as ``YYYY-MM-DD HH:MM UTC``, or *missing* when ``None``."""
    if value is None:
        return missing
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%d %H:%M UTC")
