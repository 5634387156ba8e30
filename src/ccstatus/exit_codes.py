"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ccstatus.exceptions.CCStatusError` subclass.
Shell wrappers and status-bar scripts can inspect the exit code to tell a
network outage from a misconfiguration without parsing stderr.

Example::

    $ ccstatus service
    $ echo $?
    6   # EXIT_CONNECTION_ERROR -- the status API could not be reached
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""The configuration file or environment contained invalid settings."""

EXIT_NOT_FOUND = 4
"""The status API returned HTTP 404 for the requested resource."""

EXIT_HTTP_ERROR = 5
"""The status API returned a non-success HTTP status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""The status API answered with a body that does not match the expected payload."""

EXIT_INTERRUPTED = 130
"""The user cancelled the command with Ctrl-C."""
