"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~adocli.exceptions.AdoError` subclass.
Shell wrappers can inspect the exit code to tell a typo in the invocation
apart from a rejected token or an unreachable server.

Example::

    $ ado list-pull-requests projet=Foo
    Error: Unexpected parameters: projet
    $ echo $?
    2   # EXIT_INVALID_USAGE
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The invocation could not be parsed, was ambiguous, or lacked a required parameter."""

EXIT_AUTH_FAILURE = 3
"""No personal access token is stored, or the server rejected it."""

EXIT_NOT_FOUND = 4
"""No catalog operation matched, or the remote resource does not exist (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CATALOG_ERROR = 7
"""The operation catalog could not be loaded or declares something unusable."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
