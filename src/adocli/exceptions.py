"""Exception hierarchy for adocli.

All exceptions inherit from :class:`AdoError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`adocli.exit_codes`.
The top-level error handler in :func:`adocli.app.main` catches
``AdoError``, prints its message verbatim and exits with the matching code,
while unexpected exceptions produce a crash log and exit with
:data:`EXIT_GENERIC_FAILURE`.

Every error is terminal: nothing in the parse / resolve / build pipeline
retries or downgrades a failure to a warning.

Subclass hierarchy::

    AdoError (exit 1)
    +-- InvalidUsageError            (exit 2)
    |   +-- MalformedArgumentError
    |   +-- UnexpectedEndOfInputError
    |   +-- UnconsumedInputError
    |   +-- MissingParameterError
    |   +-- MissingBodyError
    |   +-- AmbiguousError
    +-- AuthError                    (exit 3)
    +-- NotFoundError                (exit 4)
    +-- ServerError                  (exit 5)
    +-- ConnectionError_             (exit 6)
    +-- CatalogError                 (exit 7)
    |   +-- UnsupportedVerbError
    +-- ConfigError                  (exit 1)
"""

from adocli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CATALOG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class AdoError(Exception):
    """Base exception for all adocli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`adocli.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(AdoError):
    """Raised for invalid command-line input."""

    exit_code = EXIT_INVALID_USAGE


class MalformedArgumentError(InvalidUsageError):
    """Raised when a dash or ``=`` appears where the grammar does not allow it."""


class UnexpectedEndOfInputError(InvalidUsageError):
    """Raised when a value was expected but the argument list ran out."""


class UnconsumedInputError(InvalidUsageError):
    """Raised when commands, parameters or flags are left over after a command ran.

    Attributes:
        leftovers: The names (or command tokens) that nobody consumed.
    """

    def __init__(self, message: str, leftovers: list[str] | None = None):
        super().__init__(message)
        self.leftovers = list(leftovers or [])


class MissingParameterError(InvalidUsageError):
    """Raised when a required parameter was not supplied.

    Attributes:
        parameter: Name of the missing parameter.
    """

    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter


class MissingBodyError(InvalidUsageError):
    """Raised when an operation expects a body and none was given."""


class AmbiguousError(InvalidUsageError):
    """Raised when more than one catalog operation survives disambiguation.

    Attributes:
        candidates: ``(area, operation)`` pairs that matched.
    """

    def __init__(self, message: str, candidates: list | None = None):
        super().__init__(message)
        self.candidates = list(candidates or [])


class AuthError(AdoError):
    """Raised when no credential is stored or the server rejects it."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(AdoError):
    """Raised when no catalog operation matches, or the API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(AdoError):
    """Raised when the API returns an error status."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(AdoError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class CatalogError(AdoError):
    """Raised when the operation catalog cannot be read or fails validation."""

    exit_code = EXIT_CATALOG_ERROR


class UnsupportedVerbError(CatalogError):
    """Raised when the catalog declares a verb that cannot be mapped to an HTTP method.

    This points at a corrupt catalog, not at user error.
    """


class ConfigError(AdoError):
    """Raised for configuration problems (invalid JSON, failed auto-detection)."""

    exit_code = EXIT_GENERIC_FAILURE
