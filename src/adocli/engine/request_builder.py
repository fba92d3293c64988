"""Turn a resolved operation plus the user's parameters into a request.

:class:`RequestBuilder` walks the operation's declared parameters in a fixed
order -- query, path, header, body -- and drains each value from the
:class:`~adocli.arguments.ParsedArguments` it is given. Anything the user
typed that no declared parameter asked for stays behind, and the caller's
final :meth:`~adocli.arguments.ParsedArguments.ensure_all_read` reports it.

The result is an immutable :class:`~adocli.models.RequestDescriptor`; nothing
here touches the network.
"""

from __future__ import annotations

from typing import Optional, TextIO

from adocli.arguments import ParsedArguments, well_known
from adocli.engine.query import QueryBuilder
from adocli.exceptions import MissingBodyError, MissingParameterError, UnsupportedVerbError
from adocli.models import HTTPMethod, Operation, ParameterSpec, RequestDescriptor
from adocli.output import debug

# Whether each verb may carry a body. GET and DELETE never send one, even
# when the operation declares a body and one was read.
_ATTACHES_BODY: dict[HTTPMethod, bool] = {
    HTTPMethod.GET: False,
    HTTPMethod.DELETE: False,
    HTTPMethod.POST: True,
    HTTPMethod.PATCH: True,
    HTTPMethod.PUT: True,
}


class RequestBuilder:
    """Builds :class:`~adocli.models.RequestDescriptor` objects.

    Args:
        body_stream: Where to read a body from when the operation declares
            one and no ``body=`` parameter was given. Typically
            ``sys.stdin``; it is only read when it is not an interactive
            terminal.
    """

    def __init__(self, body_stream: Optional[TextIO] = None) -> None:
        self._body_stream = body_stream

    def build(self, operation: Operation, arguments: ParsedArguments) -> RequestDescriptor:
        """Build the request for *operation*, consuming *arguments*.

        Args:
            operation: The resolved catalog operation.
            arguments: Parsed command line; declared parameters are removed
                from it as they are used.

        Returns:
            The request descriptor.

        Raises:
            MissingParameterError: If a required query or header parameter,
                or any path parameter, was not given.
            MissingBodyError: If a body is declared but none was supplied.
            UnsupportedVerbError: If the operation's verb has no strategy.
        """
        attaches_body = _ATTACHES_BODY.get(operation.verb)
        if attaches_body is None:
            raise UnsupportedVerbError(
                f"No handler for {operation.verb} available ({operation.name})"
            )

        # api-version is always present and always rendered last.
        query = QueryBuilder()
        for spec in operation.parameters.query:
            query.add(spec.name, _take_optional(arguments, spec, "query"))
        query.add("api-version", operation.api_version)

        route = operation.url_template
        for spec in operation.parameters.path:
            value = _take_path_value(arguments, spec)
            route = route.replace(f"{{{spec.name}}}", value)

        url = f"https://{operation.host}{route}{query.to_string(prefix=True)}"

        headers: dict[str, str] = {}
        for spec in operation.parameters.header:
            value = _take_optional(arguments, spec, "header")
            if value is not None:
                headers[spec.name] = value

        body: Optional[str] = None
        if operation.parameters.body is not None:
            body = self._read_body(arguments)

        if not attaches_body and body is not None:
            debug(f"Dropping body, {operation.verb.value.upper()} requests never carry one")
            body = None

        return RequestDescriptor(verb=operation.verb, url=url, headers=headers, body=body)

    def _read_body(self, arguments: ParsedArguments) -> str:
        """Take the body from ``body=`` or, failing that, the body stream."""
        body = arguments.take_parameter(well_known.BODY)
        if body is not None:
            return body

        stream = self._body_stream
        if stream is not None and not _is_interactive(stream):
            debug("Reading request body from stdin")
            data = stream.read()
            if data.strip():
                return data

        raise MissingBodyError(
            "Method expects a body, but none was provided via the body parameter or STDIN"
        )


def _take_optional(
    arguments: ParsedArguments, spec: ParameterSpec, location: str
) -> Optional[str]:
    value = arguments.take_parameter(spec.name)
    if value is None and spec.required:
        raise MissingParameterError(
            f"Required {location} parameter '{spec.name}' missing", parameter=spec.name
        )
    return value


def _take_path_value(arguments: ParsedArguments, spec: ParameterSpec) -> str:
    value = arguments.take_parameter(spec.name)
    if value is not None:
        return value

    if spec.name == well_known.REPOSITORY_ID:
        value = arguments.take_parameter(well_known.REPOSITORY)
        if value is not None:
            return value

    raise MissingParameterError(
        f"Required path parameter '{spec.name}' missing", parameter=spec.name
    )


def _is_interactive(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
