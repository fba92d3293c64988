"""Response formatting bridge -- maps :class:`httpx.Response` to the output system.

After an HTTP call completes, :func:`emit_response` decodes the body,
optionally narrows it with a ``--query`` JSONPath expression and prints it
to stdout through :mod:`adocli.output`.

Query paths use the extended JSONPath dialect of ``jsonpath-ng``::

    $.value[0].name                       # one node
    value[*].name                         # every element's name, as a list
    $..displayName                        # recursive descent
    $.value[?(@.status == 'active')].title   # filter

A path that can only address one node (keys and single indices) prints that
node; any other path prints the list of every match.

See Also:
    :mod:`adocli.output` -- the output manager that renders data.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse
from jsonpath_ng.jsonpath import Child, Fields, Index, JSONPath, Root, This

from adocli.exceptions import InvalidUsageError
from adocli.output import debug, print_json


def parse_path(path: str) -> JSONPath:
    """Compile a ``--query`` path.

    Raises:
        InvalidUsageError: If the path is empty or cannot be parsed.
    """
    text = path.strip()
    if not text:
        raise InvalidUsageError("--query requires a JSONPath expression")
    try:
        return parse(text)
    except JSONPathError as exc:
        raise InvalidUsageError(f"Invalid query path '{path}': {exc}") from exc


def _is_singular(expr: JSONPath) -> bool:
    """Return ``True`` if *expr* can match at most one node."""
    if isinstance(expr, (Root, This)):
        return True
    if isinstance(expr, Fields):
        return len(expr.fields) == 1 and expr.fields[0] != "*"
    if isinstance(expr, Index):
        return len(getattr(expr, "indices", [None])) == 1
    if isinstance(expr, Child):
        return _is_singular(expr.left) and _is_singular(expr.right)
    return False


def select_path(data: Any, path: str) -> Any:
    """Return the node(s) of *data* addressed by *path*.

    A singular path yields its node, or ``None`` when it does not exist.
    Wildcards, slices, filters and recursive descent yield a list of every
    node that matched.
    """
    expr = parse_path(path)
    values = [match.value for match in expr.find(data)]
    if _is_singular(expr):
        return values[0] if values else None
    return values


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first. If that fails (e.g. the
    response is HTML or plain text), returns the raw text. Returns
    ``None`` for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text


def emit_response(
    response: httpx.Response,
    pretty: bool = False,
    query: Optional[str] = None,
    silent: bool = False,
) -> None:
    """Print an API response body to stdout.

    Args:
        response: The successful response.
        pretty: Indent JSON output.
        query: Optional path selecting part of a JSON body.
        silent: Print nothing at all.
    """
    if silent:
        debug("Silent mode, response body suppressed")
        return

    data = extract_response_data(response)
    if data is None:
        debug("Response has no content")
        return

    if query is not None:
        if isinstance(data, str):
            raise InvalidUsageError("--query can only be applied to a JSON response")
        data = select_path(data, query)

    print_json(data, pretty)
