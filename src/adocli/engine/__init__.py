"""Operation resolution and request construction.

Typical usage::

    from adocli.engine import OperationResolver, RequestBuilder

    resolved = OperationResolver(catalog).resolve("list-pull-requests")
    request = RequestBuilder(body_stream=sys.stdin).build(resolved.operation, args)

Sub-modules:

* :mod:`~adocli.engine.resolver` -- exact-name lookup and verb
  disambiguation.
* :mod:`~adocli.engine.request_builder` -- path substitution, query
  string, headers and body.
* :mod:`~adocli.engine.query` -- the percent-encoding query accumulator.
"""

from adocli.engine.query import QueryBuilder
from adocli.engine.request_builder import RequestBuilder
from adocli.engine.resolver import OperationResolver

__all__ = ["OperationResolver", "QueryBuilder", "RequestBuilder"]
