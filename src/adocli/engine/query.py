"""Query-string accumulation with percent-encoding."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from adocli.output import debug


class QueryBuilder:
    """Collects ``name=value`` pairs in insertion order.

    ``None`` values are dropped instead of being emitted as ``name=``. Values
    are percent-encoded, names are used as-is.

    Example::

        qs = QueryBuilder().add("searchCriteria.status", "active")
        qs.add("api-version", "7.1")
        qs.to_string(prefix=True)  # '?searchCriteria.status=active&api-version=7.1'
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def add(self, name: str, value: Any) -> QueryBuilder:
        if value is None:
            return self
        debug(f"Adding query parameter: {name}={value}")
        self._pairs.append((name, str(value)))
        return self

    def to_string(self, prefix: bool = False) -> str:
        """Render the query string, with a leading ``?`` if *prefix* and non-empty."""
        qs = "&".join(f"{name}={quote(value, safe='')}" for name, value in self._pairs)
        if prefix and qs:
            return "?" + qs
        return qs
