"""Narrow a command name down to exactly one catalog operation.

Resolution never guesses. Names are matched exactly (ignoring case), an
optional ``verb`` hint filters same-named operations, and whatever is still
ambiguous is reported back with every candidate so the user can add
``area=`` or ``verb=``.
"""

from __future__ import annotations

from typing import Optional

from adocli.catalog import Catalog
from adocli.exceptions import AmbiguousError, NotFoundError
from adocli.models import Operation, ResolvedOperation
from adocli.output import debug


class OperationResolver:
    """Resolves command names against a :class:`~adocli.catalog.Catalog`.

    Args:
        catalog: The catalog to search.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def resolve(
        self,
        name: str,
        area: Optional[str] = None,
        verb: Optional[str] = None,
    ) -> ResolvedOperation:
        """Find the one operation called *name*.

        Args:
            name: Operation name, matched case-insensitively.
            area: Restrict the search to this area.
            verb: Lowercase HTTP verb used to pick between same-named
                operations. Only consulted when more than one matched.

        Returns:
            The operation and the area it was found in.

        Raises:
            NotFoundError: If nothing matches (or the verb filter removes
                every match).
            AmbiguousError: If more than one operation remains.
        """
        debug(f"Attempting to find command '{name}' in {area or 'any area'}")

        matches = self._catalog.get_exact(name, area)
        debug(f"Lookup matched {len(matches)} command(s)")

        if not matches:
            where = f" in area '{area}'" if area else ""
            raise NotFoundError(f"Unable to find a command named '{name}'{where}")

        if len(matches) > 1 and verb is not None:
            debug("More than one command found, using the HTTP verb to disambiguate")
            filtered = [(a, op) for a, op in matches if op.verb.value == verb]
            if not filtered:
                raise NotFoundError(
                    f"No command named '{name}' uses verb '{verb}'. "
                    f"Available: {_describe_verbs(matches)}"
                )
            matches = filtered

        if len(matches) > 1:
            lines = [
                "Given input matched more than one command, "
                "try adding verb and/or area parameters to disambiguate"
            ]
            lines.extend(
                f"{match_area} - {operation.name} ({operation.verb.value.upper()})"
                for match_area, operation in matches
            )
            raise AmbiguousError("\n".join(lines), candidates=matches)

        match_area, operation = matches[0]
        debug(f"Command resolved to route {operation.url_template} in area {match_area}")
        return ResolvedOperation(area=match_area, operation=operation)


def _describe_verbs(matches: list[tuple[str, Operation]]) -> str:
    return ", ".join(sorted({op.verb.value for _, op in matches}))
