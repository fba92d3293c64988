"""Catalog browsing commands -- examine the operations the CLI can call.

``list-areas``, ``list-commands``, ``search-command`` and ``show-command``
are read-only views over the loaded :class:`~adocli.catalog.Catalog`. They
never need an organization, a token or the network. Results go to stdout,
grouped by area in the order the catalog yields them.
"""

from __future__ import annotations

from itertools import groupby
from typing import Iterable

from adocli.arguments import ParsedArguments, well_known
from adocli.catalog import Catalog
from adocli.models import Operation
from adocli.output import print_data, suggest, warning


def list_areas(args: ParsedArguments, catalog: Catalog) -> None:
    """Print every area name, one per line."""
    args.ensure_all_read()
    for area in catalog.areas():
        print_data(area)


def list_commands(args: ParsedArguments, catalog: Catalog) -> None:
    """Print operation names grouped by area.

    An optional command after ``list-commands`` restricts the listing to one
    area::

        ado list-commands git
    """
    area = args.next_command()
    args.ensure_all_read()

    if area is not None and not catalog.has_area(area):
        warning(f"Unknown area '{area}'")
        suggest("Run 'ado list-areas' to see the available areas")
        return

    for area_name, operations in _grouped(catalog.operations(area)):
        print_data(area_name)
        for operation in operations:
            print_data(f"\t{operation.name}")


def search_command(args: ParsedArguments, catalog: Catalog) -> None:
    """Print operations whose name contains the search term.

    Each match is shown as ``name - VERB urlTemplate`` under its area.
    ``area=`` limits the search to one area.
    """
    fragment = args.get_command("Search term is missing")
    area = args.take_parameter(well_known.AREA)
    args.ensure_all_read()

    for area_name, operations in _grouped(catalog.find(fragment, area)):
        print_data(area_name)
        for operation in operations:
            print_data(
                f"\t{operation.name} - {operation.verb.value.upper()} {operation.url_template}"
            )


def show_command(args: ParsedArguments, catalog: Catalog) -> None:
    """Print the details of every operation with the given name."""
    name = args.get_command("Command name is missing")
    area = args.take_parameter(well_known.AREA)
    args.ensure_all_read()

    for area_name, operation in catalog.get_exact(name, area):
        for line in describe_operation(area_name, operation):
            print_data(line)


def describe_operation(area: str, operation: Operation) -> list[str]:
    """Render the ``show-command`` block for one operation.

    Required query parameters are marked with ``*``.
    """
    params = operation.parameters
    lines = [
        f"Operation: {operation.name}",
        f"Area: {area}",
        f"Method: {operation.verb.value.upper()}",
        f"URL template: {operation.url_template}",
        f"API version: {operation.api_version}",
    ]
    if operation.description:
        lines.append(f"Description: {operation.description}")
    lines.append("Parameters:")
    lines.append(f"  Body: {params.body.name if params.body else 'none'}")

    if params.query:
        width = max(len(spec.name) for spec in params.query)
        lines.append("  Query:")
        for spec in params.query:
            marker = " *" if spec.required else ""
            lines.append(f"    {spec.name.ljust(width)} - {spec.type or 'string'}{marker}")

    if params.path:
        lines.append("  Route:")
        lines.extend(f"    {spec.name}" for spec in params.path)

    if params.header:
        lines.append("  Header:")
        lines.extend(f"    {spec.name}" for spec in params.header)

    return lines


def _grouped(pairs: Iterable[tuple[str, Operation]]):  # noqa: ANN202
    return ((area, [op for _, op in group]) for area, group in groupby(pairs, key=lambda p: p[0]))
