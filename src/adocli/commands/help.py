"""Usage text for ``ado help`` and for running ``ado`` without a command."""

from __future__ import annotations

from adocli.output import print_data

USAGE = """\
Usage: ado <command> [name=value ...] [--flag ...]

Any command that is not listed below is looked up in the operation catalog
and called as an Azure DevOps REST API operation.
  * Parameters are given as name=value (or name = value)
  * Flags are given as --flag or --flag=value
  * Commands are single words

Built-in commands:
  list-areas                        List the available areas
  list-commands [area]              List all operations, optionally within one area
  search-command <text> [area=x]    Search operation names
  show-command <name> [area=x]      Show details of every operation with this name
  auto-detect                       Show what is detected from the git remotes
  login [pat]                       Store a personal access token (or read it from STDIN)
  help                              Show this text

Flags:
  -h, --help                        Show this text
  -v, --verbose                     Print debug diagnostics to stderr
  --no-color                        Disable coloured output
  -p, --pretty                      Pretty-print the JSON response
  -s, --silent                      Print nothing on success
  -q, --query=<path>                Print only part of the response (JSONPath), e.g. $..displayName
  --what-if                         Print the request instead of sending it

Parameters available to every operation:
  area=<area>                       Area to search, when a name exists in several
  verb=<verb>                       HTTP verb, when a name exists with several verbs
  body=<json>                       Request body (may also be piped through STDIN)

Resolved from the environment, the config file or the git remote when omitted:
  organization=<organization>       Azure DevOps organization (ADOCLI_ORGANIZATION)
  project=<project>                 Azure DevOps project (ADOCLI_PROJECT)
  repository=<repository>           Azure DevOps repository

The bundled catalog holds a small selection of operations. Point ADOCLI_CATALOG
(or the "catalog" key of the config file) at a full catalog file to call any
other Azure DevOps REST operation.
"""


def show_help() -> None:
    """Print the usage text."""
    print_data(USAGE.rstrip("\n"))
