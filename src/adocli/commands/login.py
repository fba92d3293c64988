"""Store a personal access token for an organization.

Usage::

    ado login <pat> organization=contoso project=Fabrikam
    echo $PAT | ado login            # organization detected from git

The token is encoded for HTTP Basic auth and written to the credential
store; see :class:`~adocli.auth.CredentialStore`.
"""

from __future__ import annotations

from typing import Optional, TextIO

from adocli.arguments import ParsedArguments, well_known
from adocli.auth import CredentialStore
from adocli.commands.defaults import ensure_organization_and_project
from adocli.exceptions import InvalidUsageError
from adocli.models import GlobalConfig
from adocli.output import success


def store_token(args: ParsedArguments, config: GlobalConfig, stdin: Optional[TextIO] = None) -> None:
    """Save the token given as a command, or read from *stdin*.

    Raises:
        InvalidUsageError: If no token was supplied.
    """
    repository_detected = ensure_organization_and_project(args, config)
    organization = args.get_parameter(well_known.ORGANIZATION)
    if repository_detected:
        args.take_parameter(well_known.REPOSITORY)

    pat = args.next_command()
    if pat is None and stdin is not None and not stdin.isatty():
        pat = stdin.read()
    pat = (pat or "").strip()

    args.ensure_all_read()

    if not pat:
        raise InvalidUsageError("No personal access token given, pass it as an argument or via STDIN")

    CredentialStore(organization).save_pat(pat)
    success(f"Personal access token for organization '{organization}' stored")
