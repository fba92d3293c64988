"""Detect organization, project and repository from the current git checkout.

When ``organization=`` or ``project=`` is not given, the remotes of the
repository containing the working directory are matched against the URL
shapes Azure DevOps hands out for cloning::

    https://contoso@dev.azure.com/contoso/Fabrikam/_git/web
    https://dev.azure.com/contoso/Fabrikam/_git/web
    https://contoso.visualstudio.com/Fabrikam/_git/web
    git@ssh.dev.azure.com:v3/contoso/Fabrikam/web
    contoso@vs-ssh.visualstudio.com:v3/contoso/Fabrikam/web

Remotes are read with the ``git`` executable rather than a git library.
"""

from __future__ import annotations

import re
import subprocess
from typing import NamedTuple, Optional
from urllib.parse import unquote

from adocli.exceptions import ConfigError
from adocli.output import debug

REMOTE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p)
    for p in (
        r"^(?P<org>.+?)@.*\.visualstudio\.com:v3/(?P=org)/(?P<project>.+?)/(?P<repo>.+?)$",
        r"^git@.*\.dev\.azure\.com:v3/(?P<org>.+?)/(?P<project>.+?)/(?P<repo>.+?)$",
        r"^https://(?P<org>.+?)[.@].*?(visualstudio\.com|azure\.com/(?P=org))/(?P<project>.+?)/_git/(?P<repo>.+?)$",
        r"^https://dev\.azure\.com/(?P<org>[^/]+)/(?P<project>[^/]+)/_git/(?P<repo>[^/]+)$",
    )
)


class RemoteInfo(NamedTuple):
    """Organization, project and repository parsed from a remote URL."""

    organization: str
    project: str
    repository: str


def list_remotes(cwd: Optional[str] = None) -> list[str]:
    """Return the URLs of every remote of the enclosing git repository.

    Returns an empty list when ``git`` is unavailable, the directory is not
    inside a repository, or the repository has no remotes.
    """
    try:
        completed = subprocess.run(
            ["git", "config", "--get-regexp", r"^remote\..*\.url$"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        debug(f"Unable to run git: {exc}")
        return []

    if completed.returncode != 0:
        debug("No git repository or no remotes found")
        return []

    remotes = []
    for line in completed.stdout.splitlines():
        _, _, url = line.strip().partition(" ")
        if url:
            remotes.append(url.strip())
    debug(f"Found {len(remotes)} remote(s)")
    return remotes


def parse_remote(url: str) -> Optional[RemoteInfo]:
    """Match *url* against the known Azure DevOps remote shapes."""
    for pattern in REMOTE_PATTERNS:
        match = pattern.match(url)
        if match is None:
            continue
        info = RemoteInfo(
            organization=unquote(match.group("org")),
            project=unquote(match.group("project")),
            repository=unquote(match.group("repo")).removesuffix(".git"),
        )
        debug(
            f"Resolved configuration: Organization: {info.organization}. "
            f"Project: {info.project}. Repository: {info.repository}"
        )
        return info
    return None


def find_azure_devops_info(cwd: Optional[str] = None) -> RemoteInfo:
    """Resolve organization, project and repository from the git remotes.

    Raises:
        ConfigError: If there is no remote, or none looks like Azure DevOps.
    """
    debug("Attempting to resolve configuration from repository")
    remotes = list_remotes(cwd)
    if not remotes:
        raise ConfigError("Current directory is not a git repo or is missing a remote")

    for remote in remotes:
        info = parse_remote(remote)
        if info is not None:
            return info

    raise ConfigError(
        "Unable to resolve organization, project, and repository from remotes: "
        + ", ".join(remotes)
    )
