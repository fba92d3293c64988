"""Show what git auto-detection resolves for the current directory."""

from __future__ import annotations

from adocli.arguments import ParsedArguments
from adocli.exceptions import ConfigError
from adocli.git import list_remotes, parse_remote
from adocli.output import info, print_data


def detect_remote(args: ParsedArguments) -> None:
    """Print the remotes and the organization, project and repository found in them.

    Raises:
        ConfigError: If there is no remote, or none can be parsed.
    """
    args.ensure_all_read()
    info("Performing auto-detect")

    remotes = list_remotes()
    if not remotes:
        raise ConfigError("Unable to resolve remote")
    print_data(f"Remote: {', '.join(remotes)}")

    for remote in remotes:
        detected = parse_remote(remote)
        if detected is not None:
            print_data(f"Organization: {detected.organization}")
            print_data(f"Project: {detected.project}")
            print_data(f"Repository: {detected.repository}")
            return

    raise ConfigError("Unable to resolve organization, project, and repository")
