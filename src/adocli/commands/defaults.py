"""Fill in ``organization`` / ``project`` before a command needs them."""

from __future__ import annotations

from adocli.arguments import ParsedArguments, well_known
from adocli.config import resolve_defaults
from adocli.exceptions import ConfigError
from adocli.git import find_azure_devops_info
from adocli.models import GlobalConfig
from adocli.output import debug


def ensure_organization_and_project(args: ParsedArguments, config: GlobalConfig) -> bool:
    """Make sure ``organization`` and ``project`` are set on *args*.

    Explicit parameters win. Missing values come from the environment or
    the config file, and whatever is still missing after that from the
    remotes of the current git repository. When git was consulted and no
    ``repository=`` was given, the detected repository is set as well.

    Returns:
        ``True`` if ``repository`` was filled in from git, so the caller can
        discard it when the operation did not use it.

    Raises:
        ConfigError: If git auto-detection was needed and failed.
    """
    organization, project = resolve_defaults(config)
    if not args.has_parameter(well_known.ORGANIZATION) and organization:
        debug(f"Using default organization {organization}")
        args.set_parameter(well_known.ORGANIZATION, organization)
    if not args.has_parameter(well_known.PROJECT) and project:
        debug(f"Using default project {project}")
        args.set_parameter(well_known.PROJECT, project)

    if args.has_parameter(well_known.ORGANIZATION) and args.has_parameter(well_known.PROJECT):
        return False

    try:
        info = find_azure_devops_info()
    except ConfigError as exc:
        raise ConfigError(
            "Failed to resolve Azure DevOps remote information, and organization "
            f"and/or project was not specified in parameters ({exc})"
        ) from exc

    if not args.has_parameter(well_known.ORGANIZATION):
        args.set_parameter(well_known.ORGANIZATION, info.organization)
    if not args.has_parameter(well_known.PROJECT):
        args.set_parameter(well_known.PROJECT, info.project)
    if args.has_parameter(well_known.REPOSITORY):
        return False
    args.set_parameter(well_known.REPOSITORY, info.repository)
    return True
