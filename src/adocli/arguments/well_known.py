"""Parameter names with a meaning of their own.

``organization`` and ``project`` may be filled in by auto-detection, so they
are exempt from the unread-parameter check in
:meth:`~adocli.arguments.parsed.ParsedArguments.ensure_all_read`.
"""

ORGANIZATION = "organization"
PROJECT = "project"
REPOSITORY = "repository"
AREA = "area"
VERB = "verb"
QUERY = "query"
BODY = "body"

# Path parameter that falls back to REPOSITORY when not given explicitly.
REPOSITORY_ID = "repositoryId"

AUTO_RESOLVED = (ORGANIZATION, PROJECT)
