"""Commands dispatched from the first command token of ``ado``.

Every command receives the :class:`~adocli.arguments.ParsedArguments` with
its own name already consumed, plus whatever shared state it needs (the
catalog, the global config, stdin) passed explicitly by :mod:`adocli.app`.
"""

from adocli.commands.auto_detect import detect_remote
from adocli.commands.catalog import list_areas, list_commands, search_command, show_command
from adocli.commands.defaults import ensure_organization_and_project
from adocli.commands.help import show_help
from adocli.commands.invoke import invoke_operation
from adocli.commands.login import store_token

__all__ = [
    "detect_remote",
    "ensure_organization_and_project",
    "invoke_operation",
    "list_areas",
    "list_commands",
    "search_command",
    "show_command",
    "show_help",
    "store_token",
]
