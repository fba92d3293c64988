"""Typer application and CLI entry point for adocli.

``ado`` has a grammar of its own (``name=value`` parameters, bare commands,
``--flags`` anywhere), so the Typer app declares a single command whose
:class:`RawArgumentsCommand` hands every token to
:func:`~adocli.arguments.parse_arguments` untouched instead of letting
click interpret them.

:func:`run_command` then installs the output manager, loads the config and
(when needed) the catalog once, and dispatches on the first command token.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`adocli.commands`: The commands dispatched from here.
    :mod:`adocli.output`: Output formatting initialised in :func:`run_command`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional, TextIO

import typer
from typer.core import TyperCommand

from adocli.arguments import ParsedArguments, parse_arguments
from adocli.catalog import Catalog, load_catalog
from adocli.config import load_global_config, resolve_catalog_source
from adocli.exceptions import AdoError
from adocli.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from adocli.models import GlobalConfig
from adocli.output import OutputManager, debug, error, set_output

RAW_ARGUMENTS = "adocli.raw_arguments"


class RawArgumentsCommand(TyperCommand):
    """A command that keeps its arguments to itself.

    The tokens are stored in ``ctx.meta`` and click parses an empty list,
    so neither ``--`` nor ``--help`` nor ``name=value`` is touched.
    """

    def parse_args(self, ctx: Any, args: list[str]) -> list[str]:  # noqa: ANN401
        ctx.meta[RAW_ARGUMENTS] = list(args)
        return super().parse_args(ctx, [])


app = typer.Typer(
    name="ado",
    help="Call Azure DevOps REST API operations from the command line.",
    add_completion=False,
)


@app.command(cls=RawArgumentsCommand)
def ado(ctx: typer.Context) -> None:
    """Call Azure DevOps REST API operations. Run ``ado help`` for usage."""
    try:
        run_command(ctx.meta.get(RAW_ARGUMENTS, []), stdin=sys.stdin)
    except AdoError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def run_command(tokens: list[str], stdin: Optional[TextIO] = None) -> None:
    """Parse *tokens* and run the command they name.

    Global flags, valid in any position:

    * ``-v`` / ``--verbose`` -- print ``[DBG]:`` diagnostics to stderr.
    * ``--no-color`` -- disable Rich styling.

    Args:
        tokens: The raw command line, without the executable name.
        stdin: Stream for request bodies and ``login`` tokens.

    Raises:
        AdoError: Any failure while parsing, resolving, building or sending.
    """
    set_output(OutputManager())
    args = parse_arguments(tokens)

    no_color = args.take_bool_flag("no-color")
    verbose = args.take_bool_flag("verbose", "v")
    set_output(OutputManager(no_color=no_color, verbose=verbose))
    debug(f"Parsed arguments: {args!r}")

    config = load_global_config()
    _dispatch(args, config, stdin)


def _dispatch(args: ParsedArguments, config: GlobalConfig, stdin: Optional[TextIO]) -> None:
    from adocli import commands

    if args.match_command("list-areas"):
        commands.list_areas(args, _load_catalog(config))
    elif args.match_command("list-commands"):
        commands.list_commands(args, _load_catalog(config))
    elif args.match_command("search-command"):
        commands.search_command(args, _load_catalog(config))
    elif args.match_command("show-command"):
        commands.show_command(args, _load_catalog(config))
    elif args.match_command("auto-detect"):
        commands.detect_remote(args)
    elif args.match_command("login"):
        commands.store_token(args, config, stdin)
    elif args.match_command("help") or args.take_bool_flag("help", "h") or not args.has_commands():
        commands.show_help()
    else:
        commands.invoke_operation(args, _load_catalog(config), config, stdin)


def _load_catalog(config: GlobalConfig) -> Catalog:
    source = resolve_catalog_source(config)
    debug(f"Loading catalog from {source or 'bundled catalog'}")
    catalog = load_catalog(source)
    debug(f"Catalog holds {len(catalog)} operation(s) in {len(catalog.areas())} area(s)")
    return catalog


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from adocli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``ado`` console script.

    :class:`~adocli.exceptions.AdoError` is mapped to its exit code inside
    the command itself. Anything else produces a crash log and a generic
    failure exit; Ctrl-C exits with 130.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
