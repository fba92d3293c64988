"""Classify raw command-line tokens as commands, parameters or flags.

Each raw token is examined in turn, with at most one token of lookahead:

1. A leading ``-`` or ``--`` marks a **flag**; the dashes are stripped.
2. ``name=value`` is a complete pair. ``name=`` takes the *next* raw token
   as its value.
3. A last token without ``=`` is a **command** (or a valueless flag).
4. Otherwise the next token decides: a lone ``=`` is swallowed together
   with the token after it (``name = value``); a token starting with ``=``
   carries the value (``name =value``); anything else leaves the current
   token a command (or a valueless flag).

A dash always wins: ``--query=$.count`` is a flag with a value, never a
parameter.

The single public function is :func:`tokenize`, which yields
:class:`Argument` records in input order.
"""

from __future__ import annotations

import enum
from collections import deque
from typing import Iterator, NamedTuple, Sequence

from adocli.exceptions import MalformedArgumentError, UnexpectedEndOfInputError


class ArgumentKind(str, enum.Enum):
    """What a classified token turned out to be."""

    COMMAND = "command"
    PARAMETER = "parameter"
    FLAG = "flag"


class Argument(NamedTuple):
    """A single classified argument.

    ``value`` is an empty string for commands and for valueless flags.
    """

    name: str
    value: str
    kind: ArgumentKind


def tokenize(tokens: Sequence[str]) -> Iterator[Argument]:
    """Classify *tokens* into a stream of :class:`Argument` records.

    Args:
        tokens: The raw argument vector, without the executable name.

    Yields:
        One :class:`Argument` per logical argument. A split pair such as
        ``["name", "=", "value"]`` yields a single parameter.

    Raises:
        MalformedArgumentError: On a bare ``-``/``--`` or a leading ``=``.
        UnexpectedEndOfInputError: When ``name=`` is the last token.

    Example::

        >>> [a.kind.value for a in tokenize(["show", "x", "=", "1", "-v"])]
        ['command', 'parameter', 'flag']
    """
    pending = deque(tokens)
    while pending:
        yield _read_argument(pending)


def _strip_dashes(token: str) -> str:
    """Return the flag name behind a ``-``/``--`` prefix."""
    if token.startswith("--"):
        if len(token) == 2:
            raise MalformedArgumentError("Encountered -- without a flag name")
        return token[2:]

    if len(token) == 1:
        raise MalformedArgumentError("Encountered - without a flag name")
    return token[1:]


def _read_argument(pending: deque[str]) -> Argument:
    """Consume the tokens that make up the next argument."""
    name = pending.popleft()
    is_flag = False

    if name.startswith("-"):
        name = _strip_dashes(name)
        is_flag = True

    valued_kind = ArgumentKind.FLAG if is_flag else ArgumentKind.PARAMETER
    bare_kind = ArgumentKind.FLAG if is_flag else ArgumentKind.COMMAND

    if "=" in name:
        if name.startswith("="):
            raise MalformedArgumentError(f"Unexpected = prefix in argument {name}")

        key, _, value = name.partition("=")
        if value:
            return Argument(key, value, valued_kind)

        if not pending:
            raise UnexpectedEndOfInputError(
                f"Unexpected end of argument list, expected value for parameter {key}"
            )
        return Argument(key, pending.popleft(), valued_kind)

    if not pending:
        return Argument(name, "", bare_kind)

    following = pending[0].strip()

    if following == "=":
        pending.popleft()
        value = pending.popleft() if pending else ""
        return Argument(name, value, valued_kind)

    if following.startswith("="):
        pending.popleft()
        return Argument(name, following[1:], valued_kind)

    return Argument(name, "", bare_kind)
