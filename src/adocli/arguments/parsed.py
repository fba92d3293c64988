"""The drain-only container produced by parsing the command line.

:class:`ParsedArguments` holds three independent collections:

* **commands** -- a FIFO queue; the first command is usually the operation
  name.
* **parameters** -- ``name -> value``; the last occurrence wins.
* **flags** -- ``name -> value``; the value is ``""`` for a bare flag.

Callers never see the collections themselves. Reading a parameter or flag
removes it, so once a command has taken everything it understands,
:meth:`ParsedArguments.ensure_all_read` can report whatever the user typed
that nothing consumed (usually a misspelling).
"""

from __future__ import annotations

from collections import deque
from typing import Optional, Sequence

from adocli.arguments import well_known
from adocli.arguments.tokenizer import ArgumentKind, tokenize
from adocli.exceptions import (
    InvalidUsageError,
    MissingParameterError,
    UnconsumedInputError,
)


def parse_arguments(tokens: Sequence[str]) -> ParsedArguments:
    """Parse a raw argument vector into a :class:`ParsedArguments`.

    Args:
        tokens: The raw tokens, without the executable name.

    Returns:
        The classified arguments, ready to be drained.

    Raises:
        MalformedArgumentError: On grammar violations (see
            :mod:`~adocli.arguments.tokenizer`).
        UnexpectedEndOfInputError: When a value is missing at the end.
    """
    return ParsedArguments.from_tokens(tokens)


class ParsedArguments:
    """Commands, parameters and flags of one invocation, consumed destructively.

    Example::

        args = parse_arguments(["list-pull-requests", "project=Foo", "--pretty"])
        args.next_command()          # 'list-pull-requests'
        args.take_parameter("project")  # 'Foo'
        args.take_bool_flag("pretty", "p")  # True
        args.ensure_all_read()       # nothing left, passes
    """

    def __init__(self) -> None:
        self._commands: deque[str] = deque()
        self._parameters: dict[str, str] = {}
        self._flags: dict[str, str] = {}

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> ParsedArguments:
        """Classify *tokens* and sort them into the three collections."""
        parsed = cls()
        for argument in tokenize(tokens):
            if argument.kind is ArgumentKind.PARAMETER:
                parsed._parameters[argument.name] = argument.value
            elif argument.kind is ArgumentKind.FLAG:
                parsed._flags[argument.name] = argument.value
            else:
                parsed._commands.append(argument.name)
        return parsed

    def __repr__(self) -> str:
        return (
            f"ParsedArguments(commands={list(self._commands)!r}, "
            f"parameters={self._parameters!r}, flags={self._flags!r})"
        )

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def has_commands(self) -> bool:
        """Return ``True`` if any command is left."""
        return bool(self._commands)

    def next_command(self) -> Optional[str]:
        """Remove and return the next command, or ``None`` when none are left."""
        if not self._commands:
            return None
        return self._commands.popleft()

    def get_command(self, error_if_missing: str) -> str:
        """Remove and return the next command, failing with *error_if_missing*.

        Raises:
            InvalidUsageError: If no command is left.
        """
        command = self.next_command()
        if command is None:
            raise InvalidUsageError(error_if_missing)
        return command

    def match_command(self, command: str) -> bool:
        """Pop the next command only if it equals *command*."""
        if not self._commands or self._commands[0] != command:
            return False
        self._commands.popleft()
        return True

    # ------------------------------------------------------------------ #
    # Parameters
    # ------------------------------------------------------------------ #

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def set_parameter(self, name: str, value: str) -> None:
        self._parameters[name] = value

    def take_parameter(self, name: str) -> Optional[str]:
        """Remove and return parameter *name*, or ``None`` if it was not given."""
        return self._parameters.pop(name, None)

    def get_parameter(self, name: str) -> str:
        """Remove and return parameter *name*.

        Raises:
            MissingParameterError: If the parameter was not given.
        """
        value = self.take_parameter(name)
        if value is None:
            raise MissingParameterError(
                f"Missing required parameter '{name}'", parameter=name
            )
        return value

    def peek_parameter(self, name: str) -> str:
        """Return parameter *name* without consuming it.

        Raises:
            MissingParameterError: If the parameter was not given.
        """
        if name not in self._parameters:
            raise MissingParameterError(
                f"Missing required parameter '{name}'", parameter=name
            )
        return self._parameters[name]

    # ------------------------------------------------------------------ #
    # Flags
    # ------------------------------------------------------------------ #

    def has_flag(self, *names: str) -> bool:
        return any(name in self._flags for name in names)

    def take_flag(self, *names: str) -> Optional[str]:
        """Remove and return the value of the first flag in *names* that was given.

        Pass the long name first and any short alias after it, e.g.
        ``take_flag("pretty", "p")``.
        """
        for name in names:
            if name in self._flags:
                return self._flags.pop(name)
        return None

    def take_bool_flag(self, *names: str) -> bool:
        """Consume a switch-style flag.

        ``--pretty`` and ``--pretty=true`` are on; ``--pretty=false`` and an
        absent flag are off.
        """
        value = self.take_flag(*names)
        if value is None:
            return False
        return value == "" or value.lower() == "true"

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def ensure_commands_empty(self) -> None:
        if self._commands:
            raise UnconsumedInputError(
                f"Unexpected commands: {', '.join(self._commands)}",
                leftovers=list(self._commands),
            )

    def ensure_parameters_empty(self) -> None:
        if self._parameters:
            raise UnconsumedInputError(
                f"Unexpected parameters: {', '.join(self._parameters)}",
                leftovers=list(self._parameters),
            )

    def ensure_flags_empty(self) -> None:
        if self._flags:
            raise UnconsumedInputError(
                f"Unexpected flags: {', '.join(self._flags)}",
                leftovers=list(self._flags),
            )

    def ensure_all_read(self) -> None:
        """Fail if anything the user supplied was never consumed.

        ``organization`` and ``project`` are drained first: they are always
        resolved, whether or not the command that ran needed them.

        Raises:
            UnconsumedInputError: Naming every leftover command, parameter
                and flag, one category per line.
        """
        for name in well_known.AUTO_RESOLVED:
            self.take_parameter(name)

        problems: list[str] = []
        leftovers: list[str] = []
        for check in (
            self.ensure_commands_empty,
            self.ensure_parameters_empty,
            self.ensure_flags_empty,
        ):
            try:
                check()
            except UnconsumedInputError as exc:
                problems.append(str(exc))
                leftovers.extend(exc.leftovers)

        if problems:
            raise UnconsumedInputError("\n".join(problems), leftovers=leftovers)
