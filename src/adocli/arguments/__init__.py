"""Command-line grammar -- split raw tokens into commands, parameters and flags.

The grammar is deliberately loose so that operations can be invoked the way
people type them::

    ado list-pull-requests project=Foo --pretty
    ado list-pull-requests project = Foo -p
    ado list-pull-requests project =Foo --query=$.count

Sub-modules:

* :mod:`~adocli.arguments.tokenizer` -- classifies each raw token, with at
  most one token of lookahead.
* :mod:`~adocli.arguments.parsed` -- :class:`ParsedArguments`, the
  drain-only container handed to commands.
* :mod:`~adocli.arguments.well_known` -- reserved parameter names.
"""

from adocli.arguments.parsed import ParsedArguments, parse_arguments
from adocli.arguments.tokenizer import Argument, ArgumentKind, tokenize

__all__ = [
    "Argument",
    "ArgumentKind",
    "ParsedArguments",
    "parse_arguments",
    "tokenize",
]
