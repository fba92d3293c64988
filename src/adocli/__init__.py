"""adocli -- call Azure DevOps REST operations straight from the command line.

The tool ships a catalog of every known REST operation, grouped by *area*
(``git``, ``build``, ``wit``, ...). A single invocation names one operation
and supplies its parameters in a loose ``name=value`` grammar::

    ado list-pull-requests project=Foo --pretty
    ado get-repository repository=my-repo verb=get area=git

The invocation is parsed, matched against the catalog, turned into a fully
resolved HTTP request and sent with the organization's stored personal
access token.

Modules:
    app: Typer application and CLI entry point.
    arguments: Tokenizer for the command / parameter / flag grammar.
    catalog: Loading and querying the operation catalog.
    engine: Operation resolution and request construction.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
