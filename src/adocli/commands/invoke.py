"""Call an API operation: the default command.

Any first command that is not a built-in is taken as an operation name.
The flow is parse -> resolve -> build -> send:

1. the operation name is taken and no further commands are allowed;
2. ``organization`` / ``project`` are filled in and the stored token for the
   organization is read;
3. the name is resolved with the optional ``area=`` / ``verb=`` hints;
4. the request is built, draining the operation's parameters;
5. output flags are read and :meth:`~adocli.arguments.ParsedArguments.ensure_all_read`
   rejects anything left over;
6. with ``--what-if`` the request is printed, otherwise it is sent and the
   response body printed.
"""

from __future__ import annotations

from typing import Optional, TextIO

from adocli.arguments import ParsedArguments, well_known
from adocli.auth import CredentialStore
from adocli.catalog import Catalog
from adocli.client import Transport, emit_response, parse_path
from adocli.commands.defaults import ensure_organization_and_project
from adocli.engine import OperationResolver, RequestBuilder
from adocli.models import GlobalConfig, RequestDescriptor
from adocli.output import debug, print_data


def invoke_operation(
    args: ParsedArguments,
    catalog: Catalog,
    config: GlobalConfig,
    stdin: Optional[TextIO] = None,
) -> None:
    """Resolve, build and send the operation named by the first command.

    Args:
        args: The parsed command line, positioned at the operation name.
        catalog: The loaded operation catalog.
        config: The user's global configuration.
        stdin: Stream a request body may be read from.
    """
    name = args.get_command("Command name is missing")
    args.ensure_commands_empty()

    repository_detected = ensure_organization_and_project(args, config)
    organization = args.peek_parameter(well_known.ORGANIZATION)
    authorization = CredentialStore(organization).retrieve()

    area = args.take_parameter(well_known.AREA)
    verb = args.take_parameter(well_known.VERB)
    resolved = OperationResolver(catalog).resolve(
        name, area=area, verb=verb.lower() if verb else None
    )

    request = RequestBuilder(body_stream=stdin).build(resolved.operation, args)
    if repository_detected:
        args.take_parameter(well_known.REPOSITORY)

    what_if = args.take_bool_flag("what-if")
    silent = args.take_bool_flag("silent", "s")
    pretty = args.take_bool_flag("pretty", "p") or config.output.pretty
    query = args.take_flag(well_known.QUERY, "q")
    if query is not None:
        parse_path(query)

    args.ensure_all_read()

    transport = Transport(config.request, authorization=authorization)
    if what_if:
        _print_request(request, transport.request_headers(request))
        return

    with transport:
        response = transport.execute(request)
    emit_response(response, pretty=pretty, query=query, silent=silent)


def _print_request(request: RequestDescriptor, headers: dict[str, str]) -> None:
    debug("What-if mode, the request is printed instead of sent")
    print_data(f"{request.verb.value.upper()} {request.url}")
    for key, value in headers.items():
        print_data(f"{key}: {value}")
    if request.body is not None:
        print_data("")
        print_data(request.body)
