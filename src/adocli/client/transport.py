"""Synchronous HTTP transport for resolved requests.

:class:`Transport` takes the :class:`~adocli.models.RequestDescriptor`
produced by the request builder and sends it with :class:`httpx.Client`,
layering on:

- **Auth injection** -- the organization's encoded token goes into an
  ``Authorization: Basic`` header.
- **Verb dispatch** -- an explicit table maps each
  :class:`~adocli.models.HTTPMethod` to the client method used to send it.
- **Error mapping** -- non-2xx responses and network failures become typed
  :class:`~adocli.exceptions.AdoError` subclasses.

No retries happen here; every failure is reported to the user as-is.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from adocli.exceptions import AuthError, ConnectionError_, NotFoundError, ServerError
from adocli.models import HTTPMethod, RequestConfig, RequestDescriptor
from adocli.output import debug

_JSON = "application/json"


def _send_without_body(client: httpx.Client, request: RequestDescriptor, headers: dict[str, str]) -> httpx.Response:
    return client.request(request.verb.value.upper(), request.url, headers=headers)


def _send_with_body(client: httpx.Client, request: RequestDescriptor, headers: dict[str, str]) -> httpx.Response:
    if request.body is None:
        return _send_without_body(client, request, headers)
    return client.request(
        request.verb.value.upper(),
        request.url,
        headers={**headers, "Content-Type": f"{_JSON}; charset=utf-8"},
        content=request.body.encode("utf-8"),
    )


_DISPATCH: dict[HTTPMethod, Callable[[httpx.Client, RequestDescriptor, dict[str, str]], httpx.Response]] = {
    HTTPMethod.GET: _send_without_body,
    HTTPMethod.DELETE: _send_without_body,
    HTTPMethod.POST: _send_with_body,
    HTTPMethod.PATCH: _send_with_body,
    HTTPMethod.PUT: _send_with_body,
}


class Transport:
    """Sends request descriptors over HTTP.

    Must be used as a context manager so that the underlying
    :class:`httpx.Client` is opened and closed.

    Args:
        config: Timeout and TLS settings.
        authorization: Encoded personal access token, sent as
            ``Authorization: Basic <authorization>``. ``None`` sends no
            credentials.
        http_transport: Optional httpx transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        with Transport(RequestConfig(), authorization=token) as transport:
            response = transport.execute(request)
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        authorization: Optional[str] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._authorization = authorization
        self._http_transport = http_transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Transport:
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=False,
            transport=self._http_transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def request_headers(self, request: RequestDescriptor) -> dict[str, str]:
        """Return the headers that will be sent with *request*."""
        headers = {"Accept": _JSON}
        if self._authorization:
            headers["Authorization"] = f"Basic {self._authorization}"
        headers.update(request.headers)
        return headers

    def execute(self, request: RequestDescriptor) -> httpx.Response:
        """Send *request* and return the successful response.

        Raises:
            AuthError: On 401 / 403, or a redirect (usually a sign-in page
                served for an invalid token).
            NotFoundError: On 404.
            ServerError: On any other error status.
            ConnectionError_: On network / timeout errors.
        """
        assert self._client is not None, "Transport not opened -- use as context manager"

        send = _DISPATCH[request.verb]
        debug(f"{request.verb.value.upper()} {request.url}")
        try:
            response = send(self._client, request, self.request_headers(request))
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise ConnectionError_(f"Request to {request.url} failed: {exc}") from exc

        debug(f"HTTP {response.status_code} {response.reason_phrase or ''}")
        _map_response_error(response)
        return response


def _map_response_error(response: httpx.Response) -> None:
    """Raise a typed exception for non-2xx HTTP status codes."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if 300 <= status < 400:
        raise AuthError(
            f"Status '{status}' was received, this may indicate that your PAT is not valid"
        )

    message = _error_message(response)
    full_msg = f"HTTP {status}: {message}" if message else f"HTTP {status}"

    if status in (401, 403):
        raise AuthError(full_msg)
    if status == 404:
        raise NotFoundError(full_msg)
    raise ServerError(full_msg)


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response body."""
    try:
        detail: Any = response.json()
    except ValueError:
        return response.text[:500] if response.text else ""

    if isinstance(detail, dict):
        return str(detail.get("message") or detail.get("error") or detail.get("detail") or detail)
    return str(detail)
