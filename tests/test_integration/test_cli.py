"""Integration tests for the ``ado`` command line.

Every test drives the real Typer app through :class:`~typer.testing.CliRunner`
with the fixture catalog (via ``ADOCLI_CATALOG``), an isolated config and
data directory, and, where a request is sent, an ``httpx.MockTransport``
standing in for Azure DevOps.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from typer.testing import CliRunner

from adocli.app import app, main
from adocli.auth import CredentialStore, encode_pat
from adocli.client import Transport
from adocli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CATALOG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
)


@pytest.fixture
def cli_env(isolated_config: Path, catalog_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at the fixture catalog and switch colour off."""
    monkeypatch.setenv("ADOCLI_CATALOG", str(catalog_path))
    monkeypatch.setenv("NO_COLOR", "1")
    return isolated_config


@pytest.fixture
def logged_in(cli_env: Path) -> str:
    CredentialStore("contoso").save_pat("my-pat")
    return encode_pat("my-pat")


@pytest.fixture
def serve(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[httpx.Request]]:
    """Install a handler answering every request with *status* and *payload*."""

    def _install(payload: Any = None, status: int = 200) -> list[httpx.Request]:
        sent: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if payload is None:
                return httpx.Response(status)
            return httpx.Response(status, json=payload)

        def factory(config: Any, authorization: str | None = None) -> Transport:
            return Transport(config, authorization=authorization, http_transport=httpx.MockTransport(handler))

        monkeypatch.setattr("adocli.commands.invoke.Transport", factory)
        return sent

    return _install


# ---------------------------------------------------------------------------
# Help and catalog browsing
# ---------------------------------------------------------------------------


class TestHelp:
    @pytest.mark.parametrize("argv", [[], ["help"], ["--help"], ["-h"]])
    def test_usage(self, cli_runner: CliRunner, cli_env: Path, argv: list[str]) -> None:
        result = cli_runner.invoke(app, argv)
        assert result.exit_code == EXIT_SUCCESS
        assert result.stdout.startswith("Usage: ado <command>")
        assert "list-areas" in result.stdout

    def test_mentions_catalog_override(self, cli_runner: CliRunner, cli_env: Path) -> None:
        result = cli_runner.invoke(app, ["help"])
        assert "ADOCLI_CATALOG" in result.stdout


class TestCatalogCommands:
    def test_list_areas(self, cli_runner: CliRunner, cli_env: Path) -> None:
        result = cli_runner.invoke(app, ["list-areas"])
        assert result.exit_code == EXIT_SUCCESS
        assert result.stdout.splitlines() == ["build", "git", "pipelines", "wit"]

    def test_show_command(self, cli_runner: CliRunner, cli_env: Path) -> None:
        result = cli_runner.invoke(app, ["show-command", "get-repository"])
        assert result.exit_code == EXIT_SUCCESS
        assert "URL template: /orgs/{org}/repos/{repositoryId}" in result.stdout

    def test_bundled_catalog(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["list-commands", "git"])
        assert result.exit_code == EXIT_SUCCESS
        assert "\tlist-pull-requests" in result.stdout.splitlines()

    def test_bad_catalog(self, cli_runner: CliRunner, cli_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        broken = cli_env / "broken.json"
        broken.write_text("{not json")
        monkeypatch.setenv("ADOCLI_CATALOG", str(broken))

        result = cli_runner.invoke(app, ["list-areas"])
        assert result.exit_code == EXIT_CATALOG_ERROR
        assert "Invalid JSON" in result.output

    def test_verbose_traces_to_stderr(self, cli_runner: CliRunner, cli_env: Path) -> None:
        result = cli_runner.invoke(app, ["list-areas", "-v"])
        assert result.exit_code == EXIT_SUCCESS
        assert "[DBG]: Loading catalog from" in result.output

    @pytest.mark.parametrize("flag", ["--verbose=false", "-v=False"])
    def test_verbose_false_stays_quiet(self, cli_runner: CliRunner, cli_env: Path, flag: str) -> None:
        result = cli_runner.invoke(app, ["list-areas", flag])
        assert result.exit_code == EXIT_SUCCESS
        assert "[DBG]" not in result.output


# ---------------------------------------------------------------------------
# Login and invocation
# ---------------------------------------------------------------------------


class TestLogin:
    def test_login_then_what_if(self, cli_runner: CliRunner, cli_env: Path, serve) -> None:
        sent = serve({"count": 0, "value": []})
        login = cli_runner.invoke(
            app, ["login", "organization=contoso", "project=Fabrikam"], input="my-pat\n"
        )
        assert login.exit_code == EXIT_SUCCESS

        result = cli_runner.invoke(
            app, ["list-pull-requests", "organization=contoso", "project=Foo", "--what-if"]
        )
        assert result.exit_code == EXIT_SUCCESS
        assert result.stdout.splitlines() == [
            "GET https://contoso.visualstudio.com/_apis/git/pullrequests?project=Foo&api-version=7.1",
            "Accept: application/json",
            f"Authorization: Basic {encode_pat('my-pat')}",
        ]
        assert sent == []

    def test_not_logged_in(self, cli_runner: CliRunner, cli_env: Path) -> None:
        result = cli_runner.invoke(app, ["list-pull-requests", "organization=contoso", "project=Foo"])
        assert result.exit_code == EXIT_AUTH_FAILURE
        assert "No PAT registered for contoso" in result.output


class TestInvoke:
    def test_end_to_end(self, cli_runner: CliRunner, logged_in: str, serve) -> None:
        payload = {"count": 1, "value": [{"pullRequestId": 7, "title": "Fix build"}]}
        sent = serve(payload)

        result = cli_runner.invoke(
            app, ["list-pull-requests", "organization=contoso", "project=Foo", "--pretty"]
        )

        assert result.exit_code == EXIT_SUCCESS
        assert json.loads(result.stdout) == payload
        (request,) = sent
        assert str(request.url) == (
            "https://contoso.visualstudio.com/_apis/git/pullrequests?project=Foo&api-version=7.1"
        )
        assert request.headers["Authorization"] == f"Basic {logged_in}"

    def test_query(self, cli_runner: CliRunner, logged_in: str, serve) -> None:
        serve({"count": 1, "value": [{"pullRequestId": 7}]})
        result = cli_runner.invoke(
            app,
            ["list-pull-requests", "organization=contoso", "project=Foo", "--query=$.value[0].pullRequestId"],
        )
        assert result.exit_code == EXIT_SUCCESS
        assert result.stdout == "7\n"

    @pytest.mark.parametrize("flag", ["--query", "-q"])
    def test_empty_query(self, cli_runner: CliRunner, logged_in: str, serve, flag: str) -> None:
        sent = serve({"count": 0, "value": []})
        result = cli_runner.invoke(app, ["list-pull-requests", "organization=contoso", "project=Foo", flag])
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "--query requires a JSONPath expression" in result.output
        assert sent == []

    def test_recursive_query(self, cli_runner: CliRunner, logged_in: str, serve) -> None:
        serve({"value": [{"createdBy": {"displayName": "Ana"}}, {"createdBy": {"displayName": "Bo"}}]})
        result = cli_runner.invoke(
            app, ["list-pull-requests", "organization=contoso", "project=Foo", "--query=$..displayName"]
        )
        assert result.exit_code == EXIT_SUCCESS
        assert sorted(json.loads(result.stdout)) == ["Ana", "Bo"]

    def test_leftover_parameter(self, cli_runner: CliRunner, logged_in: str, serve) -> None:
        sent = serve({})
        result = cli_runner.invoke(
            app, ["list-pull-requests", "organization=contoso", "project=Foo", "colour=red"]
        )
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "Unexpected parameters: colour" in result.output
        assert sent == []

    def test_ambiguous_name(self, cli_runner: CliRunner, logged_in: str) -> None:
        result = cli_runner.invoke(app, ["list", "organization=contoso", "project=Foo"])
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "build - list (GET)" in result.output

    def test_unknown_operation(self, cli_runner: CliRunner, logged_in: str) -> None:
        result = cli_runner.invoke(app, ["nope", "organization=contoso", "project=Foo"])
        assert result.exit_code == EXIT_NOT_FOUND
        assert "Unable to find a command named 'nope'" in result.output

    def test_remote_not_found(self, cli_runner: CliRunner, logged_in: str, serve) -> None:
        serve({"message": "TF401019: repository does not exist"}, status=404)
        result = cli_runner.invoke(
            app,
            ["get-repository", "organization=contoso", "project=Foo", "org=contoso", "repositoryId=x"],
        )
        assert result.exit_code == EXIT_NOT_FOUND
        assert "HTTP 404: TF401019" in result.output


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def test_main_writes_crash_log(isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom() -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr("adocli.app._setup_signal_handlers", lambda: None)
    monkeypatch.setattr("adocli.app.app", boom)

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == EXIT_GENERIC_FAILURE
    (log,) = (isolated_config / "data" / "adocli" / "logs").glob("crash-*.log")
    assert "RuntimeError: kaboom" in log.read_text()
