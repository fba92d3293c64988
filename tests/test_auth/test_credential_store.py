"""Tests for the credential store."""

from __future__ import annotations

import base64
import json
import os
import stat

import pytest

from adocli.auth.credential_store import CredentialEntry, CredentialStore, encode_pat
from adocli.exceptions import AuthError, InvalidUsageError


@pytest.fixture()
def store(tmp_path: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> CredentialStore:
    """Create a CredentialStore that writes to a temp directory."""
    monkeypatch.setattr(
        "adocli.auth.credential_store.get_data_dir",
        lambda: tmp_path,  # type: ignore[union-attr]
    )
    return CredentialStore("contoso")


class TestEncodePat:
    def test_basic_auth_encoding(self) -> None:
        encoded = encode_pat("my-pat")
        assert base64.b64decode(encoded) == b":my-pat"

    def test_known_value(self) -> None:
        assert encode_pat("pat") == "OnBhdA=="

    def test_non_ascii_is_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="ASCII"):
            encode_pat("p\u00e4t")


class TestOrganizationName:
    @pytest.mark.parametrize("organization", ["", "../../escaped", "a/b", "a\\b", "..", "a..b"])
    def test_rejected(
        self, organization: str, tmp_path: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("adocli.auth.credential_store.get_data_dir", lambda: tmp_path)
        with pytest.raises(InvalidUsageError, match="Invalid organization name"):
            CredentialStore(organization)
        assert list(tmp_path.rglob("*.json")) == []

    def test_stays_inside_credentials_dir(self, store: CredentialStore, tmp_path) -> None:
        assert store.path.parent == tmp_path / "credentials"


class TestCredentialEntry:
    def test_minimal(self) -> None:
        entry = CredentialEntry(organization="contoso", credential="OnBhdA==")
        assert entry.organization == "contoso"
        assert entry.created_at.tzinfo is not None

    def test_roundtrip_json(self) -> None:
        entry = CredentialEntry(organization="contoso", credential="OnBhdA==")
        restored = CredentialEntry.model_validate(json.loads(entry.model_dump_json()))
        assert restored == entry


class TestCredentialStore:
    def test_path_named_after_organization(self, store: CredentialStore, tmp_path) -> None:
        assert store.path == tmp_path / "credentials" / "contoso.json"

    def test_load_returns_none_when_no_file(self, store: CredentialStore) -> None:
        assert store.load() is None

    def test_save_pat_and_retrieve(self, store: CredentialStore) -> None:
        entry = store.save_pat("my-pat")
        assert entry.credential == encode_pat("my-pat")
        assert store.retrieve() == encode_pat("my-pat")

    def test_retrieve_without_token(self, store: CredentialStore) -> None:
        with pytest.raises(AuthError, match="No PAT registered for contoso, run login command"):
            store.retrieve()

    def test_retrieve_blank_token(self, store: CredentialStore) -> None:
        store.save(CredentialEntry(organization="contoso", credential="   "))
        with pytest.raises(AuthError):
            store.retrieve()

    def test_file_permissions(self, store: CredentialStore) -> None:
        """Credential files should have 0o600 permissions."""
        store.save_pat("secret")
        assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600

    def test_overwrite(self, store: CredentialStore) -> None:
        store.save_pat("first")
        store.save_pat("second")
        assert store.retrieve() == encode_pat("second")

    def test_corrupted_file_returns_none(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("not valid json {{{", encoding="utf-8")
        assert store.load() is None
        with pytest.raises(AuthError):
            store.retrieve()

    def test_separate_organizations(
        self, tmp_path: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "adocli.auth.credential_store.get_data_dir",
            lambda: tmp_path,  # type: ignore[union-attr]
        )
        CredentialStore("contoso").save_pat("a")
        CredentialStore("fabrikam").save_pat("b")

        assert CredentialStore("contoso").retrieve() == encode_pat("a")
        assert CredentialStore("fabrikam").retrieve() == encode_pat("b")
