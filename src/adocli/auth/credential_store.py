"""Persistent personal-access-token store scoped per organization.

Stores credentials in ``~/.local/share/adocli/credentials/<organization>.json``
(XDG) or the platform-equivalent directory. Files are written atomically
with ``0o600`` permissions so that tokens are never world-readable, even
momentarily.

The stored value is already encoded for HTTP Basic authentication
(base64 of ``":" + pat``); callers put it straight into an
``Authorization: Basic`` header.
"""

from __future__ import annotations

import base64
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from adocli.config import atomic_write, get_data_dir
from adocli.exceptions import AuthError, InvalidUsageError
from adocli.output import debug


class CredentialEntry(BaseModel):
    """A stored credential for one organization.

    Attributes:
        organization: The organization the token belongs to.
        credential: The Basic-auth encoded token.
        created_at: When the token was stored.
    """

    organization: str
    credential: str = Field(description="base64 of ':' + personal access token")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def encode_pat(pat: str) -> str:
    """Encode a personal access token for HTTP Basic authentication.

    Raises:
        InvalidUsageError: If the token contains non-ASCII characters.
    """
    try:
        raw = f":{pat}".encode("ascii")
    except UnicodeEncodeError as exc:
        raise InvalidUsageError("Personal access token must only contain ASCII characters") from exc
    return base64.b64encode(raw).decode("ascii")


def _credentials_dir() -> Path:
    """Return the credentials directory, creating it if needed."""
    path = get_data_dir() / "credentials"
    path.mkdir(parents=True, exist_ok=True)
    return path


class CredentialStore:
    """Read/write the token of a single organization.

    Args:
        organization: The organization name used to derive the file name.

    Raises:
        InvalidUsageError: If the name is empty, contains a path separator
            or contains ``..``.

    Example::

        store = CredentialStore("contoso")
        store.save_pat("my-pat")
        store.retrieve()  # 'Om15LXBhdA=='
    """

    def __init__(self, organization: str) -> None:
        if not organization or ".." in organization or any(sep in organization for sep in "/\\"):
            raise InvalidUsageError(f"Invalid organization name '{organization}'")
        self._organization = organization
        self._path = _credentials_dir() / f"{organization}.json"

    @property
    def path(self) -> Path:
        """The filesystem path to this organization's credential file."""
        return self._path

    def save(self, entry: CredentialEntry) -> None:
        """Persist *entry* atomically with ``0o600`` permissions."""
        debug(f"Writing PAT to {self._path}")
        text = json.dumps(entry.model_dump(mode="json"), indent=2) + "\n"
        atomic_write(self._path, text, mode=0o600)

    def save_pat(self, pat: str) -> CredentialEntry:
        """Encode and store a raw personal access token."""
        entry = CredentialEntry(organization=self._organization, credential=encode_pat(pat))
        self.save(entry)
        return entry

    def load(self) -> Optional[CredentialEntry]:
        """Load the stored entry, or ``None`` if absent or unreadable."""
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return CredentialEntry.model_validate(data)
        except (json.JSONDecodeError, ValueError, OSError):
            return None

    def retrieve(self) -> str:
        """Return the encoded token for the organization.

        Raises:
            AuthError: If no token is stored.
        """
        debug(f"Reading PAT from {self._path}")
        entry = self.load()
        if entry is None or not entry.credential.strip():
            raise AuthError(
                f"No PAT registered for {self._organization}, "
                "run login command to store one"
            )
        return entry.credential.strip()
