"""Authentication -- per-organization personal access tokens.

Tokens are stored by the ``login`` command and read back when an operation
is invoked. See :mod:`adocli.auth.credential_store`.
"""

from adocli.auth.credential_store import CredentialEntry, CredentialStore, encode_pat

__all__ = ["CredentialEntry", "CredentialStore", "encode_pat"]
