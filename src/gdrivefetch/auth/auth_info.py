"""OAuth file locations for gdrivefetch."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CLIENT_SECRETS_FILE: str = "client_secret.json"
DEFAULT_TOKEN_FILE: str = os.path.join("~", ".credentials", "gdrivefetch.json")


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Where to find the OAuth client secrets and where to cache the user token.

    Both paths may contain '~'; they are expanded on access.
    """

    client_secrets_file: str = DEFAULT_CLIENT_SECRETS_FILE
    token_file: str = DEFAULT_TOKEN_FILE

    def __post_init__(self) -> None:
        for key in ("client_secrets_file", "token_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.{key} must be a non-empty string")

    @property
    def client_secrets_path(self) -> str:
        """Expanded path to the OAuth client secrets JSON."""
        return os.path.expanduser(self.client_secrets_file)

    @property
    def token_path(self) -> str:
        """Expanded path to the cached authorized-user token JSON."""
        return os.path.expanduser(self.token_file)
