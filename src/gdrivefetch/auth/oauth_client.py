"""OAuth credential acquisition and Drive service construction."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from gdrivefetch.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


class OAuthClient:
    """Load, refresh or obtain OAuth credentials and build Drive API service objects."""

    def __init__(self, auth_info: AuthInfo, *, open_browser: bool = True) -> None:
        self._auth_info = auth_info
        self._open_browser = open_browser

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return OAuth credentials for the given scopes.

        Cached token first; refresh it when expired; otherwise run the
        installed-app flow and cache the new token.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: on load/refresh/flow failures.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials
        from google_auth_oauthlib.flow import InstalledAppFlow

        token_file = self._auth_info.token_path

        if os.path.exists(token_file):
            try:
                creds = Credentials.from_authorized_user_file(
                    token_file,
                    scopes=list(scopes),
                )
            except Exception as exc:
                raise AuthError(
                    "Failed to load token_file",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

            if not ensure_valid:
                return creds

            if not creds.valid and creds.refresh_token:
                logger.info("Refreshing cached OAuth token")
                try:
                    creds.refresh(Request())
                    self._save_credentials(creds)
                except Exception as exc:
                    raise AuthError(
                        "Failed to refresh OAuth credentials",
                        details={"token_file": token_file},
                        cause=exc,
                    ) from exc

            if creds.valid:
                return creds

        client_secrets = self._auth_info.client_secrets_path
        if not os.path.exists(client_secrets):
            raise AuthError(
                "Client secrets file not found",
                details={"client_secrets_file": client_secrets},
            )

        logger.info("No usable cached token; starting OAuth authorization flow")
        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                client_secrets,
                scopes=list(scopes),
            )
            creds = flow.run_local_server(port=0, open_browser=self._open_browser)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": token_file,
                },
                cause=exc,
            ) from exc

        self._save_credentials(creds)
        return creds

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Build an authorized Drive v3 service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        from googleapiclient.discovery import build

        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_path
        logger.info("Saving credential file to: %s", token_file)

        token_dir = os.path.dirname(token_file)
        try:
            if token_dir:
                os.makedirs(token_dir, mode=0o700, exist_ok=True)
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
