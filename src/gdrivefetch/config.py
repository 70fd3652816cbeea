"""Run configuration for gdrivefetch."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from gdrivefetch.auth import AuthInfo
from gdrivefetch.auth.auth_info import DEFAULT_CLIENT_SECRETS_FILE, DEFAULT_TOKEN_FILE
from gdrivefetch.controller import GoogleDriveController
from gdrivefetch.inventory import DEFAULT_CACHE_FILE

ENV_PREFIX: str = "GDRIVEFETCH_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True, frozen=True)
class FetchConfig:
    """
    Everything a run needs besides the Drive service itself.

    Environment variables (prefix GDRIVEFETCH_):
        CACHE_FILE, CLIENT_SECRETS, TOKEN_FILE, SCOPES (comma-separated),
        INCLUDE_TRASHED, SUPPORTS_ALL_DRIVES, DRY_RUN, LOG_LEVEL, LOG_FILE
    """

    base_dir: str
    cache_file: str = DEFAULT_CACHE_FILE
    client_secrets_file: str = DEFAULT_CLIENT_SECRETS_FILE
    token_file: str = DEFAULT_TOKEN_FILE
    scopes: tuple[str, ...] = field(
        default_factory=lambda: tuple(GoogleDriveController.DEFAULT_SCOPES)
    )
    include_trashed: bool = False
    supports_all_drives: bool = True
    dry_run: bool = False
    refresh_remote: bool = False
    refresh_local: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.base_dir, str) or not self.base_dir.strip():
            raise ValueError("FetchConfig.base_dir must be a non-empty string")
        if not self.scopes:
            raise ValueError("FetchConfig.scopes must not be empty")

    @property
    def auth_info(self) -> AuthInfo:
        return AuthInfo(
            client_secrets_file=self.client_secrets_file,
            token_file=self.token_file,
        )

    @classmethod
    def from_env(
        cls,
        base_dir: str,
        env: Optional[Mapping[str, str]] = None,
    ) -> FetchConfig:
        """Build a config for base_dir, taking overrides from the environment."""
        src = os.environ if env is None else env

        def _get(name: str) -> Optional[str]:
            value = src.get(ENV_PREFIX + name, "").strip()
            return value or None

        def _flag(name: str, default: bool) -> bool:
            value = _get(name)
            if value is None:
                return default
            return value.lower() in _TRUE_VALUES

        config = cls(base_dir=base_dir)
        scopes_raw = _get("SCOPES")
        return replace(
            config,
            cache_file=_get("CACHE_FILE") or config.cache_file,
            client_secrets_file=_get("CLIENT_SECRETS") or config.client_secrets_file,
            token_file=_get("TOKEN_FILE") or config.token_file,
            scopes=tuple(s.strip() for s in scopes_raw.split(",") if s.strip())
            if scopes_raw
            else config.scopes,
            include_trashed=_flag("INCLUDE_TRASHED", config.include_trashed),
            supports_all_drives=_flag("SUPPORTS_ALL_DRIVES", config.supports_all_drives),
            dry_run=_flag("DRY_RUN", config.dry_run),
            log_level=_get("LOG_LEVEL") or config.log_level,
            log_file=_get("LOG_FILE") or config.log_file,
        )
