"""gdrivefetch public API."""

from __future__ import annotations

from gdrivefetch.auth import AuthInfo, OAuthClient
from gdrivefetch.config import FetchConfig
from gdrivefetch.errors import (
    AncestryCycleError,
    ApiError,
    AuthError,
    CacheError,
    ConflictError,
    GDriveFetchError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LocalScanError,
    LocalWriteError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)
from gdrivefetch.fetcher import GoogleDriveFetcher
from gdrivefetch.inventory import InventoryCache, RemoteInventorySource, scan_local
from gdrivefetch.models import (
    FetchResult,
    FileKind,
    FileRecord,
    InventorySnapshot,
    LocalFileRecord,
    MissingFile,
    RunResult,
)
from gdrivefetch.reconcile import build_folder_index, find_missing, resolve_path

__all__ = [
    # High-level
    "GoogleDriveFetcher",
    "FetchConfig",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Reconciliation
    "build_folder_index",
    "resolve_path",
    "find_missing",
    # Inventory
    "InventoryCache",
    "RemoteInventorySource",
    "scan_local",
    # Models
    "FileKind",
    "FileRecord",
    "LocalFileRecord",
    "InventorySnapshot",
    "MissingFile",
    "FetchResult",
    "RunResult",
    # Errors
    "GDriveFetchError",
    "InvalidStateError",
    "AncestryCycleError",
    "CacheError",
    "LocalScanError",
    "LocalWriteError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
