"""Public error exports for gdrivefetch."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
