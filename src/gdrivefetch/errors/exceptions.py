"""Exception hierarchy and HTTP error mapping for gdrivefetch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveFetchError(Exception):
    """
    Base exception for gdrivefetch.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(GDriveFetchError):
    """Raised when a fetch is started against a base directory that does not exist."""


class AncestryCycleError(GDriveFetchError):
    """Raised when a parent chain loops back onto itself during path resolution."""


class CacheError(GDriveFetchError):
    """Raised when the inventory cache file cannot be read or written."""


class LocalScanError(GDriveFetchError):
    """Raised when a local file cannot be read while building the local inventory."""


class LocalWriteError(GDriveFetchError):
    """Raised when a downloaded file cannot be written under the base directory."""


class AuthError(GDriveFetchError):
    """Raised when the cached token cannot be loaded or refreshed, or the OAuth flow fails."""


class PermissionError(GDriveFetchError):
    """Raised when the token lacks access to an item or to Drive (HTTP 403)."""


class InvalidArgumentError(GDriveFetchError):
    """Raised for a rejected request (HTTP 400) or an undownloadable item."""


class NotFoundError(GDriveFetchError):
    """Raised when a listed file is gone by the time it is fetched (HTTP 404)."""


class ConflictError(GDriveFetchError):
    """Raised when Drive rejects a request as conflicting (HTTP 409/412)."""


class RateLimitError(GDriveFetchError):
    """Raised when Drive throttles listing or download requests."""


class QuotaExceededError(GDriveFetchError):
    """Raised when the daily download or API quota is used up."""


class NetworkError(GDriveFetchError):
    """Raised when a connection drops or times out mid-request."""


class ApiError(GDriveFetchError):
    """Raised for any other Drive failure, including 5xx responses."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivefetch exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)

_RATE_LIMIT_REASONS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveFetchError:
    """
    Map an HTTP error to a gdrivefetch exception.

    Policy:
        - 401 -> AuthError
        - 403 -> RateLimitError if the reason is a (user) rate limit,
                 QuotaExceededError if quota-related, PermissionError otherwise
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx and anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        # Drive reports per-user throttling as 403 rather than 429.
        if info.reason in _RATE_LIMIT_REASONS:
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
