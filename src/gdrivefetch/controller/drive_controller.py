"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from gdrivefetch.auth import AuthInfo, OAuthClient
from gdrivefetch.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalWriteError,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdrivefetch.models import FileRecord
from gdrivefetch.util.mime import is_download_disallowed

from .fields import DEFAULT_PAGE_SIZE, FILE_FIELDS, LIST_FIELDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive.readonly",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        open_browser: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info, open_browser=open_browser)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> FileRecord:
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return FileRecord.from_dict(data)

    def list_page(
        self,
        *,
        page_token: Optional[str] = None,
        include_trashed: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[FileRecord], Optional[str]]:
        """
        Fetch one page of the flat file listing.

        Returns:
            (records on this page, next page token or None on the last page)
        """
        kwargs: dict[str, Any] = {
            "pageSize": page_size,
            "fields": LIST_FIELDS,
            **self._common_list_kwargs(),
        }
        if page_token:
            kwargs["pageToken"] = page_token
        if not include_trashed:
            kwargs["q"] = "trashed=false"

        req = self._service.files().list(**kwargs)
        data = self._execute(req.execute)

        records = [FileRecord.from_dict(f) for f in data.get("files", []) or []]
        next_token = data.get("nextPageToken") or None
        return records, next_token

    def download_file(
        self,
        file_id: str,
        local_path: str,
        *,
        mime_type: Optional[str] = None,
        overwrite: bool = False,
    ) -> None:
        """
        Download a binary Drive file to local_path, creating parent directories.

        mime_type may be passed when already known to skip the metadata lookup.
        """
        if not overwrite and os.path.exists(local_path):
            raise InvalidArgumentError(
                "Destination file exists and overwrite is False",
                details={"local_path": local_path},
            )

        if mime_type is None:
            mime_type = self.get(file_id).mime_type
        if is_download_disallowed(mime_type):
            raise InvalidArgumentError(
                "Folders and Google-apps types cannot be downloaded",
                details={"mime_type": mime_type, "file_id": file_id},
            )

        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )

        parent_dir = os.path.dirname(local_path)
        # Write to a temp name so an interrupted download never looks complete.
        tmp_path = local_path + ".part"
        try:
            if parent_dir:
                os.makedirs(parent_dir, exist_ok=True)
            with open(tmp_path, "wb") as f:
                downloader = MediaIoBaseDownload(f, req)
                done = False
                while not done:
                    status, done = self._execute(downloader.next_chunk)
                    if status is not None:
                        logger.debug(
                            "%s: %d%%", local_path, int(status.progress() * 100)
                        )
            os.replace(tmp_path, local_path)
        except OSError as exc:
            _discard(tmp_path)
            raise LocalWriteError(
                "Failed to write downloaded file",
                details={"file_id": file_id, "local_path": local_path},
                cause=exc,
            ) from exc
        except BaseException:
            _discard(tmp_path)
            raise

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Drive request failed (%s); retrying in %.1fs",
                        mapped,
                        delay,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )


def _discard(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)
