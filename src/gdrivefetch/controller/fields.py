"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "md5Checksum,"
    "mimeType,"
    "parents"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

DEFAULT_PAGE_SIZE: int = 1000
