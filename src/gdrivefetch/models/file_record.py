"""Data model for remote Drive items and local files."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from gdrivefetch.util.mime import FOLDER_MIME


class FileKind(str, enum.Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass(slots=True, frozen=True)
class FileRecord:
    """
    A Drive item as listed by the remote inventory.

    Notes:
        - name is a single path segment, never a full path.
        - md5_checksum is "" when Drive has no content digest (folders,
          Google Docs and other Google-apps types).
        - Only parents[0] is used for path resolution.
    """

    file_id: str
    name: str
    mime_type: str
    parents: tuple[str, ...] = ()
    md5_checksum: str = ""

    @property
    def kind(self) -> FileKind:
        return FileKind.FOLDER if self.mime_type == FOLDER_MIME else FileKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is FileKind.FOLDER

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.file_id,
            "name": self.name,
            "md5Checksum": self.md5_checksum,
            "mimeType": self.mime_type,
            "parents": list(self.parents),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileRecord:
        """Build from a Drive API file resource or a persisted snapshot entry."""
        parents = data.get("parents") or []
        if not isinstance(parents, list):
            parents = []

        return cls(
            file_id=_str_or_empty(data.get("id")),
            name=_str_or_empty(data.get("name")),
            mime_type=_str_or_empty(data.get("mimeType")),
            parents=tuple(p for p in parents if isinstance(p, str)),
            md5_checksum=_str_or_empty(data.get("md5Checksum")),
        )


@dataclass(slots=True, frozen=True)
class LocalFileRecord:
    """A file found under the local base directory (path is '/'-separated, relative)."""

    path: str
    md5_checksum: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "md5Checksum": self.md5_checksum}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocalFileRecord:
        return cls(
            path=_str_or_empty(data.get("path")),
            md5_checksum=_str_or_empty(data.get("md5Checksum")),
        )


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""
