"""Public model exports for gdrivefetch."""

from __future__ import annotations

from .file_record import FileKind, FileRecord, LocalFileRecord
from .results import FetchResult, FetchStatus, MissingFile, RunResult, RunStatus
from .snapshot import InventorySnapshot

__all__ = [
    "FileKind",
    "FileRecord",
    "LocalFileRecord",
    "InventorySnapshot",
    "MissingFile",
    "FetchStatus",
    "RunStatus",
    "FetchResult",
    "RunResult",
]
