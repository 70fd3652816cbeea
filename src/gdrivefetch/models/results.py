"""Reconciliation and fetch result models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from .file_record import FileRecord

FetchStatus = Literal["success", "failed", "skipped"]
RunStatus = Literal["success", "failed"]


@dataclass(slots=True, frozen=True)
class MissingFile:
    """A remote file whose content is not present locally, with its logical path."""

    record: FileRecord
    resolved_path: str

    def destination(self, base_dir: str) -> str:
        """Absolute local path this file should be written to under base_dir."""
        segments = [s for s in self.resolved_path.split("/") if s]
        return os.path.abspath(os.path.join(base_dir, *segments))


@dataclass(slots=True)
class FetchResult:
    """Result for a single missing file."""

    file_id: str
    resolved_path: str
    local_path: str
    status: FetchStatus
    md5_checksum: str = ""

    reason: Optional[str] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class RunResult:
    """Aggregate result for GoogleDriveFetcher.fetch_missing / run."""

    status: RunStatus
    stopped_file_id: Optional[str]
    results: list[FetchResult]

    summary: dict[str, int] = field(default_factory=dict)
    dry_run: bool = False
    # Size of the whole missing set; results stop short of it after a failure.
    missing_count: int = 0
