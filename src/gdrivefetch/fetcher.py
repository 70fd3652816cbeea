"""GoogleDriveFetcher: inventory -> reconcile -> fetch missing files."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from gdrivefetch.auth import AuthInfo
from gdrivefetch.controller import GoogleDriveController
from gdrivefetch.errors import (
    AuthError,
    GDriveFetchError,
    InvalidStateError,
    PermissionError,
)
from gdrivefetch.inventory import InventoryCache, RemoteInventorySource, scan_local
from gdrivefetch.models import FetchResult, InventorySnapshot, MissingFile, RunResult
from gdrivefetch.reconcile import find_missing

logger = logging.getLogger(__name__)


class GoogleDriveFetcher:
    """Download every Drive file whose content is not yet anywhere under a local directory."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        include_trashed: bool = False,
        open_browser: bool = True,
    ) -> None:
        self._controller = GoogleDriveController(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
            open_browser=open_browser,
        )
        self._include_trashed = include_trashed

    @classmethod
    def from_controller(
        cls,
        controller: GoogleDriveController,
        *,
        include_trashed: bool = False,
    ) -> "GoogleDriveFetcher":
        """Create fetcher with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._include_trashed = include_trashed
        return obj

    def load_inventory(
        self,
        base_dir: str,
        cache: InventoryCache,
        *,
        refresh_remote: bool = False,
        refresh_local: bool = False,
    ) -> InventorySnapshot:
        """
        Load the cached snapshot and fill whichever half is empty.

        A non-empty cached half is reused as-is; refresh_remote/refresh_local
        discard that half first. The cache is saved once, after both halves
        are populated.
        """
        snapshot = cache.load()
        if refresh_remote:
            snapshot.remote = []
        if refresh_local:
            snapshot.local = []

        if not snapshot.has_remote():
            logger.info("Listing remote files")
            source = RemoteInventorySource(
                self._controller,
                include_trashed=self._include_trashed,
            )
            snapshot.remote = source.list_all()

        if not snapshot.has_local():
            logger.info("Scanning local files under %s", base_dir)
            snapshot.local = scan_local(base_dir, exclude=[cache.path])

        cache.save(snapshot)
        return snapshot

    def find_missing(self, snapshot: InventorySnapshot) -> list[MissingFile]:
        return find_missing(snapshot)

    def fetch_missing(
        self,
        base_dir: str,
        missing: Sequence[MissingFile],
        *,
        dry_run: bool = False,
    ) -> RunResult:
        """
        Download each missing file to base_dir + its logical path, one at a time.

        Policy:
            - Existing destinations are skipped, never overwritten.
            - Destinations resolving outside base_dir are skipped.
            - Stop at the first non-fatal error, including a local write failure:
              return RunResult.failed (no raise).
            - Raise for fatal errors: Auth/Permission/InvalidState.
        """
        root = os.path.abspath(base_dir)
        if not os.path.isdir(root):
            raise InvalidStateError(
                "Base path is not a directory",
                details={"base_dir": base_dir},
            )

        results: list[FetchResult] = []
        stopped_file_id: Optional[str] = None

        for item in missing:
            local_path = item.destination(root)
            logger.info("%s => %s", item.resolved_path, local_path)

            skip_reason = _skip_reason(root, local_path, dry_run=dry_run)
            if skip_reason is not None:
                logger.info("Skipped %s (%s)", local_path, skip_reason)
                results.append(_result(item, local_path, "skipped", reason=skip_reason))
                continue

            try:
                self._controller.download_file(
                    item.record.file_id,
                    local_path,
                    mime_type=item.record.mime_type,
                    overwrite=False,
                )
            except GDriveFetchError as exc:
                if _is_fatal(exc):
                    raise
                logger.error("Download of %s failed: %s", item.record.file_id, exc)
                results.append(_failed_result(item, local_path, exc))
                stopped_file_id = item.record.file_id
                break

            results.append(_result(item, local_path, "success"))

        return RunResult(
            status="failed" if stopped_file_id is not None else "success",
            stopped_file_id=stopped_file_id,
            results=results,
            summary=_summarize_results(results),
            dry_run=dry_run,
            missing_count=len(missing),
        )

    def run(
        self,
        base_dir: str,
        cache: InventoryCache,
        *,
        dry_run: bool = False,
        refresh_remote: bool = False,
        refresh_local: bool = False,
    ) -> RunResult:
        snapshot = self.load_inventory(
            base_dir,
            cache,
            refresh_remote=refresh_remote,
            refresh_local=refresh_local,
        )
        missing = self.find_missing(snapshot)
        return self.fetch_missing(base_dir, missing, dry_run=dry_run)


def _skip_reason(root: str, local_path: str, *, dry_run: bool) -> Optional[str]:
    if os.path.commonpath([root, local_path]) != root or local_path == root:
        return "outside_base_dir"
    if os.path.lexists(local_path):
        return "exists"
    if dry_run:
        return "dry_run"
    return None


def _is_fatal(exc: GDriveFetchError) -> bool:
    return isinstance(exc, (AuthError, PermissionError, InvalidStateError))


def _result(
    item: MissingFile,
    local_path: str,
    status: str,
    *,
    reason: Optional[str] = None,
) -> FetchResult:
    return FetchResult(
        file_id=item.record.file_id,
        resolved_path=item.resolved_path,
        local_path=local_path,
        status=status,  # type: ignore[arg-type]
        md5_checksum=item.record.md5_checksum,
        reason=reason,
    )


def _failed_result(item: MissingFile, local_path: str, exc: GDriveFetchError) -> FetchResult:
    return FetchResult(
        file_id=item.record.file_id,
        resolved_path=item.resolved_path,
        local_path=local_path,
        status="failed",
        md5_checksum=item.record.md5_checksum,
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=getattr(exc, "details", None),
    )


def _summarize_results(results: list[FetchResult]) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
    return summary
