"""Remote inventory: the complete flat Drive listing, concatenated across pages."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from gdrivefetch.models import FileRecord

logger = logging.getLogger(__name__)


class _PagedLister(Protocol):
    def list_page(
        self,
        *,
        page_token: Optional[str] = None,
        include_trashed: bool = False,
    ) -> tuple[list[FileRecord], Optional[str]]: ...


class RemoteInventorySource:
    """Lists every Drive item visible to the authorized user."""

    def __init__(self, controller: _PagedLister, *, include_trashed: bool = False) -> None:
        self._controller = controller
        self._include_trashed = include_trashed

    def list_all(self) -> list[FileRecord]:
        records: list[FileRecord] = []
        page_token: Optional[str] = None

        while True:
            page, page_token = self._controller.list_page(
                page_token=page_token,
                include_trashed=self._include_trashed,
            )
            for r in page:
                logger.debug(
                    "%s (md5: %s, type: %s, id: %s, parents: %s)",
                    r.name,
                    r.md5_checksum,
                    r.mime_type,
                    r.file_id,
                    list(r.parents),
                )
            records.extend(page)
            logger.info("count: %d", len(records))

            if not page_token:
                break

        return records
