"""Content-addressed set difference between remote and local inventories."""

from __future__ import annotations

import logging

from gdrivefetch.models import InventorySnapshot, LocalFileRecord, MissingFile

from .folder_index import build_folder_index
from .path_resolver import resolve_path

logger = logging.getLogger(__name__)


def find_missing(snapshot: InventorySnapshot) -> list[MissingFile]:
    """
    List remote files whose checksum has no match anywhere in the local inventory.

    Notes:
        - Records with an empty checksum (folders, Google-apps types) are never
          reported.
        - A local file with the same checksum counts as present regardless of
          its path or name.
        - Output keeps the remote listing order.

    Raises:
        AncestryCycleError: if a missing file's parent chain is cyclic.
    """
    local_by_md5: dict[str, LocalFileRecord] = {}
    for local in snapshot.local:
        local_by_md5.setdefault(local.md5_checksum, local)

    folders = build_folder_index(snapshot.remote)

    missing: list[MissingFile] = []
    for record in snapshot.remote:
        if record.md5_checksum == "":
            continue
        if record.md5_checksum in local_by_md5:
            continue
        path = resolve_path(folders, record)
        logger.info("%s (md5=%s)", path, record.md5_checksum)
        missing.append(MissingFile(record=record, resolved_path=path))

    logger.info(
        "%d of %d remote items are missing locally",
        len(missing),
        len(snapshot.remote),
    )
    return missing
