"""Logical path reconstruction by walking parent references."""

from __future__ import annotations

from gdrivefetch.errors import AncestryCycleError
from gdrivefetch.models import FileRecord

from .folder_index import FolderIndex


def resolve_path(folder_index: FolderIndex, record: FileRecord) -> str:
    """
    Return the absolute '/'-separated logical path of record.

    The walk follows parents[0] while it is found in folder_index and stops at
    the first missing or empty link, so the top segment is whatever the
    highest resolvable ancestor is (the Drive root itself is usually not
    listed). A record with no resolvable ancestry yields "/<name>".

    Raises:
        AncestryCycleError: if the parent chain revisits an item.
    """
    segments: list[str] = []
    seen: set[str] = set()
    current = record
    # Every step after the first consumes a distinct folder from the index.
    max_steps = len(folder_index) + 1

    while True:
        if current.file_id in seen or len(segments) >= max_steps:
            raise AncestryCycleError(
                "Parent chain loops back onto itself",
                details={
                    "file_id": record.file_id,
                    "repeated_id": current.file_id,
                    "chain": list(reversed(segments)),
                },
            )
        seen.add(current.file_id)
        segments.append(current.name)

        if not current.parents:
            break
        parent = folder_index.get(current.parents[0])
        if parent is None:
            break
        current = parent

    return "/" + "/".join(reversed(segments))
