"""Folder index: folder id -> folder record, built from a flat remote listing."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from gdrivefetch.models import FileRecord

FolderIndex = Mapping[str, FileRecord]


def build_folder_index(remote_files: Iterable[FileRecord]) -> FolderIndex:
    """
    Return a read-only mapping of every folder record keyed by its id.

    Parent validity is not checked; an empty listing yields an empty index.
    """
    folders: dict[str, FileRecord] = {}
    for record in remote_files:
        if record.is_folder:
            folders[record.file_id] = record
    return MappingProxyType(folders)
