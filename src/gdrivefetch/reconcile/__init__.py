"""Reconciliation core: folder index, path resolution, missing-file detection."""

from __future__ import annotations

from .folder_index import FolderIndex, build_folder_index
from .path_resolver import resolve_path
from .reconciler import find_missing

__all__ = [
    "FolderIndex",
    "build_folder_index",
    "resolve_path",
    "find_missing",
]
