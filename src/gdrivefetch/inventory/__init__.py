"""Inventory sources and the persisted inventory cache."""

from __future__ import annotations

from .cache import DEFAULT_CACHE_FILE, InventoryCache
from .local_scanner import scan_local
from .remote_source import RemoteInventorySource

__all__ = [
    "DEFAULT_CACHE_FILE",
    "InventoryCache",
    "RemoteInventorySource",
    "scan_local",
]
