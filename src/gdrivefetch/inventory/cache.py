"""On-disk JSON cache of the combined remote + local inventory."""

from __future__ import annotations

import json
import logging
import os
import tempfile

from gdrivefetch.errors import CacheError
from gdrivefetch.models import InventorySnapshot

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE: str = "files.json"


class InventoryCache:
    """
    Whole-document store for one InventorySnapshot.

    No partial updates and no concurrent writers: save() replaces the file
    atomically, load() reads it back in full.
    """

    def __init__(self, path: str = DEFAULT_CACHE_FILE) -> None:
        self.path = os.path.abspath(os.path.expanduser(path))

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> InventorySnapshot:
        """
        Return the cached snapshot, or an empty one when no cache exists.

        A document that is not valid JSON is treated like a missing cache.

        Raises:
            CacheError: if the file exists but cannot be read.
        """
        if not self.exists():
            return InventorySnapshot()

        logger.info("Read %s", self.path)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed cache %s: %s", self.path, exc)
            return InventorySnapshot()
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheError(
                "Failed to read inventory cache",
                details={"path": self.path},
                cause=exc,
            ) from exc

        snapshot = InventorySnapshot.from_dict(data)
        logger.info(
            "Cached inventory: %d remote, %d local",
            len(snapshot.remote),
            len(snapshot.local),
        )
        return snapshot

    def save(self, snapshot: InventorySnapshot) -> None:
        """
        Overwrite the cache with snapshot.

        Raises:
            CacheError: if the file cannot be written.
        """
        directory = os.path.dirname(self.path) or "."
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=os.path.basename(self.path) + ".",
                suffix=".tmp",
                dir=directory,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)
                    f.write("\n")
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as exc:
            raise CacheError(
                "Failed to write inventory cache",
                details={"path": self.path},
                cause=exc,
            ) from exc

        logger.info("Wrote %s", self.path)

    def clear(self) -> None:
        """Remove the cache file if present."""
        if self.exists():
            os.remove(self.path)
