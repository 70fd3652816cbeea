"""Combined remote + local inventory, the unit persisted by InventoryCache."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .file_record import FileRecord, LocalFileRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InventorySnapshot:
    """
    Remote listing and local scan for one run.

    Each half is treated as a complete cache on its own: a non-empty half is
    reused as-is, an empty half is re-fetched in full.
    """

    remote: list[FileRecord] = field(default_factory=list)
    local: list[LocalFileRecord] = field(default_factory=list)

    def has_remote(self) -> bool:
        return bool(self.remote)

    def has_local(self) -> bool:
        return bool(self.local)

    def to_dict(self) -> dict[str, Any]:
        return {
            "remote": [r.to_dict() for r in self.remote],
            "local": [f.to_dict() for f in self.local],
        }

    @classmethod
    def from_dict(cls, data: Any) -> InventorySnapshot:
        """
        Decode a persisted snapshot.

        A half that is missing or not a list decodes as empty; entries that are
        not objects are dropped.
        """
        if not isinstance(data, dict):
            logger.warning("Snapshot document is not an object; treating as empty")
            return cls()

        return cls(
            remote=[FileRecord.from_dict(d) for d in _entries(data, "remote")],
            local=[LocalFileRecord.from_dict(d) for d in _entries(data, "local")],
        )


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Snapshot half %r is not a list; treating as empty", key)
        return []
    return [d for d in raw if isinstance(d, dict)]
