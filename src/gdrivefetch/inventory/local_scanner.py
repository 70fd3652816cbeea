"""Local inventory: recursive walk of the base directory with MD5 digests."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from gdrivefetch.errors import InvalidArgumentError, LocalScanError
from gdrivefetch.models import LocalFileRecord
from gdrivefetch.util.checksum import md5_file

logger = logging.getLogger(__name__)


def scan_local(
    base_dir: str,
    *,
    exclude: Optional[Iterable[str]] = None,
) -> list[LocalFileRecord]:
    """
    Digest every regular file under base_dir.

    Args:
        base_dir: Directory to walk.
        exclude: Absolute or base-relative paths to leave out (e.g. the cache file).

    Returns:
        One LocalFileRecord per file, with a '/'-separated path relative to
        base_dir, in sorted walk order.

    Raises:
        InvalidArgumentError: if base_dir is not a directory.
        LocalScanError: if a file cannot be read.
    """
    root = os.path.abspath(base_dir)
    if not os.path.isdir(root):
        raise InvalidArgumentError(
            "Base path is not a directory",
            details={"base_dir": base_dir},
        )

    excluded = {os.path.abspath(os.path.join(root, p)) for p in (exclude or ())}

    def _on_walk_error(exc: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc)

    files: list[LocalFileRecord] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            if path in excluded or not os.path.isfile(path):
                continue

            try:
                digest = md5_file(path)
            except OSError as exc:
                raise LocalScanError(
                    "Failed to read local file",
                    details={"path": path},
                    cause=exc,
                ) from exc

            relative = os.path.relpath(path, root).replace(os.sep, "/")
            logger.debug("%s (md5: %s)", relative, digest)
            files.append(LocalFileRecord(path=relative, md5_checksum=digest))

    logger.info("Scanned %d local files under %s", len(files), root)
    return files
