from __future__ import annotations

import hashlib
from typing import BinaryIO

CHUNK_SIZE: int = 1024 * 1024


def md5_stream(stream: BinaryIO, *, chunk_size: int = CHUNK_SIZE) -> str:
    """Return the MD5 hex digest of everything readable from stream."""
    digest = hashlib.md5()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()


def md5_file(path: str, *, chunk_size: int = CHUNK_SIZE) -> str:
    """Return the MD5 hex digest of the file at path (same format as Drive's md5Checksum)."""
    with open(path, "rb") as f:
        return md5_stream(f, chunk_size=chunk_size)
