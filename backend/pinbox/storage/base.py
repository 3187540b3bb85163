from __future__ import annotations

import posixpath
from typing import IO, Protocol

CHUNK_SIZE = 1024 * 1024
DEFAULT_NAME = "upload"


class PinningBackend(Protocol):
    def upload(self, filename: str, fileobj: IO[bytes]) -> str: ...


class FileStore(Protocol):
    def store(self, filename: str, fileobj: IO[bytes]) -> str: ...


def safe_basename(filename: str | None) -> str:
    # Clients send both "a/b" and "a\\b" style paths; keep only the last segment.
    name = posixpath.basename((filename or "").replace("\\", "/")).strip()
    if name in {"", ".", ".."}:
        return DEFAULT_NAME
    return name
