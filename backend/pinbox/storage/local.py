from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import IO

from pinbox.exceptions import StorageIOError
from pinbox.storage.base import CHUNK_SIZE, safe_basename

log = logging.getLogger("pinbox")


class LocalFallbackStore:
    """
    Flat directory of ``<time_ns>-<basename>`` files, used when no pinning
    credentials are configured. A failed write leaves the partial file behind.
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def store(self, filename: str, fileobj: IO[bytes]) -> str:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("could not create upload directory", {"dir": str(self.base_dir), "error": str(e)}) from e

        dest = self.base_dir / f"{time.time_ns()}-{safe_basename(filename)}"
        try:
            with open(dest, "wb") as f:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
        except OSError as e:
            raise StorageIOError("could not write upload", {"path": str(dest), "error": str(e)}) from e

        log.debug("local_stored path=%s", dest)
        return str(dest)
