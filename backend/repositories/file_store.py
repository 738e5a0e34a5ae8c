"""
File-based implementation of StoreProtocol.
One <key>.json file per key under a configurable data directory.
"""

import asyncio
import logging
import re
import threading
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


class FileStore:
    """File-based persistence: each key maps to one UTF-8 JSON blob on disk."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def _read(self, path: Path) -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def _write(self, path: Path, blob: str) -> None:
        with self._lock:
            tmp = path.with_suffix(".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(blob)
            tmp.replace(path)

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, blob: str) -> None:
        path = self._path(key)
        await asyncio.to_thread(self._write, path, blob)
        logger.debug("Wrote %s (%d bytes)", path.name, len(blob))
