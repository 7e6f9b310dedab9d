# Overview: Durable key-value substrates underneath the record store.

"""
Key-value substrates.

Both substrates hold plain strings under plain keys. The record store puts
one JSON array per table and one decimal counter per table in them.
"""
from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class MemorySubstrate:
    """Process-local substrate; contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class DirectorySubstrate:
    """
    One file per key inside a directory.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace(), so a reader never sees a half-written value.
    """

    def __init__(self, root: str | os.PathLike):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid key: {key!r}")
        return self.root / key

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def open_substrate(path: Optional[str]):
    if path:
        logger.info("Record store using directory substrate at %s", path)
        return DirectorySubstrate(path)
    logger.info("Record store using in-memory substrate")
    return MemorySubstrate()
