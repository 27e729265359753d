from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from auditfs.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Files below a root directory on the local filesystem."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path(self, relative: str) -> Path:
        return self.root / relative.lstrip("/")

    def directory_exists(self, relative: str) -> bool:
        return self.path(relative).is_dir()

    def make_directory(self, relative: str) -> None:
        target = self.path(relative)
        target.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created audit directory {target}")

    def open_append(self, relative: str) -> TextIO:
        # newline="" leaves line endings to the csv module
        return self.path(relative).open("a+", encoding="utf-8", newline="")

    def __repr__(self) -> str:
        return f"LocalStorage(root={str(self.root)!r})"
