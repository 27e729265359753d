"""Storage backend interface used by the audit writer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO


class StorageBackend(ABC):
    """Resolves storage-relative paths and hands out append handles."""

    @abstractmethod
    def path(self, relative: str) -> Path:
        """Absolute path for ``relative``."""

    @abstractmethod
    def directory_exists(self, relative: str) -> bool: ...

    @abstractmethod
    def make_directory(self, relative: str) -> None: ...

    @abstractmethod
    def open_append(self, relative: str) -> TextIO:
        """Open ``relative`` for reading and appending, creating it if absent."""
