from __future__ import annotations

from typing import TYPE_CHECKING

from auditfs.core.errors import InvalidConfigurationError
from auditfs.storage.base import StorageBackend
from auditfs.storage.local import LocalStorage

if TYPE_CHECKING:
    from auditfs.config.settings import DiskConfig


def build_storage(disk: DiskConfig) -> StorageBackend:
    """Create the backend described by a disk configuration."""
    if disk.driver == "local":
        return LocalStorage(disk.root)
    raise InvalidConfigurationError(f"Unsupported disk driver '{disk.driver}'")


__all__ = ["LocalStorage", "StorageBackend", "build_storage"]
