"""Filesystem audit driver: buffers audit records and appends them to CSV files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from auditfs.buffer import BatchBuffer
from auditfs.config.settings import AuditSettings
from auditfs.core.contracts import Audit, AuditDriver, Auditable
from auditfs.core.types import EncodedRecord
from auditfs.encoding import RecordEncoder
from auditfs.rotation import Rotation, resolve_path
from auditfs.storage import StorageBackend, build_storage
from auditfs.writer import LockedAppendWriter

logger = logging.getLogger(__name__)


class FilesystemDriver(AuditDriver):
    """
    Audit driver writing one CSV row per change.

    By default every call to :meth:`record` is written straight away. After
    :meth:`start_batching`, records are only staged in memory until
    :meth:`flush_batch` writes them all in a single locked append. Staged
    records are not flushed automatically; whatever is still pending when
    the process exits is lost.
    """

    def __init__(
        self,
        settings: Optional[AuditSettings] = None,
        storage: Optional[StorageBackend] = None,
        clock: Optional[Callable[[], datetime]] = None,
        writer: Optional[LockedAppendWriter] = None,
    ):
        self.settings = settings or AuditSettings()
        config = self.settings.filesystem

        # Fail here, not on the first write
        self._rotation = Rotation.parse(config.rotation)
        self._dir = config.dir
        self._filename = config.filename

        self.storage = storage or build_storage(self.settings.disk_config())
        self.encoder = RecordEncoder()
        self.writer = writer or LockedAppendWriter(self.storage, self.encoder)
        self._clock = clock or datetime.now

        self._buffer: BatchBuffer[EncodedRecord] = BatchBuffer()
        self._batching = False

        logger.debug(
            f"Filesystem audit driver ready: storage={self.storage!r} "
            f"rotation={self._rotation.value} dir={self._dir!r}"
        )

    @classmethod
    def from_yaml(cls, path: Path, **kwargs) -> FilesystemDriver:
        return cls(AuditSettings.from_yaml(path), **kwargs)

    @property
    def rotation(self) -> Rotation:
        return self._rotation

    @property
    def batching(self) -> bool:
        return self._batching

    @property
    def pending(self) -> int:
        """Number of staged records not yet written."""
        return len(self._buffer)

    def current_path(self) -> str:
        return resolve_path(self._rotation, self._clock(), self._dir, self._filename)

    def record(self, model: Auditable) -> Audit:
        now = self._clock()
        values = self.encoder.stamp(model.to_audit(), now)
        self._buffer.push(self.encoder.encode(values))
        logger.debug(f"Staged audit record for {type(model).__name__} ({len(self._buffer)} pending)")

        if not self._batching:
            self.flush_batch()

        return Audit(values=values, created_at=now)

    def prune(self, model: Auditable) -> bool:
        # Retention is not managed by this driver.
        return False

    def start_batching(self) -> None:
        self._batching = True

    def flush_batch(self) -> int:
        """Write all staged records; returns the number of lines appended.

        On failure the staged records and the batching flag are left as they
        were so the caller can retry.
        """
        if not self._buffer:
            self._batching = False
            return 0

        path = self.current_path()
        lines = self.writer.flush(path, self._buffer.rows())

        self._buffer.clear()
        self._batching = False
        return lines
