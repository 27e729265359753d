"""Lock-guarded CSV append to a single audit file.

Every flush opens the target, takes an exclusive advisory lock, checks
whether the file already starts with a header, appends the header (when
missing) plus all pending rows in one write, then releases the lock and
closes the handle. Processes that honour the lock therefore never interleave
rows inside one flush.
"""

from __future__ import annotations

import csv
import fcntl
import io
import logging
import os
import posixpath
import time
from contextlib import contextmanager
from typing import Iterator, Sequence, TextIO

from auditfs.core.errors import LockTimeoutError
from auditfs.core.types import EncodedRecord
from auditfs.encoding import RecordEncoder
from auditfs.storage.base import StorageBackend

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10.0
LOCK_RETRY_INTERVAL = 0.005  # 5ms


class LockedAppendWriter:
    """Appends encoded records to storage under an exclusive ``flock``."""

    def __init__(
        self,
        storage: StorageBackend,
        encoder: RecordEncoder | None = None,
        lock_timeout: float = LOCK_TIMEOUT_SECONDS,
        retry_interval: float = LOCK_RETRY_INTERVAL,
    ):
        self.storage = storage
        self.encoder = encoder or RecordEncoder()
        self.lock_timeout = lock_timeout
        self.retry_interval = retry_interval

    def flush(self, relative_path: str, records: Sequence[EncodedRecord]) -> int:
        """Append ``records`` to ``relative_path``.

        Returns the number of lines written, header included. Nothing is
        written if the lock cannot be obtained in time.
        """
        if not records:
            return 0

        self._ensure_directory(relative_path)

        with self.storage.open_append(relative_path) as handle:
            with self._exclusive_lock(handle, relative_path):
                header_missing = not self._has_header(handle)
                payload, lines = self._render(records, header_missing)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())

        logger.info(
            f"Appended {len(records)} audit records to {relative_path}"
            f"{' (with header)' if header_missing else ''}"
        )
        return lines

    def _ensure_directory(self, relative_path: str) -> None:
        directory = posixpath.dirname(relative_path)
        if directory and not self.storage.directory_exists(directory):
            self.storage.make_directory(directory)

    @contextmanager
    def _exclusive_lock(self, handle: TextIO, relative_path: str) -> Iterator[None]:
        self._acquire(handle, relative_path)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def _acquire(self, handle: TextIO, relative_path: str) -> None:
        deadline = time.monotonic() + self.lock_timeout
        contended = False
        while True:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                return
            except BlockingIOError:
                pass
            if not contended:
                logger.warning(f"Audit file {relative_path} is locked, waiting up to {self.lock_timeout:g}s")
                contended = True
            if time.monotonic() >= deadline:
                logger.warning(f"Gave up waiting for lock on {relative_path}; records kept in buffer")
                raise LockTimeoutError(relative_path, self.lock_timeout)
            time.sleep(self.retry_interval)

    def _has_header(self, handle: TextIO) -> bool:
        # Read under the lock so a concurrent writer's header is seen.
        # Blank lines before the first record are skipped.
        handle.seek(0)
        found = False
        for line in iter(handle.readline, ""):
            if next(csv.reader([line]), None):
                found = True
                break
        handle.seek(0, os.SEEK_END)
        return found

    def _render(self, records: Sequence[EncodedRecord], with_header: bool) -> tuple[str, int]:
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        lines = 0
        if with_header:
            writer.writerow(self.encoder.header_row(records[0]))
            lines += 1
        for record in records:
            writer.writerow(self.encoder.data_row(record))
            lines += 1
        return out.getvalue(), lines
