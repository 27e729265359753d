"""
auditfs - buffered, lock-guarded CSV audit trail on the filesystem
"""

from auditfs.config.settings import AuditSettings, DiskConfig, FilesystemDriverConfig
from auditfs.core.contracts import Audit, AuditDriver, Auditable
from auditfs.core.errors import (
    AuditError,
    InvalidConfigurationError,
    LockTimeoutError,
    RecordEncodingError,
)
from auditfs.driver import FilesystemDriver
from auditfs.rotation import Rotation

__version__ = "0.1.0"

__all__ = [
    "Audit",
    "AuditDriver",
    "AuditError",
    "AuditSettings",
    "Auditable",
    "DiskConfig",
    "FilesystemDriver",
    "FilesystemDriverConfig",
    "InvalidConfigurationError",
    "LockTimeoutError",
    "RecordEncodingError",
    "Rotation",
]
