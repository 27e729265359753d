"""Error taxonomy for the audit driver."""

from __future__ import annotations


class AuditError(Exception):
    """Base class for audit failures."""


class InvalidConfigurationError(AuditError, ValueError):
    """Raised at construction time when the configuration cannot be used."""


class LockTimeoutError(AuditError, TimeoutError):
    """Exclusive access to the audit file was not obtained before the deadline."""

    def __init__(self, path: str, timeout: float):
        self.path = path
        self.timeout = timeout
        super().__init__(f"Could not acquire lock on {path} within {timeout:g} seconds")


class RecordEncodingError(AuditError, ValueError):
    """A structured audit field could not be serialized."""
