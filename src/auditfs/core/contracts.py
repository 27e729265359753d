from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Auditable(Protocol):
    """Anything that can describe one of its changes as an audit record.

    The mapping must carry ``old_values`` and ``new_values``; both may hold
    arbitrarily nested structures.
    """

    def to_audit(self) -> dict[str, Any]: ...  # pragma: no cover


@dataclass
class Audit:
    """Handle returned for each recorded change."""

    values: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def old_values(self) -> Any:
        return self.values.get("old_values")

    @property
    def new_values(self) -> Any:
        return self.values.get("new_values")


class AuditDriver(ABC):
    """Interface exposed to whatever decides when a change gets audited."""

    @abstractmethod
    def record(self, model: Auditable) -> Audit | None:
        """Persist (or stage) an audit record for ``model``."""

    @abstractmethod
    def prune(self, model: Auditable) -> bool:
        """Remove stale audit records for ``model``; True if anything was removed."""

    @abstractmethod
    def start_batching(self) -> None: ...

    @abstractmethod
    def flush_batch(self) -> int: ...
