"""Time-based selection of the audit file a record is appended to."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from auditfs.core.errors import InvalidConfigurationError


class Rotation(Enum):
    """How often a new audit file is started."""

    SINGLE = "single"
    DAILY = "daily"
    HOURLY = "hourly"

    @classmethod
    def parse(cls, value: str | Rotation) -> Rotation:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidConfigurationError(f"Unsupported rotation value '{value}'") from exc


def _join(directory: str, name: str) -> str:
    directory = directory.rstrip("/")
    if directory:
        return f"{directory}/{name}"
    return name


def single_path(now: datetime, directory: str, filename: str) -> str:
    return _join(directory, filename)


def daily_path(now: datetime, directory: str, filename: str) -> str:
    return _join(directory, f"audit-{now:%Y-%m-%d}.csv")


def hourly_path(now: datetime, directory: str, filename: str) -> str:
    # Minutes and seconds are always zero: one file per hour.
    return _join(directory, f"audit-{now:%Y-%m-%d-%H}-00-00.csv")


_RESOLVERS = {
    Rotation.SINGLE: single_path,
    Rotation.DAILY: daily_path,
    Rotation.HOURLY: hourly_path,
}


def resolve_path(rotation: Rotation, now: datetime, directory: str = "", filename: str = "audit.csv") -> str:
    """Storage-relative path of the audit file for ``now``.

    ``filename`` is only used by :attr:`Rotation.SINGLE`; the rotating modes
    derive their own names from the timestamp.
    """
    return _RESOLVERS[rotation](now, directory, filename)
