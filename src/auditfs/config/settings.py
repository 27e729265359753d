"""Configuration for the filesystem audit driver.

Settings are loaded once, from YAML or the environment, and handed to the
driver at construction. Nothing re-reads them afterwards.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from auditfs.core.errors import InvalidConfigurationError

ENV_PREFIX = "AUDITFS_"


class DiskConfig(BaseModel):
    """A storage disk the driver can write to."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    driver: str = "local"
    root: str = "storage/app"


class FilesystemDriverConfig(BaseModel):
    """Where and how audit files are written."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    disk: str = "local"
    dir: str = ""
    filename: str = Field("audit.csv", min_length=1)
    # Checked by the driver so that a bad value fails driver construction.
    rotation: str = "single"


class AuditSettings(BaseModel):
    """Top-level settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    disks: Dict[str, DiskConfig] = Field(default_factory=lambda: {"local": DiskConfig()})
    filesystem: FilesystemDriverConfig = Field(default_factory=FilesystemDriverConfig)
    log_level: str = Field("INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    def disk_config(self, name: Optional[str] = None) -> DiskConfig:
        """Disk used by the filesystem driver, or the named one."""
        name = name or self.filesystem.disk
        try:
            return self.disks[name]
        except KeyError:
            raise InvalidConfigurationError(f"Audit disk '{name}' is not configured") from None

    @classmethod
    def from_yaml(cls, path: Path) -> AuditSettings:
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_env(cls) -> AuditSettings:
        """Load configuration from environment with defaults."""
        config_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if config_path:
            return cls.from_yaml(Path(config_path))

        filesystem = {}
        for key in ("dir", "filename", "rotation", "disk"):
            value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
            if value is not None:
                filesystem[key] = value

        data: dict = {"filesystem": FilesystemDriverConfig(**filesystem)}
        root = os.environ.get(f"{ENV_PREFIX}DISK_ROOT")
        if root:
            data["disks"] = {filesystem.get("disk", "local"): DiskConfig(root=root)}
        log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level.upper()
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)
