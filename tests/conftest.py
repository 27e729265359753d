import sys
from pathlib import Path
from datetime import datetime

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FS_DIR = "audit/sub"


class Article:
    """Auditable model used across the suite."""

    def to_audit(self):
        return {
            "old_values": {
                "title": "Unveiling the Future: Emerging Technologies Shaping Our World",
                "version": 1,
            },
            "new_values": {
                "title": "Unveiling the Future: Innovations Reshaping Our Society",
                "version": 2,
            },
        }


@pytest.fixture
def article():
    return Article()


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 7, 14, 25, 9)


@pytest.fixture
def make_driver(tmp_path):
    """Factory for drivers writing below a temporary disk root."""
    from auditfs.config.settings import AuditSettings, DiskConfig, FilesystemDriverConfig
    from auditfs.driver import FilesystemDriver

    def _make(rotation="single", dir=FS_DIR, filename="audit.csv", **kwargs):
        settings = AuditSettings(
            disks={"local": DiskConfig(root=str(tmp_path))},
            filesystem=FilesystemDriverConfig(dir=dir, filename=filename, rotation=rotation),
        )
        return FilesystemDriver(settings, **kwargs)

    return _make
