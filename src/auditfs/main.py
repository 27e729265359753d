"""Command-line entry point: append JSON-line change records to the audit trail."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, TextIO

from pydantic import ValidationError

from auditfs.config.settings import AuditSettings, DiskConfig
from auditfs.core.errors import AuditError, InvalidConfigurationError
from auditfs.driver import FilesystemDriver

logger = logging.getLogger(__name__)


class JsonRecord:
    """Auditable wrapper around one decoded input line."""

    def __init__(self, values: dict[str, Any]):
        self.values = values

    def to_audit(self) -> dict[str, Any]:
        return dict(self.values)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Append audit records (one JSON object per line) to CSV files")
    parser.add_argument("--config", type=Path, help="YAML settings file (defaults to AUDITFS_* environment)")
    parser.add_argument("--input", type=Path, help="Read records from this file instead of stdin")
    parser.add_argument("--rotation", choices=["single", "daily", "hourly"], help="Override rotation mode")
    parser.add_argument("--dir", help="Override audit directory")
    parser.add_argument("--filename", help="Override file name (single rotation)")
    parser.add_argument("--root", help="Override the disk root directory")
    parser.add_argument("--batch", action="store_true", help="Write all records in one flush at the end")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> AuditSettings:
    settings = AuditSettings.from_yaml(args.config) if args.config else AuditSettings.from_env()

    overrides = {
        key: getattr(args, key)
        for key in ("rotation", "dir", "filename")
        if getattr(args, key) is not None
    }
    update: dict[str, Any] = {}
    if overrides:
        update["filesystem"] = settings.filesystem.model_copy(update=overrides)
    if args.root:
        disks = dict(settings.disks)
        disks[settings.filesystem.disk] = DiskConfig(root=args.root)
        update["disks"] = disks
    return settings.model_copy(update=update) if update else settings


def read_records(stream: TextIO) -> Iterable[JsonRecord]:
    for lineno, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        data = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError(f"line {lineno}: expected a JSON object")
        yield JsonRecord(data)


def run(args: argparse.Namespace) -> int:
    settings = load_settings(args)
    logging.getLogger().setLevel(settings.log_level)

    driver = FilesystemDriver(settings)
    if args.batch:
        driver.start_batching()

    stream = args.input.open(encoding="utf-8") if args.input else sys.stdin
    try:
        count = 0
        for record in read_records(stream):
            driver.record(record)
            count += 1
    finally:
        if args.input:
            stream.close()

    if args.batch:
        driver.flush_batch()

    logger.info(f"Recorded {count} audit records to {driver.current_path()}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = parse_args(argv)
    try:
        return run(args)
    except (InvalidConfigurationError, ValidationError) as e:
        logger.error(f"Invalid audit configuration: {e}")
        return 2
    except (AuditError, OSError, ValueError) as e:
        logger.error(f"Audit failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
