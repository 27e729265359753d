"""CSV row encoding for audit records."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from auditfs.core.errors import RecordEncodingError
from auditfs.core.types import EncodedRecord, Record, Row

STRUCTURED_FIELDS = ("old_values", "new_values")
CREATED_AT_FIELD = "created_at"
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def _render(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _header_label(key: str) -> str:
    words = key.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


class RecordEncoder:
    """Turns audit records into rows of text.

    Field order is never changed: it decides the column order of the header
    written to an empty file, and every later row has to line up with it.
    """

    def stamp(self, record: Record, now: datetime) -> dict[str, Any]:
        """Copy of ``record`` with ``created_at`` appended."""
        stamped = dict(record)
        stamped[CREATED_AT_FIELD] = now.strftime(CREATED_AT_FORMAT)
        return stamped

    def encode(self, record: Record) -> EncodedRecord:
        encoded: EncodedRecord = {}
        for key, value in record.items():
            if key in STRUCTURED_FIELDS:
                encoded[key] = self._serialize(key, value)
            else:
                encoded[key] = _render(value)
        return encoded

    def header_row(self, record: Record) -> Row:
        return [_header_label(key) for key in record]

    def data_row(self, encoded: EncodedRecord) -> Row:
        return list(encoded.values())

    def _serialize(self, key: str, value: Any) -> str:
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise RecordEncodingError(f"Cannot serialize '{key}': {exc}") from exc
