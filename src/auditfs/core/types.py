from __future__ import annotations

from typing import Any, Mapping

# One audit event as produced by an auditable model, in field order.
Record = Mapping[str, Any]

# A record with every value rendered to text, still keyed by field name.
EncodedRecord = dict[str, str]

Row = list[str]
