# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Group value resolution and collation for the tree builder."""

from __future__ import annotations

import logging
import math
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from groupgrid.tree.model import ColumnDescriptor, Record, Reference, ValueKind

logger = logging.getLogger(__name__)

VALID_DATE_BUCKETS = ("exact", "month", "year")

DEFAULT_DATE_FORMAT = "%d.%m.%Y"


@dataclass(frozen=True)
class GroupingOptions:
    """How raw values turn into group values.

    ``date_bucket`` of ``"month"`` or ``"year"`` groups date columns by
    ``YYYY-MM`` / ``YYYY``; dates that fail to parse keep their display string.
    """

    date_bucket: str = "exact"
    date_format: str = DEFAULT_DATE_FORMAT


def stringify(value: Any) -> str:
    """Coerce any field value to the string form used for grouping."""
    if value is None:
        return ""
    if isinstance(value, Reference):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, dict) and "name" in value:
        return str(value["name"])
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _parse_date(value: Any, date_format: str) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    for fmt in (date_format, "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def bucket_date(value: Any, options: GroupingOptions) -> str:
    if options.date_bucket == "exact":
        return stringify(value)
    parsed = _parse_date(value, options.date_format)
    if parsed is None:
        logger.debug("Unparseable date %r, grouping by display string", value)
        return stringify(value)
    if options.date_bucket == "year":
        return f"{parsed.year:04d}"
    return f"{parsed.year:04d}-{parsed.month:02d}"


def group_value(
    record: Record,
    key: str,
    column: ColumnDescriptor | None = None,
    options: GroupingOptions | None = None,
) -> str:
    """Resolve the group value of ``record`` for grouping column ``key``.

    Reference columns group by the referenced display name. A missing field
    groups under the empty string so every record lands in some partition.
    """
    raw = record.get(key)
    if column is not None and column.value_kind == ValueKind.DATE:
        return bucket_date(raw, options or GroupingOptions())
    return stringify(raw)


def collation_key(value: str) -> tuple[str, str]:
    """Sort key giving a case- and accent-insensitive ascending order.

    The raw string breaks ties so the order stays total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, value
