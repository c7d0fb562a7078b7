"""Record loading and the search filter stage.

Neither is part of the grouping engine: loading turns JSON/YAML rows into
``Record`` objects, and ``filter_records`` plays the external filter that
hands the engine an already filtered record set.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from groupgrid.tree.model import ColumnDescriptor, Record, Reference, ValueKind

logger = logging.getLogger(__name__)


class RecordLoadError(Exception):
    """Raised when a records file cannot be read or parsed."""

    pass


def _coerce_value(value: Any, column: ColumnDescriptor | None) -> Any:
    if column is None:
        return value
    if column.value_kind == ValueKind.REFERENCE:
        if isinstance(value, dict):
            return Reference(name=str(value.get("name", "")), initials=value.get("initials"))
        if isinstance(value, str):
            return Reference(name=value)
    if column.value_kind == ValueKind.FILE_LIST and isinstance(value, list):
        return tuple(value)
    return value


def records_from_rows(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[ColumnDescriptor],
) -> list[Record]:
    """Convert plain mappings into records, typing reference and file columns."""
    by_id = {c.id: c for c in columns}
    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise RecordLoadError(f"Row {index} is not a mapping")
        if row.get("id") in (None, ""):
            raise RecordLoadError(f"Row {index} has no id")
        values = {
            key: _coerce_value(value, by_id.get(key))
            for key, value in row.items()
            if key != "id"
        }
        records.append(Record(id=str(row["id"]), values=values))
    return records


def load_records(path: Path, columns: Sequence[ColumnDescriptor]) -> list[Record]:
    """Load records from a JSON or YAML file.

    The file holds a list of mappings, each with an ``id``. Files ending in
    ``.yaml``/``.yml`` are read with PyYAML, everything else as JSON.

    Raises:
        RecordLoadError: If the file cannot be read, parsed, or has bad rows
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise RecordLoadError(f"Error reading {path}: {e}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordLoadError(f"Invalid records file {path}: {e}")

    if data is None:
        data = []
    if not isinstance(data, list):
        raise RecordLoadError(f"Expected a list of rows in {path}")

    records = records_from_rows(data, columns)
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def _searchable_text(value: Any) -> str:
    if isinstance(value, Reference):
        return value.name
    if value is None:
        return ""
    return str(value)


def filter_records(
    records: Sequence[Record],
    term: str | None,
    fields: Sequence[str],
) -> list[Record]:
    """Keep records whose ``fields`` contain ``term`` (case-insensitive)."""
    if not term:
        return list(records)
    needle = term.lower()
    kept = [
        r for r in records
        if any(needle in _searchable_text(r.get(f)).lower() for f in fields)
    ]
    logger.debug("Search %r kept %d of %d records", term, len(kept), len(records))
    return kept
