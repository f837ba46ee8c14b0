"""
governance/domain/schema_registry.py

Static per-record-type column layout and row mapping.

Column order must match the header row written when the register spreadsheet
is created. Headers are never reconciled afterwards, so changing a layout here
is a breaking change for existing spreadsheets.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

from governance.domain.entries import (
    ALL_RECORD_TYPES,
    ENTRY_CLASSES,
    GovernanceEntry,
    RecordType,
)
from governance.errors import EncodingFailure, UnknownRecordType

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("title", "description")
NUMERIC_FIELDS: frozenset[str] = frozenset({"amount"})


@dataclass(frozen=True)
class RecordSchema:
    """
    Column layout for one record type.
    """

    record_type: str
    container_name: str
    columns: tuple[str, ...]
    headers: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.headers):
            raise ValueError(f"Schema '{self.record_type}' has mismatched columns and headers.")


_SCHEMAS: dict[str, RecordSchema] = {
    RecordType.DECISION: RecordSchema(
        record_type=RecordType.DECISION,
        container_name="Decisions",
        columns=("timestamp", "week", "title", "description", "status", "owner", "impact"),
        headers=("Timestamp", "Week", "Title", "Description", "Status", "Owner", "Impact"),
    ),
    RecordType.RISK: RecordSchema(
        record_type=RecordType.RISK,
        container_name="Risks",
        columns=(
            "timestamp",
            "week",
            "title",
            "description",
            "severity",
            "likelihood",
            "mitigation",
            "owner",
        ),
        headers=(
            "Timestamp",
            "Week",
            "Title",
            "Description",
            "Severity",
            "Likelihood",
            "Mitigation",
            "Owner",
        ),
    ),
    RecordType.DATASET: RecordSchema(
        record_type=RecordType.DATASET,
        container_name="Datasets",
        columns=("timestamp", "week", "title", "description", "source", "status", "owner"),
        headers=("Timestamp", "Week", "Dataset Name", "Description", "Source", "Status", "Owner"),
    ),
    RecordType.FINANCIAL: RecordSchema(
        record_type=RecordType.FINANCIAL,
        container_name="Financial",
        columns=("timestamp", "week", "title", "description", "amount", "category", "status"),
        headers=("Timestamp", "Week", "Item", "Description", "Amount", "Category", "Status"),
    ),
}


def record_types() -> tuple[str, ...]:
    return ALL_RECORD_TYPES


def schema_for(record_type: str) -> RecordSchema:
    """
    Return the schema registered for *record_type*.
    """

    schema = _SCHEMAS.get(record_type)
    if schema is None:
        raise UnknownRecordType(record_type)
    return schema


def all_schemas() -> list[RecordSchema]:
    return [_SCHEMAS[record_type] for record_type in ALL_RECORD_TYPES]


def format_timestamp(value: datetime) -> str:
    """
    Format an instant as UTC ISO-8601 with millisecond precision and a ``Z`` suffix.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc_value = value.astimezone(timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO datetime string into a timezone-aware datetime.
    """

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode_row(entry: GovernanceEntry) -> list[Any]:
    """
    Encode *entry* into one row in its schema's column order.

    Missing optional fields encode as ``""``; a missing amount encodes as ``0``.
    """

    schema = schema_for(entry.record_type)
    for field_name in REQUIRED_FIELDS:
        value = getattr(entry, field_name, None)
        if value is None or not str(value).strip():
            raise EncodingFailure(
                f"Entry is missing required field '{field_name}'.",
                operation="encode",
                record_type=entry.record_type,
                resource_name=schema.container_name,
            )

    row: list[Any] = []
    for column in schema.columns:
        value = getattr(entry, column, None)
        if column == "timestamp":
            row.append(format_timestamp(value) if value is not None else "")
        elif column in NUMERIC_FIELDS:
            if value is not None and not math.isfinite(value):
                raise EncodingFailure(
                    f"Entry field '{column}' must be a finite number.",
                    operation="encode",
                    record_type=entry.record_type,
                    resource_name=schema.container_name,
                )
            row.append(value if value is not None else 0)
        else:
            row.append(value if value is not None else "")
    return row


def _cell(row: Sequence[Any], index: int) -> Any:
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _decode_amount(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    try:
        amount = float(str(value).replace(",", "").strip())
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def _decode_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_timestamp(str(value).strip())
    except ValueError:
        logger.debug("Unparseable register timestamp value=%r", value)
        return None


def decode_row(record_type: str, row: Sequence[Any], row_index: int) -> GovernanceEntry:
    """
    Decode one data row positionally into its typed entry.

    Short rows yield unset (None) trailing fields. ``row_index`` is the
    0-based position among data rows and becomes the ``{type}-{index}`` id.
    """

    schema = schema_for(record_type)
    values: dict[str, Any] = {}
    for index, column in enumerate(schema.columns):
        raw = _cell(row, index)
        if column == "timestamp":
            values[column] = _decode_timestamp(raw)
        elif column in NUMERIC_FIELDS:
            values[column] = _decode_amount(raw)
        elif column in REQUIRED_FIELDS:
            values[column] = str(raw) if raw is not None else ""
        else:
            values[column] = str(raw) if raw is not None else None

    entry_class = ENTRY_CLASSES[record_type]
    return entry_class(id=f"{record_type}-{row_index}", **values)


def build_entry(record_type: str, fields: dict[str, Any]) -> GovernanceEntry:
    """
    Build a typed entry from a loose field mapping, keeping only schema fields.
    """

    schema = schema_for(record_type)
    entry_class = ENTRY_CLASSES[record_type]
    allowed = set(schema.columns) - {"timestamp", "week"}
    values = {name: value for name, value in fields.items() if name in allowed}
    for field_name in REQUIRED_FIELDS:
        if not values.get(field_name):
            raise EncodingFailure(
                f"Entry is missing required field '{field_name}'.",
                operation="build_entry",
                record_type=record_type,
                resource_name=schema.container_name,
            )
    if record_type == RecordType.FINANCIAL:
        raw_amount = values.get("amount")
        amount = _decode_amount(_cell([raw_amount], 0))
        if raw_amount not in (None, "") and amount is None:
            raise EncodingFailure(
                "Financial entry amount is not numeric.",
                operation="build_entry",
                record_type=record_type,
                resource_name=schema.container_name,
            )
        values["amount"] = amount
    return entry_class(**values)
