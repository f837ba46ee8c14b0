"""
governance/domain/entries.py

Typed governance register entries, one variant per record type.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, ClassVar


class RecordType:
    DECISION = "decision"
    RISK = "risk"
    DATASET = "dataset"
    FINANCIAL = "financial"


ALL_RECORD_TYPES: tuple[str, ...] = (
    RecordType.DECISION,
    RecordType.RISK,
    RecordType.DATASET,
    RecordType.FINANCIAL,
)


@dataclass(frozen=True)
class GovernanceEntry:
    """
    Fields shared by every register entry.

    ``timestamp`` and ``week`` are assigned by the record store on append;
    ``id`` is assigned on read from the row position.
    """

    record_type: ClassVar[str] = ""

    title: str
    description: str
    id: str | None = None
    timestamp: datetime | None = None
    week: str | None = None

    @property
    def type(self) -> str:
        return self.record_type

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["type"] = self.record_type
        return payload


@dataclass(frozen=True)
class DecisionEntry(GovernanceEntry):
    record_type: ClassVar[str] = RecordType.DECISION

    status: str | None = None
    owner: str | None = None
    impact: str | None = None


@dataclass(frozen=True)
class RiskEntry(GovernanceEntry):
    record_type: ClassVar[str] = RecordType.RISK

    severity: str | None = None
    likelihood: str | None = None
    mitigation: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class DatasetEntry(GovernanceEntry):
    record_type: ClassVar[str] = RecordType.DATASET

    source: str | None = None
    status: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class FinancialEntry(GovernanceEntry):
    record_type: ClassVar[str] = RecordType.FINANCIAL

    amount: float | None = None
    category: str | None = None
    status: str | None = None


ENTRY_CLASSES: dict[str, type[GovernanceEntry]] = {
    RecordType.DECISION: DecisionEntry,
    RecordType.RISK: RiskEntry,
    RecordType.DATASET: DatasetEntry,
    RecordType.FINANCIAL: FinancialEntry,
}
