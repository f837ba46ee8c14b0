"""
governance/domain package marker.
"""

from governance.domain.entries import (
    ALL_RECORD_TYPES,
    DatasetEntry,
    DecisionEntry,
    FinancialEntry,
    GovernanceEntry,
    RecordType,
    RiskEntry,
)
from governance.domain.schema_registry import RecordSchema, schema_for

__all__ = [
    "ALL_RECORD_TYPES",
    "DatasetEntry",
    "DecisionEntry",
    "FinancialEntry",
    "GovernanceEntry",
    "RecordSchema",
    "RecordType",
    "RiskEntry",
    "schema_for",
]
