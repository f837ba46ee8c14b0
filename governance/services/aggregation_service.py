"""
governance/services/aggregation_service.py

Cross-type register reads for presentation callers.

Partial failure policy
----------------------
``current_week_entries`` fans out one query per record type. If any
sub-query fails the whole aggregate fails with that error; no partial
result is returned.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from governance.domain.entries import GovernanceEntry
from governance.domain.schema_registry import record_types
from governance.repositories.record_store import RecordStore
from governance.resolvers.resource_resolver import ResourceResolver
from governance.week_clock import WeekClock

logger = logging.getLogger(__name__)

SPREADSHEET_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}"


class AggregationService:
    """
    Merges and filters register entries across record types.
    """

    def __init__(
        self,
        *,
        record_store: RecordStore,
        resolver: ResourceResolver,
        clock: WeekClock,
    ) -> None:
        self._store = record_store
        self._resolver = resolver
        self._clock = clock

    def append(self, entry: GovernanceEntry) -> GovernanceEntry:
        return self._store.append(entry)

    def all_entries(self, record_type: str, *, limit: int | None = None) -> list[GovernanceEntry]:
        """
        Return entries of one type in append order, optionally capped at *limit*.
        """

        entries = self._store.query(record_type)
        if limit is not None:
            return entries[: max(0, limit)]
        return entries

    def current_week_entries(self) -> list[GovernanceEntry]:
        """
        Return this week's entries across all types, in type-then-row order.
        """

        week = self._clock.current_week_key()
        types = record_types()
        # Sub-queries must share one warm spreadsheet id.
        self._resolver.resolve_spreadsheet()
        with ThreadPoolExecutor(max_workers=len(types), thread_name_prefix="register-query") as executor:
            futures = [executor.submit(self._store.query, record_type) for record_type in types]
            results = [future.result() for future in futures]

        merged = [entry for entries in results for entry in entries if entry.week == week]
        logger.debug("Current week entries week=%s count=%s", week, len(merged))
        return merged

    def spreadsheet_share_link(self) -> str:
        spreadsheet_id = self._resolver.resolve_spreadsheet()
        return SPREADSHEET_URL_TEMPLATE.format(spreadsheet_id=spreadsheet_id)
