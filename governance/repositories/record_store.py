"""
Append-only register repository over the resolved spreadsheet.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import timezone

from governance.connectors.base import ConnectorRequestError, TabularStore
from governance.domain.entries import GovernanceEntry
from governance.domain.schema_registry import decode_row, encode_row, schema_for
from governance.errors import RemoteIOFailure
from governance.resolvers.resource_resolver import ResourceResolver
from governance.week_clock import WeekClock

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Encodes entries into rows on append and decodes rows back on query.

    Rows are never updated or deleted; corrections are new entries.
    """

    def __init__(
        self,
        *,
        resolver: ResourceResolver,
        tabular_store: TabularStore,
        clock: WeekClock,
    ) -> None:
        self._resolver = resolver
        self._tables = tabular_store
        self._clock = clock

    def append(self, entry: GovernanceEntry) -> GovernanceEntry:
        """
        Stamp *entry* with the current timestamp and week and append one row.

        Returns the stamped entry as written.
        """

        schema = schema_for(entry.record_type)
        # Timestamp and week come from one clock reading.
        now = self._clock.now()
        stamped = dataclasses.replace(
            entry,
            id=None,
            timestamp=now.astimezone(timezone.utc) if now.tzinfo is not None else now,
            week=self._clock.week_key_for(now),
        )
        row = encode_row(stamped)

        spreadsheet_id = self._resolver.resolve_spreadsheet()
        range_spec = f"{schema.container_name}!A:Z"
        try:
            self._tables.append_row(spreadsheet_id, range_spec, row)
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Append to '{schema.container_name}' failed: {exc}",
                operation="append",
                record_type=entry.record_type,
                resource_name=schema.container_name,
            ) from exc

        logger.info(
            "Appended register entry type=%s week=%s sheet=%s",
            entry.record_type,
            stamped.week,
            schema.container_name,
        )
        return stamped

    def query(self, record_type: str) -> list[GovernanceEntry]:
        """
        Return every entry of *record_type* in append order.
        """

        schema = schema_for(record_type)
        spreadsheet_id = self._resolver.resolve_spreadsheet()
        range_spec = f"{schema.container_name}!A2:Z"
        try:
            rows = self._tables.read_rows(spreadsheet_id, range_spec)
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Read of '{schema.container_name}' failed: {exc}",
                operation="query",
                record_type=record_type,
                resource_name=schema.container_name,
            ) from exc

        entries = [decode_row(record_type, row, index) for index, row in enumerate(rows)]
        logger.debug("Queried register type=%s rows=%s", record_type, len(entries))
        return entries
