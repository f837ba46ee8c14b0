"""
Shared in-memory doubles for the remote Drive/Sheets stores.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any, Sequence

import pytest

from governance.cache import ResourceCache
from governance.config import RegisterSettings
from governance.connectors.base import (
    ConnectorRequestError,
    Credentials,
    DriveFile,
    RemoteResource,
    ResourceKind,
    SpreadsheetHandle,
)
from governance.resolvers.resource_resolver import ResolverCaches, ResourceResolver
from governance.services.factory import RegisterServices, build_register_services
from governance.week_clock import WeekClock

# Wednesday; the week starts Monday 2026-10-12.
FIXED_NOW = datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc)


class FakeContainerStore:
    def __init__(self) -> None:
        self.resources: dict[str, RemoteResource] = {}
        self.files: dict[str, tuple[DriveFile, str]] = {}
        self.search_calls: list[tuple[str, str, str | None]] = []
        self.create_calls: list[tuple[str, str, str | None]] = []
        self.fail_search = False
        self.fail_create = False
        self._ids = itertools.count(1)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def add(self, name: str, kind: str, parent_id: str | None = None, resource_id: str | None = None) -> str:
        resource_id = resource_id or self.next_id(kind)
        self.resources[resource_id] = RemoteResource(
            id=resource_id,
            name=name,
            kind=kind,
            parent_id=parent_id,
            web_view_link=f"https://drive.example/{resource_id}",
        )
        return resource_id

    def search(self, name: str, kind: str, parent_id: str | None = None) -> list[RemoteResource]:
        self.search_calls.append((name, kind, parent_id))
        if self.fail_search:
            raise ConnectorRequestError("search unavailable", status_code=503)
        return [
            resource
            for resource in self.resources.values()
            if resource.name == name
            and resource.kind == kind
            and (parent_id is None or resource.parent_id == parent_id)
        ]

    def create(self, name: str, kind: str, parent_id: str | None = None) -> RemoteResource:
        self.create_calls.append((name, kind, parent_id))
        if self.fail_create:
            raise ConnectorRequestError("create unavailable", status_code=403)
        return self.resources[self.add(name, kind, parent_id)]

    def get(self, resource_id: str) -> RemoteResource:
        if resource_id not in self.resources:
            raise ConnectorRequestError("not found", status_code=404)
        return self.resources[resource_id]

    def upload(self, *, parent_id: str, file_name: str, content: bytes, mime_type: str) -> DriveFile:
        file_id = self.next_id("file")
        drive_file = DriveFile(
            id=file_id,
            name=file_name,
            mime_type=mime_type,
            created_time=f"2026-10-14T09:30:{len(self.files):02d}.000Z",
            web_view_link=f"https://drive.example/{file_id}",
        )
        self.files[file_id] = (drive_file, parent_id)
        return drive_file

    def list_children(self, parent_id: str) -> list[DriveFile]:
        children = [drive_file for drive_file, parent in self.files.values() if parent == parent_id]
        return sorted(children, key=lambda item: item.created_time, reverse=True)

    def delete(self, resource_id: str) -> None:
        if resource_id not in self.files:
            raise ConnectorRequestError("not found", status_code=404)
        del self.files[resource_id]


class FakeTabularStore:
    def __init__(self, containers: FakeContainerStore) -> None:
        self._containers = containers
        self.sheets: dict[str, dict[str, list[list[Any]]]] = {}
        self.header_calls: list[tuple[str, int, tuple[str, ...]]] = []
        self.append_calls: list[tuple[str, str, list[Any]]] = []
        self.fail_reads_for: set[str] = set()
        self.fail_appends = False

    def create_spreadsheet(self, title: str, sheet_titles: Sequence[str]) -> SpreadsheetHandle:
        spreadsheet_id = self._containers.add(title, ResourceKind.SPREADSHEET)
        self.sheets[spreadsheet_id] = {sheet_title: [] for sheet_title in sheet_titles}
        return SpreadsheetHandle(
            id=spreadsheet_id,
            sheet_ids={sheet_title: index * 100 for index, sheet_title in enumerate(sheet_titles)},
        )

    def write_header_row(self, spreadsheet_id: str, sheet_id: int, columns: Sequence[str]) -> None:
        self.header_calls.append((spreadsheet_id, sheet_id, tuple(columns)))
        sheet_title = list(self.sheets[spreadsheet_id])[sheet_id // 100]
        rows = self.sheets[spreadsheet_id][sheet_title]
        if rows:
            rows[0] = list(columns)
        else:
            rows.append(list(columns))

    def append_row(self, spreadsheet_id: str, range_spec: str, values: Sequence[Any]) -> None:
        if self.fail_appends:
            raise ConnectorRequestError("quota exceeded", status_code=429)
        sheet_title = range_spec.split("!", 1)[0]
        self.append_calls.append((spreadsheet_id, range_spec, list(values)))
        self.sheets[spreadsheet_id][sheet_title].append(list(values))

    def read_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        sheet_title = range_spec.split("!", 1)[0]
        if sheet_title in self.fail_reads_for:
            raise ConnectorRequestError("read failed", status_code=500)
        return [list(row) for row in self.sheets[spreadsheet_id][sheet_title][1:]]

    def set_rows(self, spreadsheet_id: str, sheet_title: str, rows: list[list[Any]]) -> None:
        header = self.sheets[spreadsheet_id][sheet_title][:1]
        self.sheets[spreadsheet_id][sheet_title] = header + [list(row) for row in rows]


class ManualClock:
    """Monotonic clock advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture()
def register_settings() -> RegisterSettings:
    return RegisterSettings()


@pytest.fixture()
def week_clock() -> WeekClock:
    return WeekClock(tz="UTC", now=lambda: FIXED_NOW)


@pytest.fixture()
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def caches(manual_clock: ManualClock) -> ResolverCaches:
    return ResolverCaches(
        folders=ResourceCache(ttl_seconds=300, clock=manual_clock),
        spreadsheets=ResourceCache(ttl_seconds=600, clock=manual_clock),
    )


@pytest.fixture()
def containers() -> FakeContainerStore:
    return FakeContainerStore()


@pytest.fixture()
def tables(containers: FakeContainerStore) -> FakeTabularStore:
    return FakeTabularStore(containers)


@pytest.fixture()
def resolver(
    containers: FakeContainerStore,
    tables: FakeTabularStore,
    caches: ResolverCaches,
    register_settings: RegisterSettings,
    week_clock: WeekClock,
) -> ResourceResolver:
    return ResourceResolver(
        credentials=Credentials(access_token="token-a", tenant_id="tenant-a"),
        container_store=containers,
        tabular_store=tables,
        caches=caches,
        settings=register_settings,
        clock=week_clock,
    )


@pytest.fixture()
def services(
    containers: FakeContainerStore,
    tables: FakeTabularStore,
    caches: ResolverCaches,
    week_clock: WeekClock,
) -> RegisterServices:
    return build_register_services(
        Credentials(access_token="token-a", tenant_id="tenant-a"),
        container_store=containers,
        tabular_store=tables,
        caches=caches,
        clock=week_clock,
    )
