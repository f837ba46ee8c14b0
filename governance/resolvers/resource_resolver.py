"""
governance/resolvers/resource_resolver.py

Idempotent find-or-create resolution of remote containers.

Resolution order is cache, then remote search, then remote create. There is no
remote compare-and-swap, so two callers resolving the same cold name at the
same time may each create a resource; the first search match wins afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from governance.cache import CacheKey, ResourceCache
from governance.config import RegisterSettings
from governance.connectors.base import (
    ConnectorRequestError,
    ContainerStore,
    Credentials,
    ResourceKind,
    TabularStore,
)
from governance.domain.schema_registry import all_schemas
from governance.errors import ResolutionFailure
from governance.week_clock import WeekClock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverCaches:
    """
    Separate TTL policies per resource class.
    """

    folders: ResourceCache
    spreadsheets: ResourceCache

    @classmethod
    def from_settings(cls, settings: RegisterSettings) -> "ResolverCaches":
        return cls(
            folders=ResourceCache(ttl_seconds=settings.folder_cache_ttl_seconds),
            spreadsheets=ResourceCache(ttl_seconds=settings.spreadsheet_cache_ttl_seconds),
        )

    def for_kind(self, kind: str) -> ResourceCache:
        if kind == ResourceKind.SPREADSHEET:
            return self.spreadsheets
        return self.folders


class ResourceResolver:
    """
    Maps logical container names to concrete remote ids for one caller.

    Cache keys carry the tenant id and a digest of the access token, so a
    tenant id alone never unlocks another caller's cached ids.
    """

    def __init__(
        self,
        *,
        credentials: Credentials,
        container_store: ContainerStore,
        tabular_store: TabularStore,
        caches: ResolverCaches,
        settings: RegisterSettings,
        clock: WeekClock,
    ) -> None:
        self._credentials = credentials
        self._containers = container_store
        self._tables = tabular_store
        self._caches = caches
        self._settings = settings
        self._clock = clock

    def find_or_create(self, name: str, parent_id: str | None, kind: str) -> str:
        """
        Return the id of the *kind* resource named *name* under *parent_id*,
        creating it when no live match exists.
        """

        cache = self._caches.for_kind(kind)
        key = CacheKey(
            kind=kind,
            name=name,
            parent_id=parent_id,
            tenant_id=self._credentials.tenant_id,
            token_digest=self._credentials.token_digest,
        )

        cached_id = cache.get(key)
        if cached_id is not None:
            logger.debug("Resource cache hit kind=%s name=%r parent=%s", kind, name, parent_id)
            return cached_id

        existing_id = self._search(name, parent_id, kind)
        if existing_id is not None:
            cache.put(key, existing_id)
            return existing_id

        if kind == ResourceKind.SPREADSHEET:
            return self._create_spreadsheet(name, key, cache)

        try:
            resource_id = self._containers.create(name, kind, parent_id).id
        except ConnectorRequestError as exc:
            raise ResolutionFailure(
                f"Create of {kind} '{name}' failed: {exc}",
                operation="create",
                resource_name=name,
            ) from exc
        self._check_created_id(resource_id, name, kind)
        cache.put(key, resource_id)
        logger.info("Created remote resource kind=%s name=%r parent=%s id=%s", kind, name, parent_id, resource_id)
        return resource_id

    def resolve_root_folder(self) -> str:
        return self.find_or_create(self._settings.root_folder_name, None, ResourceKind.FOLDER)

    def resolve_week_folder(self) -> str:
        root_id = self.resolve_root_folder()
        return self.find_or_create(self._clock.current_week_folder_name(), root_id, ResourceKind.FOLDER)

    def resolve_spreadsheet(self) -> str:
        return self.find_or_create(self._settings.spreadsheet_name, None, ResourceKind.SPREADSHEET)

    def _search(self, name: str, parent_id: str | None, kind: str) -> str | None:
        try:
            matches = self._containers.search(name, kind, parent_id)
        except ConnectorRequestError as exc:
            raise ResolutionFailure(
                f"Search for {kind} '{name}' failed: {exc}",
                operation="search",
                resource_name=name,
            ) from exc

        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Multiple remote matches kind=%s name=%r parent=%s count=%s; using first",
                kind,
                name,
                parent_id,
                len(matches),
            )
        if not matches[0].id:
            raise ResolutionFailure(
                f"Search for {kind} '{name}' returned a match without an id.",
                operation="search",
                resource_name=name,
            )
        return matches[0].id

    def _create_spreadsheet(self, name: str, key: CacheKey, cache: ResourceCache) -> str:
        """
        Create the register spreadsheet with one sheet and header row per record type.
        """

        schemas = all_schemas()
        try:
            handle = self._tables.create_spreadsheet(name, [schema.container_name for schema in schemas])
        except ConnectorRequestError as exc:
            raise ResolutionFailure(
                f"Create of spreadsheet '{name}' failed: {exc}",
                operation="create",
                resource_name=name,
            ) from exc
        self._check_created_id(handle.id, name, ResourceKind.SPREADSHEET)
        cache.put(key, handle.id)
        logger.info("Created register spreadsheet name=%r id=%s", name, handle.id)

        for schema in schemas:
            sheet_id = handle.sheet_ids.get(schema.container_name)
            if sheet_id is None:
                logger.warning(
                    "Created spreadsheet is missing sheet spreadsheet=%s sheet=%s",
                    handle.id,
                    schema.container_name,
                )
                continue
            try:
                self._tables.write_header_row(handle.id, sheet_id, schema.headers)
            except ConnectorRequestError as exc:
                raise ResolutionFailure(
                    f"Header initialization of '{schema.container_name}' failed: {exc}",
                    operation="write_header_row",
                    record_type=schema.record_type,
                    resource_name=name,
                ) from exc
        return handle.id

    @staticmethod
    def _check_created_id(resource_id: str | None, name: str, kind: str) -> None:
        if not resource_id:
            raise ResolutionFailure(
                f"Create of {kind} '{name}' returned no id.",
                operation="create",
                resource_name=name,
            )
