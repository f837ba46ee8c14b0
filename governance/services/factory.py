"""
governance/services/factory.py

Wiring of per-request register services around process-wide caches.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from http.cookiejar import DefaultCookiePolicy

import requests

from governance.config import get_google_http_settings, get_register_settings
from governance.connectors.base import ContainerStore, Credentials, TabularStore
from governance.connectors.drive_connector import GoogleDriveConnector
from governance.connectors.sheets_connector import GoogleSheetsConnector
from governance.repositories.record_store import RecordStore
from governance.resolvers.resource_resolver import ResolverCaches, ResourceResolver
from governance.services.aggregation_service import AggregationService
from governance.services.document_service import DocumentService
from governance.week_clock import WeekClock


@dataclass(frozen=True)
class RegisterServices:
    """
    Services bound to one caller's credentials.
    """

    resolver: ResourceResolver
    records: RecordStore
    aggregation: AggregationService
    documents: DocumentService


@lru_cache(maxsize=1)
def get_resolver_caches() -> ResolverCaches:
    """
    Build and cache the resolver caches shared by every request.
    """

    return ResolverCaches.from_settings(get_register_settings())


@lru_cache(maxsize=1)
def get_week_clock() -> WeekClock:
    return WeekClock(tz=get_register_settings().timezone)


@lru_cache(maxsize=1)
def get_http_session() -> requests.Session:
    """
    Return the pooled HTTP session shared by every request's connectors.

    Bearer tokens are sent per call and cookies are refused, so the session
    holds no caller state.
    """

    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


def build_register_services(
    credentials: Credentials,
    *,
    container_store: ContainerStore | None = None,
    tabular_store: TabularStore | None = None,
    caches: ResolverCaches | None = None,
    clock: WeekClock | None = None,
    session: requests.Session | None = None,
) -> RegisterServices:
    """
    Assemble resolver, record store and facades for *credentials*.

    Google connectors are built unless explicit stores are passed in; they
    share one pooled session unless *session* is given.
    """

    settings = get_register_settings()
    http_settings = get_google_http_settings()
    clock = clock or get_week_clock()
    if container_store is None or tabular_store is None:
        session = session or get_http_session()

    if container_store is None:
        container_store = GoogleDriveConnector(
            credentials=credentials,
            http_settings=http_settings,
            session=session,
        )
    if tabular_store is None:
        tabular_store = GoogleSheetsConnector(
            credentials=credentials,
            http_settings=http_settings,
            session=session,
        )

    resolver = ResourceResolver(
        credentials=credentials,
        container_store=container_store,
        tabular_store=tabular_store,
        caches=caches or get_resolver_caches(),
        settings=settings,
        clock=clock,
    )
    records = RecordStore(resolver=resolver, tabular_store=tabular_store, clock=clock)
    return RegisterServices(
        resolver=resolver,
        records=records,
        aggregation=AggregationService(record_store=records, resolver=resolver, clock=clock),
        documents=DocumentService(resolver=resolver, container_store=container_store),
    )
