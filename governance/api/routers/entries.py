"""
governance/api/routers/entries.py

Register entry HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from governance.api.dependencies import get_register_services, to_http_exception
from governance.config import get_register_settings
from governance.domain.schema_registry import build_entry
from governance.errors import GovernanceStoreError
from governance.schemas.entries import EntryCreateRequest, EntryResponse, RegisterLinksResponse
from governance.services.factory import RegisterServices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["entries"])


@router.post("/entries", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    payload: EntryCreateRequest,
    services: RegisterServices = Depends(get_register_services),
) -> EntryResponse:
    """
    Append one entry to its record type's sheet.
    """

    try:
        entry = build_entry(payload.type, payload.entry_fields())
        stored = services.aggregation.append(entry)
    except GovernanceStoreError as exc:
        logger.error("Failed to save entry type=%s error=%s", payload.type, exc)
        raise to_http_exception(exc) from exc
    return EntryResponse.from_entry(stored)


@router.get("/entries", response_model=list[EntryResponse])
def list_entries(
    type: str = Query(..., description="Record type to list"),
    limit: int | None = Query(default=None, ge=1, description="Maximum number of entries"),
    services: RegisterServices = Depends(get_register_services),
) -> list[EntryResponse]:
    """
    List entries of one record type in append order.
    """

    effective_limit = limit or get_register_settings().entry_list_limit
    try:
        entries = services.aggregation.all_entries(type, limit=effective_limit)
    except GovernanceStoreError as exc:
        logger.error("Failed to list entries type=%s error=%s", type, exc)
        raise to_http_exception(exc) from exc
    return [EntryResponse.from_entry(entry) for entry in entries]


@router.get("/entries/current-week", response_model=list[EntryResponse])
def list_current_week_entries(
    services: RegisterServices = Depends(get_register_services),
) -> list[EntryResponse]:
    try:
        entries = services.aggregation.current_week_entries()
    except GovernanceStoreError as exc:
        logger.error("Failed to aggregate current week entries error=%s", exc)
        raise to_http_exception(exc) from exc
    return [EntryResponse.from_entry(entry) for entry in entries]


@router.get("/links", response_model=RegisterLinksResponse)
def get_links(
    services: RegisterServices = Depends(get_register_services),
) -> RegisterLinksResponse:
    """
    Return shareable links to the week folder and the register spreadsheet.
    """

    try:
        return RegisterLinksResponse(
            week_folder_url=services.documents.week_folder_share_link(),
            spreadsheet_url=services.aggregation.spreadsheet_share_link(),
        )
    except GovernanceStoreError as exc:
        raise to_http_exception(exc) from exc

