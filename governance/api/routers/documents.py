"""
governance/api/routers/documents.py

Week folder document HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from governance.api.dependencies import get_register_services, to_http_exception
from governance.connectors.base import DriveFile
from governance.errors import GovernanceStoreError
from governance.schemas.entries import DriveFileResponse
from governance.services.factory import RegisterServices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"])


def _to_response(drive_file: DriveFile) -> DriveFileResponse:
    return DriveFileResponse(
        id=drive_file.id,
        name=drive_file.name,
        mime_type=drive_file.mime_type,
        created_time=drive_file.created_time,
        web_view_link=drive_file.web_view_link,
    )


@router.post("/upload", response_model=DriveFileResponse, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    services: RegisterServices = Depends(get_register_services),
) -> DriveFileResponse:
    """
    Upload one file into the current week's folder.
    """

    try:
        content = file.file.read()
        uploaded = services.documents.upload_file(content, file.filename or "", file.content_type)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except GovernanceStoreError as exc:
        logger.error("Failed to upload file name=%r error=%s", file.filename, exc)
        raise to_http_exception(exc) from exc
    finally:
        file.file.close()
    return _to_response(uploaded)


@router.get("/files", response_model=list[DriveFileResponse])
def list_documents(
    services: RegisterServices = Depends(get_register_services),
) -> list[DriveFileResponse]:
    try:
        files = services.documents.list_week_files()
    except GovernanceStoreError as exc:
        raise to_http_exception(exc) from exc
    return [_to_response(drive_file) for drive_file in files]


@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    file_id: str,
    services: RegisterServices = Depends(get_register_services),
) -> None:
    try:
        services.documents.delete_file(file_id)
    except GovernanceStoreError as exc:
        raise to_http_exception(exc) from exc
