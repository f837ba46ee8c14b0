"""
governance/services/document_service.py

Weekly-partitioned document bucket on top of the resolved week folder.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from governance.connectors.base import ConnectorRequestError, ContainerStore, DriveFile
from governance.errors import RemoteIOFailure
from governance.resolvers.resource_resolver import ResourceResolver

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _sanitize_file_name(file_name: str) -> str:
    safe_name = PurePath(file_name.replace("\\", "/")).name.strip()
    if not safe_name:
        raise ValueError("Invalid file name.")
    return safe_name


class DocumentService:
    """
    Uploads, lists and links documents in the current week's folder.
    """

    def __init__(
        self,
        *,
        resolver: ResourceResolver,
        container_store: ContainerStore,
    ) -> None:
        self._resolver = resolver
        self._containers = container_store

    def week_folder_share_link(self) -> str:
        folder_id = self._resolver.resolve_week_folder()
        try:
            resource = self._containers.get(folder_id)
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Lookup of week folder failed: {exc}",
                operation="week_folder_share_link",
                resource_name=folder_id,
            ) from exc
        return resource.web_view_link or ""

    def upload_file(self, content: bytes, file_name: str, mime_type: str | None = None) -> DriveFile:
        safe_name = _sanitize_file_name(file_name)
        folder_id = self._resolver.resolve_week_folder()
        try:
            uploaded = self._containers.upload(
                parent_id=folder_id,
                file_name=safe_name,
                content=content,
                mime_type=mime_type or DEFAULT_MIME_TYPE,
            )
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Upload of '{safe_name}' failed: {exc}",
                operation="upload",
                resource_name=safe_name,
            ) from exc
        logger.info("Uploaded week document name=%r id=%s size=%s", safe_name, uploaded.id, len(content))
        return uploaded

    def list_week_files(self) -> list[DriveFile]:
        folder_id = self._resolver.resolve_week_folder()
        try:
            return self._containers.list_children(folder_id)
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Listing of week folder failed: {exc}",
                operation="list_week_files",
                resource_name=folder_id,
            ) from exc

    def delete_file(self, file_id: str) -> None:
        try:
            self._containers.delete(file_id)
        except ConnectorRequestError as exc:
            raise RemoteIOFailure(
                f"Delete of '{file_id}' failed: {exc}",
                operation="delete_file",
                resource_name=file_id,
            ) from exc
        logger.info("Deleted week document id=%s", file_id)
