"""
governance/connectors/drive_connector.py

Google Drive v3 connector for folders, spreadsheets-as-files and uploads.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

import requests

from governance.config import GoogleHTTPSettings
from governance.connectors.base import (
    ConnectorRequestError,
    Credentials,
    DriveFile,
    GoogleAPIConnector,
    RemoteResource,
    ResourceKind,
)

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

_MIME_TYPES = {
    ResourceKind.FOLDER: FOLDER_MIME_TYPE,
    ResourceKind.SPREADSHEET: SPREADSHEET_MIME_TYPE,
}
_KINDS = {mime: kind for kind, mime in _MIME_TYPES.items()}

_RESOURCE_FIELDS = "id, name, mimeType, parents, webViewLink"
_FILE_FIELDS = "id, name, mimeType, webViewLink, createdTime"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _mime_type_for(kind: str) -> str:
    mime_type = _MIME_TYPES.get(kind)
    if mime_type is None:
        raise ValueError(f"Unsupported resource kind '{kind}'.")
    return mime_type


class GoogleDriveConnector(GoogleAPIConnector):
    """
    Container store backed by the Drive v3 REST API.
    """

    source = "google_drive"

    def __init__(
        self,
        *,
        credentials: Credentials,
        http_settings: GoogleHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(credentials=credentials, http_settings=http_settings, session=session)
        self._base_url = http_settings.drive_base_url.rstrip("/")
        self._upload_url = http_settings.drive_upload_url.rstrip("/")

    def search(self, name: str, kind: str, parent_id: str | None = None) -> list[RemoteResource]:
        """
        Find non-trashed resources named *name* of *kind*, optionally under *parent_id*.
        """

        clauses = [f"name={_quote(name)}", f"mimeType={_quote(_mime_type_for(kind))}"]
        if parent_id is not None:
            clauses.append(f"{_quote(parent_id)} in parents")
        clauses.append("trashed=false")

        payload = self._request_json(
            method="GET",
            url=f"{self._base_url}/files",
            params={
                "q": " and ".join(clauses),
                "fields": f"files({_RESOURCE_FIELDS})",
                "spaces": "drive",
            },
        )
        files = payload.get("files") if isinstance(payload, dict) else None
        if files is None:
            return []
        if not isinstance(files, list):
            raise ConnectorRequestError(f"{self.source}: unexpected search payload shape.")
        return [self._to_resource(item, default_kind=kind) for item in files]

    def create(self, name: str, kind: str, parent_id: str | None = None) -> RemoteResource:
        body: dict[str, Any] = {"name": name, "mimeType": _mime_type_for(kind)}
        if parent_id is not None:
            body["parents"] = [parent_id]

        payload = self._request_json(
            method="POST",
            url=f"{self._base_url}/files",
            params={"fields": _RESOURCE_FIELDS},
            json_body=body,
        )
        return self._to_resource(payload, default_kind=kind, default_name=name, default_parent=parent_id)

    def get(self, resource_id: str) -> RemoteResource:
        payload = self._request_json(
            method="GET",
            url=f"{self._base_url}/files/{resource_id}",
            params={"fields": _RESOURCE_FIELDS},
        )
        return self._to_resource(payload, default_kind="")

    def upload(self, *, parent_id: str, file_name: str, content: bytes, mime_type: str) -> DriveFile:
        """
        Upload *content* as a new file under *parent_id* using a multipart request.
        """

        boundary = f"governance-{uuid.uuid4().hex}"
        metadata = json.dumps({"name": file_name, "parents": [parent_id]})
        body = b"".join(
            [
                f"--{boundary}\r\n".encode(),
                b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
                metadata.encode("utf-8"),
                f"\r\n--{boundary}\r\n".encode(),
                f"Content-Type: {mime_type}\r\n\r\n".encode(),
                content,
                f"\r\n--{boundary}--\r\n".encode(),
            ]
        )
        payload = self._request_json(
            method="POST",
            url=f"{self._upload_url}/files",
            params={"uploadType": "multipart", "fields": _FILE_FIELDS},
            data=body,
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
        )
        return self._to_file(payload)

    def list_children(self, parent_id: str) -> list[DriveFile]:
        payload = self._request_json(
            method="GET",
            url=f"{self._base_url}/files",
            params={
                "q": f"{_quote(parent_id)} in parents and trashed=false",
                "fields": f"files({_FILE_FIELDS})",
                "orderBy": "createdTime desc",
                "spaces": "drive",
            },
        )
        files = payload.get("files") if isinstance(payload, dict) else None
        return [self._to_file(item) for item in files or []]

    def delete(self, resource_id: str) -> None:
        self._request(method="DELETE", url=f"{self._base_url}/files/{resource_id}")

    def _to_resource(
        self,
        item: Any,
        *,
        default_kind: str,
        default_name: str | None = None,
        default_parent: str | None = None,
    ) -> RemoteResource:
        if not isinstance(item, dict) or not item.get("id"):
            raise ConnectorRequestError(f"{self.source}: resource payload is missing an id.")
        parents = item.get("parents") or []
        return RemoteResource(
            id=str(item["id"]),
            name=str(item.get("name") or default_name or ""),
            kind=_KINDS.get(item.get("mimeType", ""), default_kind),
            parent_id=parents[0] if parents else default_parent,
            web_view_link=item.get("webViewLink"),
        )

    def _to_file(self, item: Any) -> DriveFile:
        if not isinstance(item, dict) or not item.get("id"):
            raise ConnectorRequestError(f"{self.source}: file payload is missing an id.")
        return DriveFile(
            id=str(item["id"]),
            name=str(item.get("name", "")),
            mime_type=str(item.get("mimeType", "")),
            created_time=str(item.get("createdTime", "")),
            web_view_link=item.get("webViewLink"),
        )
