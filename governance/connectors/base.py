"""
governance/connectors/base.py

Remote store contracts and shared Google HTTP mechanics.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

import requests

from governance.config import GoogleHTTPSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ResourceKind:
    FOLDER = "folder"
    SPREADSHEET = "spreadsheet"


class ConnectorRequestError(RuntimeError):
    """
    Raised when a connector cannot complete a remote call.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class Credentials:
    """
    Bearer credential plus the stable tenant identifier it belongs to.
    """

    access_token: str
    tenant_id: str

    @property
    def token_digest(self) -> str:
        """
        Short SHA-256 digest of the access token, safe to keep in cache keys.
        """

        return hashlib.sha256(self.access_token.encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True)
class RemoteResource:
    id: str
    name: str
    kind: str
    parent_id: str | None = None
    web_view_link: str | None = None


@dataclass(frozen=True)
class SpreadsheetHandle:
    """
    Identifiers returned when a spreadsheet is created.
    """

    id: str
    sheet_ids: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DriveFile:
    id: str
    name: str
    mime_type: str
    created_time: str
    web_view_link: str | None = None


class ContainerStore(Protocol):
    """
    Searchable, creatable named containers (folders, spreadsheets) and their files.
    """

    def search(self, name: str, kind: str, parent_id: str | None = None) -> list[RemoteResource]:
        ...

    def create(self, name: str, kind: str, parent_id: str | None = None) -> RemoteResource:
        ...

    def get(self, resource_id: str) -> RemoteResource:
        ...

    def upload(self, *, parent_id: str, file_name: str, content: bytes, mime_type: str) -> DriveFile:
        ...

    def list_children(self, parent_id: str) -> list[DriveFile]:
        ...

    def delete(self, resource_id: str) -> None:
        ...


class TabularStore(Protocol):
    """
    Spreadsheet operations used by the register.
    """

    def create_spreadsheet(self, title: str, sheet_titles: Sequence[str]) -> SpreadsheetHandle:
        ...

    def write_header_row(self, spreadsheet_id: str, sheet_id: int, columns: Sequence[str]) -> None:
        ...

    def append_row(self, spreadsheet_id: str, range_spec: str, values: Sequence[Any]) -> None:
        ...

    def read_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        ...


class GoogleAPIConnector:
    """
    Shared authorized HTTP mechanics for Google REST connectors.
    """

    source: str = "google"

    def __init__(
        self,
        *,
        credentials: Credentials,
        http_settings: GoogleHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._credentials = credentials
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute an authorized request and return parsed JSON (``{}`` for empty bodies).
        """

        response = self._request(
            method=method,
            url=url,
            params=params,
            json_body=json_body,
            data=data,
            headers=headers,
        )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectorRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Execute an authorized request with optional exponential backoff.
        """

        request_headers = {"Authorization": f"Bearer {self._credentials.access_token}"}
        if headers:
            request_headers.update(headers)

        last_error: Exception | None = None
        last_status: int | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_body,
                    data=data,
                    headers=request_headers,
                    timeout=self._timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                last_status = exc.response.status_code if exc.response is not None else None
                if last_status not in RETRYABLE_STATUS_CODES:
                    logger.error(
                        "Google request failed source=%s method=%s status=%s url=%s error=%s",
                        self.source,
                        method,
                        last_status,
                        url,
                        exc,
                    )
                    raise ConnectorRequestError(
                        f"{self.source}: non-retryable request failure.",
                        status_code=last_status,
                    ) from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc
                last_status = None

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Google request retry source=%s attempt=%s/%s wait_seconds=%.2f url=%s",
                self.source,
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error(
            "Google request failed source=%s method=%s url=%s error=%s",
            self.source,
            method,
            url,
            last_error,
        )
        raise ConnectorRequestError(
            f"{self.source}: request failed.",
            status_code=last_status,
        ) from last_error
