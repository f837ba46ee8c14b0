"""
tests/test_google_connectors.py

Request shaping and payload parsing for the Drive/Sheets connectors.
No network; ``requests.Session`` is mocked.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from governance.config import GoogleHTTPSettings
from governance.connectors.base import ConnectorRequestError, Credentials, ResourceKind
from governance.connectors.drive_connector import FOLDER_MIME_TYPE, GoogleDriveConnector
from governance.connectors.sheets_connector import GoogleSheetsConnector

CREDENTIALS = Credentials(access_token="ya29.token", tenant_id="tenant-a")


def _response(status_code: int = 200, payload: object | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = json.dumps(payload).encode() if payload is not None else b""
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code}", response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def _session(*responses: MagicMock) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = list(responses)
    return session


def _drive(session: MagicMock, **overrides) -> GoogleDriveConnector:
    return GoogleDriveConnector(
        credentials=CREDENTIALS,
        http_settings=GoogleHTTPSettings(**overrides),
        session=session,
    )


def _sheets(session: MagicMock) -> GoogleSheetsConnector:
    return GoogleSheetsConnector(credentials=CREDENTIALS, http_settings=GoogleHTTPSettings(), session=session)


class TestDriveConnector:
    def test_search_builds_scoped_query(self) -> None:
        session = _session(_response(payload={"files": [{"id": "f1", "name": "Week 2026-10-12", "mimeType": FOLDER_MIME_TYPE}]}))

        matches = _drive(session).search("Week 2026-10-12", ResourceKind.FOLDER, "root-1")

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["headers"]["Authorization"] == "Bearer ya29.token"
        assert kwargs["params"]["q"] == (
            f"name='Week 2026-10-12' and mimeType='{FOLDER_MIME_TYPE}' "
            "and 'root-1' in parents and trashed=false"
        )
        assert matches[0].id == "f1"
        assert matches[0].kind == ResourceKind.FOLDER

    def test_search_escapes_quotes(self) -> None:
        session = _session(_response(payload={"files": []}))

        assert _drive(session).search("Bob's folder", ResourceKind.FOLDER) == []
        assert "name='Bob\\'s folder'" in session.request.call_args.kwargs["params"]["q"]

    def test_create_sends_parent(self) -> None:
        session = _session(_response(payload={"id": "new-1", "name": "Week 2026-10-12"}))

        created = _drive(session).create("Week 2026-10-12", ResourceKind.FOLDER, "root-1")

        body = session.request.call_args.kwargs["json"]
        assert body == {"name": "Week 2026-10-12", "mimeType": FOLDER_MIME_TYPE, "parents": ["root-1"]}
        assert created.id == "new-1"
        assert created.parent_id == "root-1"

    def test_create_without_id_is_rejected(self) -> None:
        session = _session(_response(payload={"name": "x"}))

        with pytest.raises(ConnectorRequestError):
            _drive(session).create("x", ResourceKind.FOLDER)

    def test_upload_uses_multipart_related(self) -> None:
        session = _session(
            _response(payload={"id": "file-1", "name": "a.txt", "mimeType": "text/plain", "createdTime": "t"})
        )

        uploaded = _drive(session).upload(parent_id="week-1", file_name="a.txt", content=b"hello", mime_type="text/plain")

        kwargs = session.request.call_args.kwargs
        assert kwargs["params"]["uploadType"] == "multipart"
        assert kwargs["headers"]["Content-Type"].startswith("multipart/related; boundary=")
        assert b'"parents": ["week-1"]' in kwargs["data"]
        assert b"hello" in kwargs["data"]
        assert uploaded.id == "file-1"

    def test_non_retryable_status_raises_without_retry(self) -> None:
        session = _session(_response(status_code=403, payload={"error": "forbidden"}))

        with pytest.raises(ConnectorRequestError) as ctx:
            _drive(session, max_retries=3).get("f1")

        assert ctx.value.status_code == 403
        assert session.request.call_count == 1

    def test_retryable_status_is_retried_when_configured(self, monkeypatch) -> None:
        monkeypatch.setattr("governance.connectors.base.time.sleep", lambda _: None)
        session = _session(
            _response(status_code=503),
            _response(payload={"id": "f1", "name": "Root", "webViewLink": "https://drive/f1"}),
        )

        resource = _drive(session, max_retries=1).get("f1")

        assert resource.web_view_link == "https://drive/f1"
        assert session.request.call_count == 2

    def test_default_settings_do_not_retry(self) -> None:
        session = _session(_response(status_code=503))

        with pytest.raises(ConnectorRequestError):
            _drive(session).get("f1")

        assert session.request.call_count == 1


class TestSheetsConnector:
    def test_create_spreadsheet_maps_sheet_ids(self) -> None:
        session = _session(
            _response(
                payload={
                    "spreadsheetId": "sheet-1",
                    "sheets": [
                        {"properties": {"sheetId": 0, "title": "Decisions"}},
                        {"properties": {"sheetId": 42, "title": "Risks"}},
                    ],
                }
            )
        )

        handle = _sheets(session).create_spreadsheet("Governance Register", ["Decisions", "Risks"])

        assert handle.id == "sheet-1"
        assert handle.sheet_ids == {"Decisions": 0, "Risks": 42}

    def test_header_row_is_bold(self) -> None:
        session = _session(_response(payload={}))

        _sheets(session).write_header_row("sheet-1", 42, ["Timestamp", "Week"])

        kwargs = session.request.call_args.kwargs
        assert kwargs["url"].endswith("/spreadsheets/sheet-1:batchUpdate")
        update = kwargs["json"]["requests"][0]["updateCells"]
        assert update["range"]["sheetId"] == 42
        assert update["range"]["endColumnIndex"] == 2
        cell = update["rows"][0]["values"][0]
        assert cell["userEnteredValue"] == {"stringValue": "Timestamp"}
        assert cell["userEnteredFormat"]["textFormat"]["bold"] is True

    def test_append_row_is_raw(self) -> None:
        session = _session(_response(payload={"updates": {}}))

        _sheets(session).append_row("sheet-1", "Decisions!A:Z", ["t", "2026-10-12", "x"])

        kwargs = session.request.call_args.kwargs
        assert kwargs["url"].endswith("/spreadsheets/sheet-1/values/Decisions!A:Z:append")
        assert kwargs["params"]["valueInputOption"] == "RAW"
        assert kwargs["json"] == {"values": [["t", "2026-10-12", "x"]]}

    def test_read_rows_without_values_is_empty(self) -> None:
        session = _session(_response(payload={"range": "Risks!A2:Z1000"}))

        assert _sheets(session).read_rows("sheet-1", "Risks!A2:Z") == []

    def test_read_rows_returns_values(self) -> None:
        session = _session(_response(payload={"values": [["a", "b"], ["c"]]}))

        assert _sheets(session).read_rows("sheet-1", "Risks!A2:Z") == [["a", "b"], ["c"]]
