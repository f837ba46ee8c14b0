"""
governance/connectors/sheets_connector.py

Google Sheets v4 connector for the register spreadsheet.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import quote

import requests

from governance.config import GoogleHTTPSettings
from governance.connectors.base import (
    ConnectorRequestError,
    Credentials,
    GoogleAPIConnector,
    SpreadsheetHandle,
)

logger = logging.getLogger(__name__)

HEADER_BACKGROUND = {"red": 0.2, "green": 0.3, "blue": 0.5}
HEADER_FOREGROUND = {"red": 1, "green": 1, "blue": 1}


class GoogleSheetsConnector(GoogleAPIConnector):
    """
    Tabular store backed by the Sheets v4 REST API.

    Rows are written with ``valueInputOption=RAW`` so week keys and timestamps
    are stored verbatim instead of being coerced into spreadsheet dates.
    """

    source = "google_sheets"

    def __init__(
        self,
        *,
        credentials: Credentials,
        http_settings: GoogleHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(credentials=credentials, http_settings=http_settings, session=session)
        self._base_url = http_settings.sheets_base_url.rstrip("/")

    def create_spreadsheet(self, title: str, sheet_titles: Sequence[str]) -> SpreadsheetHandle:
        payload = self._request_json(
            method="POST",
            url=f"{self._base_url}/spreadsheets",
            json_body={
                "properties": {"title": title},
                "sheets": [{"properties": {"title": sheet_title}} for sheet_title in sheet_titles],
            },
        )
        spreadsheet_id = payload.get("spreadsheetId") if isinstance(payload, dict) else None
        if not spreadsheet_id:
            raise ConnectorRequestError(f"{self.source}: create response is missing spreadsheetId.")

        sheet_ids: dict[str, int] = {}
        for sheet in payload.get("sheets") or []:
            properties = sheet.get("properties") or {}
            sheet_title = properties.get("title")
            if sheet_title is not None:
                sheet_ids[str(sheet_title)] = int(properties.get("sheetId") or 0)
        return SpreadsheetHandle(id=str(spreadsheet_id), sheet_ids=sheet_ids)

    def write_header_row(self, spreadsheet_id: str, sheet_id: int, columns: Sequence[str]) -> None:
        """
        Write a bold, coloured header into the first row of *sheet_id*.
        """

        request = {
            "updateCells": {
                "range": {
                    "sheetId": sheet_id,
                    "startRowIndex": 0,
                    "endRowIndex": 1,
                    "startColumnIndex": 0,
                    "endColumnIndex": len(columns),
                },
                "rows": [
                    {
                        "values": [
                            {
                                "userEnteredValue": {"stringValue": column},
                                "userEnteredFormat": {
                                    "backgroundColor": HEADER_BACKGROUND,
                                    "textFormat": {"bold": True, "foregroundColor": HEADER_FOREGROUND},
                                },
                            }
                            for column in columns
                        ]
                    }
                ],
                "fields": "userEnteredValue,userEnteredFormat(backgroundColor,textFormat)",
            }
        }
        self._request_json(
            method="POST",
            url=f"{self._base_url}/spreadsheets/{spreadsheet_id}:batchUpdate",
            json_body={"requests": [request]},
        )

    def append_row(self, spreadsheet_id: str, range_spec: str, values: Sequence[Any]) -> None:
        self._request_json(
            method="POST",
            url=f"{self._base_url}/spreadsheets/{spreadsheet_id}/values/{quote(range_spec, safe='!:')}:append",
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json_body={"values": [list(values)]},
        )

    def read_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        payload = self._request_json(
            method="GET",
            url=f"{self._base_url}/spreadsheets/{spreadsheet_id}/values/{quote(range_spec, safe='!:')}",
            params={"valueRenderOption": "UNFORMATTED_VALUE"},
        )
        rows = payload.get("values") if isinstance(payload, dict) else None
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise ConnectorRequestError(f"{self.source}: unexpected values payload shape.")
        return [list(row) for row in rows]
