"""
governance/connectors package marker.
"""

from governance.connectors.base import (
    ConnectorRequestError,
    ContainerStore,
    Credentials,
    DriveFile,
    GoogleAPIConnector,
    RemoteResource,
    ResourceKind,
    SpreadsheetHandle,
    TabularStore,
)
from governance.connectors.drive_connector import GoogleDriveConnector
from governance.connectors.sheets_connector import GoogleSheetsConnector

__all__ = [
    "ConnectorRequestError",
    "ContainerStore",
    "Credentials",
    "DriveFile",
    "GoogleAPIConnector",
    "GoogleDriveConnector",
    "GoogleSheetsConnector",
    "RemoteResource",
    "ResourceKind",
    "SpreadsheetHandle",
    "TabularStore",
]
