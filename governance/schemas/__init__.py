"""
governance/schemas package marker.
"""

from governance.schemas.entries import (
    DriveFileResponse,
    EntryCreateRequest,
    EntryResponse,
    RegisterLinksResponse,
)

__all__ = [
    "DriveFileResponse",
    "EntryCreateRequest",
    "EntryResponse",
    "RegisterLinksResponse",
]
