"""
governance/schemas/entries.py

Request and response schemas for register endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from governance.domain.entries import GovernanceEntry


class EntryCreateRequest(BaseModel):
    """
    API request model for appending one register entry.

    Fields outside the entry type's schema are ignored.
    """

    type: str = Field(..., description="decision, risk, dataset or financial")
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: str | None = None
    owner: str | None = None
    impact: str | None = None
    severity: str | None = None
    likelihood: str | None = None
    mitigation: str | None = None
    source: str | None = None
    category: str | None = None
    amount: float | None = Field(default=None, allow_inf_nan=False)

    def entry_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude={"type"}, exclude_none=True)


class EntryResponse(BaseModel):
    """
    API response model for one register entry.
    """

    id: str | None = None
    type: str
    timestamp: datetime | None = None
    week: str | None = None
    title: str
    description: str
    status: str | None = None
    owner: str | None = None
    impact: str | None = None
    severity: str | None = None
    likelihood: str | None = None
    mitigation: str | None = None
    source: str | None = None
    category: str | None = None
    amount: float | None = None

    @classmethod
    def from_entry(cls, entry: GovernanceEntry) -> "EntryResponse":
        return cls(**entry.to_dict())


class RegisterLinksResponse(BaseModel):
    week_folder_url: str
    spreadsheet_url: str


class DriveFileResponse(BaseModel):
    """
    API response model for one document in the week folder.
    """

    id: str
    name: str
    mime_type: str
    created_time: str
    web_view_link: str | None = None
