"""
Register-layer exceptions for resolution, encoding and remote I/O flows.
"""

from __future__ import annotations

from typing import Any


class GovernanceStoreError(Exception):
    """
    Base exception for register failures.

    Carries the operation, record type and resource name involved so callers
    can diagnose a failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        record_type: str | None = None,
        resource_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.record_type = record_type
        self.resource_name = resource_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "operation": self.operation,
            "record_type": self.record_type,
            "resource_name": self.resource_name,
        }


class ResolutionFailure(GovernanceStoreError):
    """Raised when a remote search/create call fails or returns malformed data."""


class EncodingFailure(GovernanceStoreError):
    """Raised when an entry is missing a field its schema requires."""


class RemoteIOFailure(GovernanceStoreError):
    """Raised when a remote append/fetch call fails."""


class UnknownRecordType(GovernanceStoreError):
    """Raised when a record type is not registered."""

    def __init__(self, record_type: str, *, operation: str = "schema_for") -> None:
        super().__init__(
            f"Unknown record type '{record_type}'.",
            operation=operation,
            record_type=record_type,
        )
