"""
Repository layer exports.
"""

from governance.repositories.record_store import RecordStore

__all__ = ["RecordStore"]
