"""
governance/api/routers package marker.
"""

from governance.api.routers.documents import router as documents_router
from governance.api.routers.entries import router as entries_router

__all__ = [
    "documents_router",
    "entries_router",
]
