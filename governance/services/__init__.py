"""
governance/services package marker.
"""

from governance.services.aggregation_service import AggregationService
from governance.services.document_service import DocumentService
from governance.services.factory import (
    RegisterServices,
    build_register_services,
    get_resolver_caches,
    get_week_clock,
)

__all__ = [
    "AggregationService",
    "DocumentService",
    "RegisterServices",
    "build_register_services",
    "get_resolver_caches",
    "get_week_clock",
]
