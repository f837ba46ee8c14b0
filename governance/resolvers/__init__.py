"""
governance/resolvers package marker.
"""

from governance.resolvers.resource_resolver import ResolverCaches, ResourceResolver

__all__ = ["ResolverCaches", "ResourceResolver"]
