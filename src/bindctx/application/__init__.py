"""
Application layer - Use cases and orchestration.

This layer resolves, validates and instantiates context factories.
It depends only on the Domain layer.
"""

from .access_validator import AccessibilityValidator
from .content_resolver import ContentClassResolver
from .context_cache import ContextCache
from .context_finder import ContextFinder
from .discovery import DiscoveryChainResolver, parse_properties

__all__ = [
    "ContextFinder",
    "ContextCache",
    "DiscoveryChainResolver",
    "ContentClassResolver",
    "AccessibilityValidator",
    "parse_properties",
]
