"""
Domain layer - Core models, interfaces and errors.

This layer describes binding contexts, context factories and the discovery
vocabulary. It has no dependencies on other layers.
"""

from .constants import (
    CONVENTIONAL_FACTORY_NAME,
    CORE_PACKAGE,
    DEFAULT_FACTORY_CLASS,
    ENTRY_POINT_GROUP,
    FACTORY_ENV_VAR,
    FACTORY_KEY,
    INDEX_FILE_NAME,
    LEGACY_FACTORY_KEY,
    PROPERTIES_FILE_NAME,
)
from .enums import DiscoveryTier
from .exceptions import (
    AccessibilityError,
    BindingException,
    ConfigurationError,
    ProviderInstantiationError,
    ProviderNotFoundError,
    TypeLoadError,
)
from .interfaces import BindingContext, ContextFactory, IContextFinder, ILoadingScope
from .models import CacheEntry, IsolationUnit, ResolutionRequest, ResolvedProvider

__all__ = [
    # Constants
    "CONVENTIONAL_FACTORY_NAME",
    "CORE_PACKAGE",
    "DEFAULT_FACTORY_CLASS",
    "ENTRY_POINT_GROUP",
    "FACTORY_ENV_VAR",
    "FACTORY_KEY",
    "INDEX_FILE_NAME",
    "LEGACY_FACTORY_KEY",
    "PROPERTIES_FILE_NAME",
    # Enums
    "DiscoveryTier",
    # Exceptions
    "BindingException",
    "TypeLoadError",
    "ProviderNotFoundError",
    "ProviderInstantiationError",
    "AccessibilityError",
    "ConfigurationError",
    # Interfaces
    "BindingContext",
    "ContextFactory",
    "IContextFinder",
    "ILoadingScope",
    # Models
    "ResolutionRequest",
    "ResolvedProvider",
    "IsolationUnit",
    "CacheEntry",
]
