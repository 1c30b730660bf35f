"""
bindctx: Locates, validates and instantiates binding-context providers.

Public API exports for the bindctx package.
"""

from typing import Any, Mapping, Optional

# Application exports
from bindctx.application import ContextCache, ContextFinder, DiscoveryChainResolver

# Domain exports
from bindctx.domain import (
    FACTORY_KEY,
    AccessibilityError,
    BindingContext,
    BindingException,
    ConfigurationError,
    ContextFactory,
    DiscoveryTier,
    ILoadingScope,
    ProviderInstantiationError,
    ProviderNotFoundError,
)

# Infrastructure exports
from bindctx.infrastructure.isolation import UnitRegistry, default_registry
from bindctx.infrastructure.loading import ImportlibLoadingScope

__version__ = "0.1.0"

_finder = ContextFinder(ImportlibLoadingScope(), default_registry)
_cache = ContextCache(_finder)


def get_default_finder() -> ContextFinder:
    """Finder backed by the import system and the default unit registry."""
    return _finder


def new_instance(*classes: Any, properties: Optional[Mapping[str, Any]] = None) -> BindingContext:
    """Create a binding context for ``classes`` with the default finder.

    Example:
        >>> import bindctx
        >>> context = bindctx.new_instance(Invoice, Customer)
    """
    return _finder.new_instance(*classes, properties=properties)


def new_instance_from_path(
    package_path: str,
    scope: Optional[ILoadingScope] = None,
    properties: Optional[Mapping[str, Any]] = None,
) -> BindingContext:
    """Create a binding context for a colon-separated package path with the default finder."""
    return _finder.new_instance_from_path(package_path, scope=scope, properties=properties)


def context_for(cls: Any) -> BindingContext:
    """Return the binding context for a single class, reusing the last one when possible."""
    return _cache.get(cls)


__all__ = [
    # Entry points
    "new_instance",
    "new_instance_from_path",
    "context_for",
    "get_default_finder",
    # Components
    "ContextFinder",
    "ContextCache",
    "DiscoveryChainResolver",
    "ImportlibLoadingScope",
    "UnitRegistry",
    "default_registry",
    # Interfaces
    "BindingContext",
    "ContextFactory",
    "ILoadingScope",
    # Enums and constants
    "DiscoveryTier",
    "FACTORY_KEY",
    # Exceptions
    "BindingException",
    "ProviderNotFoundError",
    "ProviderInstantiationError",
    "AccessibilityError",
    "ConfigurationError",
]
