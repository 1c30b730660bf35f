"""
Testing utilities module.

Provides helpers for testing applications and factories built on bindctx.
"""

from .utilities import StaticLoadingScope, factory_override

__all__ = [
    "StaticLoadingScope",
    "factory_override",
]
