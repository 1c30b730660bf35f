"""
Isolation module.

Provides the permission table that records isolation units and their open grants.
"""

from .registry import UnitRegistry, default_registry

__all__ = [
    "UnitRegistry",
    "default_registry",
]
