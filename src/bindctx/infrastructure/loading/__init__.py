"""
Loading module.

Provides the default loading scope backed by the interpreter's import system.
"""

from .importlib_scope import ImportlibLoadingScope

__all__ = [
    "ImportlibLoadingScope",
]
