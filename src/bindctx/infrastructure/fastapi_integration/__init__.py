"""
FastAPI integration module.

Provides helpers for serving binding contexts to FastAPI endpoints.
"""

from .integration import (
    create_context_dependency,
    create_path_context_dependency,
    install_binding_error_handler,
)

__all__ = [
    "create_context_dependency",
    "create_path_context_dependency",
    "install_binding_error_handler",
]
