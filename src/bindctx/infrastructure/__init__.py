"""
Infrastructure layer - External integrations.

This layer contains the import-system loading scope, the isolation-unit
registry, the bundled default factory and test helpers. The FastAPI helpers
live in ``bindctx.infrastructure.fastapi_integration`` and need the
``fastapi`` extra.
It depends on both Application and Domain layers.
"""

from . import isolation, loading, testing

__all__ = [
    "isolation",
    "loading",
    "testing",
]
