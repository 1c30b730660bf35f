"""Factory bundled with bindctx, used when discovery names no other provider."""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from bindctx.application.content_resolver import ContentClassResolver
from bindctx.domain import BindingContext, BindingException, ContextFactory, ILoadingScope

logger = logging.getLogger(__name__)

# The only property understood by the bundled factory.
DEFAULT_NAMESPACE_KEY = "bindctx.default.namespace"


class DefaultBindingContext(BindingContext):
    """Context recording the classes and settings it was created for.

    Attributes:
        classes: Classes known to the context.
        package_path: Package path the context was created from, if any.
        properties: Read-only view of the accepted properties.
    """

    def __init__(
        self,
        classes: Sequence[Any],
        properties: Mapping[str, Any],
        package_path: Optional[str] = None,
    ) -> None:
        self._classes: Tuple[Any, ...] = tuple(classes)
        self._properties = MappingProxyType(dict(properties))
        self._package_path = package_path

    @property
    def classes(self) -> Tuple[Any, ...]:
        return self._classes

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._properties

    @property
    def package_path(self) -> Optional[str]:
        return self._package_path

    @property
    def namespace(self) -> str:
        return self._properties.get(DEFAULT_NAMESPACE_KEY, "")

    def knows(self, cls: Any) -> bool:
        """Check whether ``cls`` was bound into this context."""
        return any(known is cls for known in self._classes)

    def __repr__(self) -> str:
        names = ", ".join(getattr(cls, "__name__", repr(cls)) for cls in self._classes)
        return f"DefaultBindingContext(classes=[{names}])"


class DefaultContextFactory(ContextFactory):
    """Context factory bundled with the library.

    Rejects every property other than ``DEFAULT_NAMESPACE_KEY``.
    """

    def create_context(self, classes: Sequence[Any], properties: Mapping[str, Any]) -> BindingContext:
        self._check_properties(properties)
        logger.debug("Creating default context for %d classes", len(classes))
        return DefaultBindingContext(classes, properties)

    def create_context_for_path(
        self,
        package_path: str,
        scope: ILoadingScope,
        properties: Mapping[str, Any],
    ) -> BindingContext:
        self._check_properties(properties)
        classes = ContentClassResolver(scope).resolve(package_path)
        return DefaultBindingContext(classes, properties, package_path=package_path)

    @staticmethod
    def _check_properties(properties: Mapping[str, Any]) -> None:
        for key in properties:
            if key != DEFAULT_NAMESPACE_KEY:
                raise BindingException(f'property "{key}" is not supported')
