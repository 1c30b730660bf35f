import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from bindctx.application.access_validator import AccessibilityValidator
from bindctx.application.content_resolver import ContentClassResolver
from bindctx.application.discovery import DiscoveryChainResolver
from bindctx.domain import BindingContext, IContextFinder, ILoadingScope, ResolutionRequest

if TYPE_CHECKING:
    from bindctx.infrastructure.isolation import UnitRegistry

logger = logging.getLogger(__name__)


class ContextFinder(IContextFinder):
    """Main entry point for obtaining binding contexts.

    Orchestrates content-class resolution, factory discovery, accessibility
    checks and the final call into the chosen factory.

    Attributes:
        _scope: Default scope for loading factories and content classes.
        _validator: Checks and forwards isolation-unit grants.
        _discovery: Picks, loads and instantiates the factory.
    """

    def __init__(
        self,
        scope: ILoadingScope,
        registry: "UnitRegistry",
        discovery: Optional[DiscoveryChainResolver] = None,
    ) -> None:
        """Initialize the finder.

        Args:
            scope: Default loading scope.
            registry: Isolation-unit permission table.
            discovery: Discovery chain; a default chain when None.
        """
        self._scope = scope
        self._validator = AccessibilityValidator(registry)
        self._discovery = discovery or DiscoveryChainResolver()

    @property
    def scope(self) -> ILoadingScope:
        return self._scope

    def new_instance(
        self,
        *classes: Any,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> BindingContext:
        """Create a context that knows about ``classes``.

        An empty class list is valid.

        Raises:
            ValueError: If a class is None.
            BindingException: If resolution fails, or as raised by the factory.

        Example:
            >>> context = finder.new_instance(Invoice, Customer)
            >>> context = finder.new_instance(Invoice, properties={FACTORY_KEY: "app.Factory"})
        """
        return self.find(ResolutionRequest.for_classes(classes, properties))

    def new_instance_from_path(
        self,
        package_path: str,
        scope: Optional[ILoadingScope] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> BindingContext:
        """Create a context for the packages of ``package_path``.

        Args:
            package_path: Colon-separated package names.
            scope: Scope to load from; the finder's scope when None.
            properties: Provider-specific properties.

        Raises:
            ValueError: If the path is empty or contains an empty package name.
            BindingException: If resolution fails, or as raised by the factory.
        """
        return self.find(ResolutionRequest.for_path(package_path, scope, properties))

    def find(self, request: ResolutionRequest) -> BindingContext:
        """Resolve the factory for ``request`` and ask it for a context.

        Exceptions raised by the factory's own ``create_context`` calls are
        propagated unchanged.
        """
        scope = request.scope or self._scope

        if request.package_path is not None:
            content_classes = ContentClassResolver(scope).resolve(request.package_path)
        else:
            content_classes = list(request.classes or ())

        resolved = self._discovery.resolve(request, scope, content_classes)
        factory_type = self._discovery.load(resolved, scope)
        factory = self._discovery.instantiate(factory_type, resolved.type_name)

        self._validator.delegate_opens(content_classes, factory_type)

        properties = self._discovery.forwarded_properties(factory, request.properties)
        logger.debug("Creating context with %s (tier %s)", resolved.type_name, resolved.tier)
        if request.package_path is not None:
            return factory.create_context_for_path(request.package_path, scope, properties)
        return factory.create_context(list(content_classes), properties)
