"""Application layer - Ordered discovery of the context factory."""

import inspect
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from bindctx.domain import (
    DEFAULT_FACTORY_CLASS,
    ENTRY_POINT_GROUP,
    FACTORY_ENV_VAR,
    FACTORY_KEY,
    LEGACY_FACTORY_KEY,
    PROPERTIES_FILE_NAME,
    BindingException,
    ConfigurationError,
    ContextFactory,
    DiscoveryTier,
    ILoadingScope,
    ProviderInstantiationError,
    ProviderNotFoundError,
    ResolutionRequest,
    ResolvedProvider,
    TypeLoadError,
)
from bindctx.domain.naming import package_of, qualified_name

logger = logging.getLogger(__name__)

_FACTORY_METHODS = ("create_context", "create_context_for_path")


def parse_properties(text: str) -> Dict[str, str]:
    """Parse ``key=value`` lines of a ``.properties`` resource.

    Blank lines and lines starting with ``#`` or ``!`` are ignored. The first
    ``=`` or ``:`` separates key from value; both are stripped.

    Example:
        >>> parse_properties("# factory\\nbindctx.ContextFactory = app.Factory\\n")
        {'bindctx.ContextFactory': 'app.Factory'}
    """
    values: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        separators = [index for index in (line.find("="), line.find(":")) if index != -1]
        if not separators:
            values[line] = ""
            continue
        split = min(separators)
        values[line[:split].strip()] = line[split + 1 :].strip()
    return values


def _is_static_factory(factory_type: type) -> bool:
    """Check for the legacy shape: factory methods defined as static or class methods."""
    for name in _FACTORY_METHODS:
        attribute = inspect.getattr_static(factory_type, name, None)
        if not isinstance(attribute, (staticmethod, classmethod)):
            return False
    return True


class DiscoveryChainResolver:
    """Decides which context factory to use, then loads and instantiates it.

    Tiers are consulted strictly in order and the first one that yields a
    name wins:

    1. ``FACTORY_KEY`` in the request properties.
    2. ``FACTORY_KEY`` (or ``BINDCTX_CONTEXT_FACTORY``) in the environment.
    3. The first factory registered in the ``bindctx.context_factories``
       entry-point group. Which one comes first when several are registered
       is implementation-defined.
    4. ``binding.properties`` beside the first content class (package-path
       requests only).
    5. ``DEFAULT_FACTORY_CLASS``.

    Only the absence of a name moves on to the next tier. A name that fails
    to load or instantiate is reported, never replaced by a lower tier.

    Attributes:
        _environ: Process-wide configuration; ``os.environ`` when None.
        _default_factory: Name used by the last tier, or None to disable it.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        default_factory: Optional[str] = DEFAULT_FACTORY_CLASS,
    ) -> None:
        self._environ = environ
        self._default_factory = default_factory

    def resolve(
        self,
        request: ResolutionRequest,
        scope: ILoadingScope,
        content_classes: Sequence[Any] = (),
    ) -> ResolvedProvider:
        """Find the factory name for ``request``.

        Args:
            request: The resolution request.
            scope: Scope consulted for registered factories and resources.
            content_classes: Representative classes of a package-path request.

        Returns:
            The winning name and the tier that produced it.

        Raises:
            ConfigurationError: If a consulted source is malformed.
            ProviderNotFoundError: If no tier yields a name.
        """
        searched: List[DiscoveryTier] = []

        explicit = self._from_properties(request.properties)
        if isinstance(explicit, type):
            return self._found(qualified_name(explicit), DiscoveryTier.PROPERTIES, explicit)
        if explicit:
            return self._found(explicit, DiscoveryTier.PROPERTIES)
        searched.append(DiscoveryTier.PROPERTIES)

        name = self._from_environment()
        if name:
            return self._found(name, DiscoveryTier.ENVIRONMENT)
        searched.append(DiscoveryTier.ENVIRONMENT)

        name = self._from_entry_points(scope)
        if name:
            return self._found(name, DiscoveryTier.ENTRY_POINTS)
        searched.append(DiscoveryTier.ENTRY_POINTS)

        if request.package_path is not None and content_classes:
            name = self._from_properties_file(scope, content_classes[0])
            if name:
                return self._found(name, DiscoveryTier.PROPERTIES_FILE)
            searched.append(DiscoveryTier.PROPERTIES_FILE)

        if self._default_factory:
            return self._found(self._default_factory, DiscoveryTier.DEFAULT)
        searched.append(DiscoveryTier.DEFAULT)

        raise ProviderNotFoundError(tiers=searched)

    def load(self, resolved: ResolvedProvider, scope: ILoadingScope) -> Any:
        """Load the factory type named by ``resolved``.

        A factory class given directly in the properties is returned as is.

        Raises:
            ProviderNotFoundError: If the name does not load.
            ProviderInstantiationError: If loading fails for another reason,
                such as an error raised while importing the factory's module.
        """
        if resolved.factory_type is not None:
            return resolved.factory_type
        try:
            return scope.load_type(resolved.type_name)
        except TypeLoadError as e:
            raise ProviderNotFoundError(resolved.type_name, reason=e.reason) from e
        except BindingException:
            raise
        except Exception as e:
            raise ProviderInstantiationError(resolved.type_name, str(e) or type(e).__name__) from e

    def instantiate(self, factory_type: Any, type_name: str) -> Any:
        """Turn a loaded factory type into a usable factory.

        ``ContextFactory`` subclasses are constructed without arguments.
        Legacy classes exposing both factory methods as static or class
        methods are used as they are.

        Raises:
            ProviderInstantiationError: If the type has the wrong shape or its
                constructor fails.
        """
        if not isinstance(factory_type, type):
            raise ProviderInstantiationError(type_name, f"{factory_type!r} is not a class")

        if issubclass(factory_type, ContextFactory):
            if inspect.isabstract(factory_type):
                raise ProviderInstantiationError(type_name, "class is abstract")
            try:
                return factory_type()
            except Exception as e:
                raise ProviderInstantiationError(type_name, str(e) or type(e).__name__) from e

        if _is_static_factory(factory_type):
            logger.debug("Using legacy static factory %s", type_name)
            return factory_type

        raise ProviderInstantiationError(type_name, f"class does not implement {ContextFactory.__name__}")

    @staticmethod
    def forwarded_properties(factory: Any, properties: Mapping[str, Any]) -> Dict[str, Any]:
        """Properties to hand to ``factory``: the factory key is stripped unless accepted."""
        forwarded = dict(properties)
        if not getattr(factory, "accepts_factory_key", False):
            forwarded.pop(FACTORY_KEY, None)
        return forwarded

    @staticmethod
    def _found(name: str, tier: DiscoveryTier, factory_type: Any = None) -> ResolvedProvider:
        logger.debug("Context factory %s selected by tier %s", name, tier)
        return ResolvedProvider(type_name=name, tier=tier, factory_type=factory_type)

    @staticmethod
    def _from_properties(properties: Mapping[str, Any]) -> Union[str, type, None]:
        value = properties.get(FACTORY_KEY)
        if value is None:
            return None
        if isinstance(value, type):
            return value
        if isinstance(value, str):
            return value.strip() or None
        raise ConfigurationError(
            f"Property {FACTORY_KEY} must be a class name or a class, got {type(value).__name__}"
        )

    def _from_environment(self) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        for key in (FACTORY_KEY, FACTORY_ENV_VAR):
            value = (environ.get(key) or "").strip()
            if value:
                return value
        return None

    @staticmethod
    def _from_entry_points(scope: ILoadingScope) -> Optional[str]:
        try:
            for name in scope.discover(ENTRY_POINT_GROUP):
                if name and name.strip():
                    return name.strip()
        except BindingException:
            raise
        except Exception as e:
            raise ConfigurationError(f"Error while searching for service [{ENTRY_POINT_GROUP}]") from e
        return None

    @staticmethod
    def _from_properties_file(scope: ILoadingScope, content_class: Any) -> Optional[str]:
        package = package_of(content_class)
        text = scope.read_resource(package, PROPERTIES_FILE_NAME)
        if text is None:
            logger.debug("No %s in package %s", PROPERTIES_FILE_NAME, package)
            return None

        values = parse_properties(text)
        name = values.get(FACTORY_KEY) or values.get(LEGACY_FACTORY_KEY)
        if not name:
            raise ConfigurationError(
                f"{PROPERTIES_FILE_NAME} in package {package} is missing the {FACTORY_KEY} property"
            )
        return name
