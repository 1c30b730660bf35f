from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterator, Mapping, Optional, Sequence


class BindingContext(ABC):
    """Opaque handle returned to the caller by a context factory.

    The library never mutates or tracks a context after handing it out.
    """


class ILoadingScope(ABC):
    """Abstract interface for loading types and resources by name."""

    @abstractmethod
    def load_type(self, name: str) -> Any:
        """Load the object named by ``name``.

        Args:
            name: ``"pkg.mod.Name"`` or ``"pkg.mod:Name"``.

        Raises:
            TypeLoadError: If the name cannot be loaded.
        """

    @abstractmethod
    def read_resource(self, package: str, resource_name: str) -> Optional[str]:
        """Read a text resource shipped inside ``package``.

        Returns:
            The resource text, or None if the package or resource is absent.
        """

    @abstractmethod
    def discover(self, group: str) -> Iterator[str]:
        """Lazily yield the type names registered under ``group``."""


class ContextFactory(ABC):
    """Abstract interface for the provider that builds binding contexts.

    Implementations must reject property keys they do not understand by
    raising ``BindingException``.

    Attributes:
        accepts_factory_key: When True the reserved factory key is forwarded
            in ``properties`` instead of being stripped.
    """

    accepts_factory_key: ClassVar[bool] = False

    @abstractmethod
    def create_context(self, classes: Sequence[Any], properties: Mapping[str, Any]) -> BindingContext:
        """Create a context that knows about ``classes``.

        Args:
            classes: Classes to be bound. May be empty.
            properties: Provider-specific properties.
        """

    @abstractmethod
    def create_context_for_path(
        self,
        package_path: str,
        scope: ILoadingScope,
        properties: Mapping[str, Any],
    ) -> BindingContext:
        """Create a context for the colon-separated ``package_path``.

        Args:
            package_path: Package names separated by ``:``.
            scope: Scope used to load the packages' classes.
            properties: Provider-specific properties.
        """


class IContextFinder(ABC):
    """Abstract interface for resolving binding contexts."""

    @abstractmethod
    def new_instance(
        self,
        *classes: Any,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> BindingContext:
        """Resolve a factory and build a context for ``classes``."""

    @abstractmethod
    def new_instance_from_path(
        self,
        package_path: str,
        scope: Optional[ILoadingScope] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> BindingContext:
        """Resolve a factory and build a context for ``package_path``."""
