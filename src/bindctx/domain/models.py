import weakref
from typing import Any, Dict, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bindctx.domain.enums import DiscoveryTier
from bindctx.domain.interfaces import ILoadingScope

# Grant target used when the receiving unit is unnamed.
ALL_UNNAMED = "ALL-UNNAMED"

# Grant target meaning "open to every unit".
EVERY_UNIT = "*"


class ResolutionRequest(BaseModel):
    """Value object describing one request for a binding context.

    Exactly one of ``classes`` and ``package_path`` is set.

    Attributes:
        classes: Classes to be bound, in caller order.
        package_path: Colon-separated package names.
        scope: Scope used to load types for the package path.
        properties: Configuration map forwarded to the factory.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    classes: Optional[Tuple[Any, ...]] = Field(default=None, description="Classes to be bound.")
    package_path: Optional[str] = Field(default=None, description="Colon-separated package names.")
    scope: Optional[ILoadingScope] = Field(default=None, description="Scope used to load types.")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Configuration map.")

    @field_validator("properties", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        if value is None:
            return {}
        return dict(value)

    @field_validator("classes")
    @classmethod
    def _no_none_classes(cls, value: Optional[Tuple[Any, ...]]) -> Optional[Tuple[Any, ...]]:
        if value is not None and any(item is None for item in value):
            raise ValueError("classes must not contain None")
        return value

    @field_validator("package_path")
    @classmethod
    def _non_empty_tokens(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and any(not token for token in value.split(":")):
            raise ValueError(f"package path {value!r} contains an empty package name")
        return value

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "ResolutionRequest":
        if (self.classes is None) == (self.package_path is None):
            raise ValueError("exactly one of classes or package_path must be given")
        return self

    @classmethod
    def for_classes(cls, classes: Any, properties: Optional[Dict[str, Any]] = None) -> "ResolutionRequest":
        """Build a request for the classes entry point.

        Raises:
            ValueError: If ``classes`` is None or contains None.
        """
        if classes is None:
            raise ValueError("classes must not be None")
        return cls(classes=tuple(classes), properties=properties)

    @classmethod
    def for_path(
        cls,
        package_path: str,
        scope: Optional[ILoadingScope] = None,
        properties: Optional[Dict[str, Any]] = None,
    ) -> "ResolutionRequest":
        """Build a request for the package-path entry point."""
        if package_path is None:
            raise ValueError("package_path must not be None")
        return cls(package_path=package_path, scope=scope, properties=properties)

    @property
    def packages(self) -> Tuple[str, ...]:
        """Package names of the package path, in order."""
        if self.package_path is None:
            return ()
        return tuple(self.package_path.split(":"))


class ResolvedProvider(BaseModel):
    """Outcome of the discovery chain: which factory name won, and where.

    Attributes:
        type_name: Name of the factory type to load.
        tier: Discovery tier that produced the name.
        factory_type: The factory class itself, when the caller passed one
            instead of a name. Used as is, without loading by name.
    """

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., description="Name of the factory type to load.")
    tier: DiscoveryTier = Field(..., description="Tier that produced the name.")
    factory_type: Optional[Any] = Field(default=None, description="Factory class given directly, if any.")


class IsolationUnit(BaseModel):
    """A named group of packages with explicit open grants.

    A unit with ``name=None`` is unnamed: it is unconstrained and treated as
    open to everyone.

    Attributes:
        name: Unit name, or None for the unnamed unit.
        packages: Package prefixes owned by the unit.
        opens: Package name -> names of units the package is open to.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: Optional[str] = Field(default=None, description="Unit name; None for the unnamed unit.")
    packages: Set[str] = Field(default_factory=set, description="Package prefixes owned by the unit.")
    opens: Dict[str, Set[str]] = Field(
        default_factory=dict,
        description="Package name mapped to the names of units it is open to.",
    )

    @property
    def is_named(self) -> bool:
        return self.name is not None

    @property
    def grant_name(self) -> str:
        """Name other units use to refer to this one in their grants."""
        return self.name if self.name is not None else ALL_UNNAMED

    def owns(self, module_name: str) -> bool:
        """Check whether ``module_name`` lives in one of this unit's packages."""
        return any(module_name == pkg or module_name.startswith(pkg + ".") for pkg in self.packages)

    def is_open(self, package: str, unit: "IsolationUnit") -> bool:
        """Check whether ``package`` is open to ``unit``.

        Args:
            package: Package of this unit.
            unit: The unit asking for access.
        """
        if not self.is_named or unit.name == self.name:
            return True
        targets = self.opens.get(package, set())
        return EVERY_UNIT in targets or unit.grant_name in targets

    def grant_open(self, package: str, unit: "IsolationUnit") -> None:
        """Open ``package`` to ``unit``. The grant is one-directional."""
        if not self.is_named:
            return
        self.opens.setdefault(package, set()).add(unit.grant_name)


class CacheEntry(BaseModel):
    """Immutable snapshot held by the context cache.

    The key class is held weakly. A context that references its own classes
    still keeps the key alive until the entry is replaced or cleared.

    Attributes:
        key_ref: Weak reference to the class the context was built for.
        context: The context built for that class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key_ref: weakref.ReferenceType = Field(..., description="Weak reference to the key class.")
    context: Any = Field(..., description="Context resolved for the key class.")

    @classmethod
    def of(cls, key: type, context: Any) -> "CacheEntry":
        return cls(key_ref=weakref.ref(key), context=context)

    def matches(self, key: Any) -> bool:
        """Check whether this entry was built for exactly ``key``."""
        return self.key_ref() is key
