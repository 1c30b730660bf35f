import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bindctx.domain import ConfigurationError, IsolationUnit

logger = logging.getLogger(__name__)


class UnitRegistry:
    """Permission table of isolation units.

    Every module belongs to the unit whose package prefix matches it most
    specifically, or to the unnamed unit when no declared unit owns it.

    Attributes:
        _units: Declared units by name.
        _unnamed: Shared unnamed unit.
        _lock: Guards declarations.

    Example:
        >>> registry = UnitRegistry()
        >>> registry.declare("app", packages=["app"], opens={"app.model": ["bindctx"]})
        >>> registry.unit_of_module("app.model.widgets").name
        'app'
    """

    def __init__(self) -> None:
        """Initialize an empty registry: every module is in the unnamed unit."""
        self._units: Dict[str, IsolationUnit] = {}
        self._unnamed = IsolationUnit()
        self._lock = threading.Lock()

    @property
    def unnamed(self) -> IsolationUnit:
        return self._unnamed

    def declare(
        self,
        name: str,
        packages: Iterable[str],
        opens: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> IsolationUnit:
        """Declare a named unit.

        Args:
            name: Unit name.
            packages: Package prefixes owned by the unit.
            opens: Package -> unit names it is open to. ``"*"`` opens the
                package to every unit.

        Returns:
            The declared unit.

        Raises:
            ConfigurationError: If the name or a package is already declared,
                or an opened package is not owned by the unit.
        """
        unit = IsolationUnit(
            name=name,
            packages=set(packages),
            opens={package: set(targets) for package, targets in (opens or {}).items()},
        )
        for package in unit.opens:
            if not unit.owns(package):
                raise ConfigurationError(f"Unit {name} cannot open package {package} it does not own")

        with self._lock:
            if name in self._units:
                raise ConfigurationError(f"Unit {name} is already declared")
            for other in self._units.values():
                clash = unit.packages & other.packages
                if clash:
                    raise ConfigurationError(
                        f"Packages {sorted(clash)} of unit {name} already belong to unit {other.name}"
                    )
            self._units[name] = unit

        logger.debug("Declared unit %s owning %s", name, sorted(unit.packages))
        return unit

    def get(self, name: str) -> Optional[IsolationUnit]:
        return self._units.get(name)

    def units(self) -> List[IsolationUnit]:
        return list(self._units.values())

    def unit_of_module(self, module_name: str) -> IsolationUnit:
        """Find the unit owning ``module_name``."""
        best: Optional[IsolationUnit] = None
        best_length = -1
        for unit in self._units.values():
            for package in unit.packages:
                matches = module_name == package or module_name.startswith(package + ".")
                if matches and len(package) > best_length:
                    best, best_length = unit, len(package)
        return best if best is not None else self._unnamed

    def unit_of(self, obj: Any) -> IsolationUnit:
        """Find the unit owning the module that defines ``obj``."""
        return self.unit_of_module(getattr(obj, "__module__", None) or "builtins")

    def clear(self) -> None:
        """Forget every declared unit."""
        with self._lock:
            self._units.clear()


default_registry = UnitRegistry()
