"""Application layer - Isolation-unit accessibility checks."""

import logging
from typing import TYPE_CHECKING, Any, Sequence

from bindctx.domain import CORE_PACKAGE, AccessibilityError
from bindctx.domain.naming import element_type, is_platform_type, package_of, qualified_name

if TYPE_CHECKING:
    from bindctx.infrastructure.isolation import UnitRegistry

logger = logging.getLogger(__name__)


class AccessibilityValidator:
    """Checks that bound classes are open to bindctx and forwards the grant.

    When the factory lives in another unit than bindctx, each package that is
    open to bindctx is additionally opened to the factory's unit, so the
    factory can introspect the bound classes.

    Attributes:
        _registry: Permission table of isolation units.
        _core_package: Package identifying the core unit.
    """

    def __init__(self, registry: "UnitRegistry", core_package: str = CORE_PACKAGE) -> None:
        self._registry = registry
        self._core_package = core_package

    def delegate_opens(self, classes: Sequence[Any], factory_type: Any) -> None:
        """Verify openness of ``classes`` and grant it to ``factory_type``'s unit.

        Args:
            classes: Classes to be bound; container aliases are unwrapped.
            factory_type: The resolved factory class.

        Raises:
            AccessibilityError: If a class' package is not open to the core unit.

        Example:
            >>> registry.declare("bindctx", packages=["bindctx"])
            >>> registry.declare("app", packages=["app"], opens={"app.model": ["bindctx"]})
            >>> AccessibilityValidator(registry).delegate_opens([Widget], ProviderFactory)
        """
        core_unit = self._registry.unit_of_module(self._core_package)
        if not core_unit.is_named:
            return

        impl_unit = self._registry.unit_of(factory_type)
        for cls in classes:
            bound = element_type(cls)
            if is_platform_type(bound):
                continue
            class_unit = self._registry.unit_of(bound)
            if not class_unit.is_named:
                continue

            package = package_of(bound)
            if not class_unit.is_open(package, core_unit):
                raise AccessibilityError(package, qualified_name(bound), class_unit.name or "")

            if impl_unit.grant_name != core_unit.grant_name:
                class_unit.grant_open(package, impl_unit)
                logger.debug(
                    "Propagating openness of package %s in %s to %s.",
                    package,
                    class_unit.name,
                    impl_unit.grant_name,
                )
