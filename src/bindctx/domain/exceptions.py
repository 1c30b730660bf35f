from typing import Optional, Sequence


class BindingException(Exception):
    """Base exception for binding-context errors.

    Context factories raise this (or a subclass) for their own failures; such
    errors reach the caller exactly as the factory raised them.
    """


class TypeLoadError(BindingException):
    """Raised by a loading scope when a type name cannot be loaded.

    Attributes:
        type_name: The name that failed to load.
    """

    def __init__(self, type_name: str, reason: Optional[str] = None) -> None:
        self.type_name = type_name
        self.reason = reason
        message = f"Cannot load type: {type_name}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ProviderNotFoundError(BindingException):
    """Raised when no usable context factory could be located.

    This occurs when:
    - Every discovery tier came up empty.
    - A resolved factory name does not load.

    Attributes:
        type_name: The factory name that failed to load, if one was resolved.
        tiers: The discovery tiers that were consulted.
    """

    def __init__(
        self,
        type_name: Optional[str] = None,
        tiers: Sequence[str] = (),
        reason: Optional[str] = None,
    ) -> None:
        self.type_name = type_name
        self.tiers = tuple(str(tier) for tier in tiers)
        if type_name is not None:
            message = f"Provider {type_name} not found"
        else:
            message = "Implementation of context factory not found"
            if self.tiers:
                message += f" (searched: {', '.join(self.tiers)})"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ProviderInstantiationError(BindingException):
    """Raised when a factory type loads but cannot be turned into a factory.

    This occurs when:
    - The loaded object is not a class.
    - The class does not have the context factory shape.
    - The constructor raises.

    Attributes:
        type_name: The factory name.
        reason: Why instantiation failed.
    """

    def __init__(self, type_name: str, reason: str) -> None:
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"Provider {type_name} could not be instantiated: {reason}")


class AccessibilityError(BindingException):
    """Raised when a bound class' package is not open to the core unit.

    Attributes:
        package: Package holding the class.
        class_name: Qualified name of the class.
        unit_name: Isolation unit owning the package.
    """

    def __init__(self, package: str, class_name: str, unit_name: str) -> None:
        self.package = package
        self.class_name = class_name
        self.unit_name = unit_name
        super().__init__(
            f"Package {package} with class {class_name} defined in unit {unit_name} "
            f"must be open to at least the bindctx unit."
        )


class ConfigurationError(BindingException):
    """Raised when a configuration resource or value is malformed.

    This occurs when:
    - An index file lists a class that cannot be loaded.
    - A properties resource exists but names no factory.
    - The factory key holds a value that is neither a name nor a class.
    - The entry-point registry cannot be enumerated.
    """
