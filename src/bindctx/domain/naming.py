import sys
import typing
from typing import Any

_CONTAINER_ORIGINS = (list, tuple, set, frozenset)


def qualified_name(obj: Any) -> str:
    """Dotted name of a class, as accepted by ``ILoadingScope.load_type``."""
    return f"{obj.__module__}.{obj.__qualname__}"


def package_of(cls: Any) -> str:
    """Package holding the module that defines ``cls``."""
    module_name = cls.__module__
    module = sys.modules.get(module_name)
    if module is None or hasattr(module, "__path__"):
        return module_name
    package, _, _ = module_name.rpartition(".")
    return package or module_name


def element_type(cls: Any) -> Any:
    """Unwrap ``list[X]``-style container aliases to ``X``."""
    origin = typing.get_origin(cls)
    if origin is not None and isinstance(origin, type) and issubclass(origin, _CONTAINER_ORIGINS):
        args = typing.get_args(cls)
        if args:
            return element_type(args[0])
    return cls


def is_platform_type(cls: Any) -> bool:
    """Check whether ``cls`` comes from builtins or the standard library."""
    module_name = getattr(cls, "__module__", None) or "builtins"
    top_level = module_name.partition(".")[0]
    return top_level == "builtins" or top_level in sys.stdlib_module_names
