import importlib
import logging
from importlib import resources
from importlib.metadata import entry_points
from typing import Any, Iterator, Optional

from bindctx.domain import ILoadingScope, TypeLoadError

logger = logging.getLogger(__name__)


def _resolve_attribute(target: Any, qualname: str, name: str) -> Any:
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise TypeLoadError(name, f"{part!r} not found") from e
    return target


def _is_missing(error: ModuleNotFoundError, module_name: str) -> bool:
    """Check whether ``error`` is about ``module_name`` itself (or a parent)."""
    missing = error.name or ""
    return module_name == missing or module_name.startswith(missing + ".")


class ImportlibLoadingScope(ILoadingScope):
    """Loading scope backed by the running interpreter's import system.

    Types are imported with ``importlib``, resources are read with
    ``importlib.resources`` and registered factories are discovered from
    ``importlib.metadata`` entry points.

    Example:
        >>> scope = ImportlibLoadingScope()
        >>> scope.load_type("collections.OrderedDict")
        <class 'collections.OrderedDict'>
        >>> scope.load_type("collections:OrderedDict")
        <class 'collections.OrderedDict'>
    """

    def load_type(self, name: str) -> Any:
        """Import the object named by ``name``.

        A name with a ``:`` is split into module and qualified attribute name.
        A dotted name is split at the longest importable module prefix, so
        nested classes (``pkg.mod.Outer.Inner``) load too.

        Raises:
            TypeLoadError: If no prefix imports or the attribute is missing.
        """
        if not name or not name.strip():
            raise TypeLoadError(name, "empty type name")

        if ":" in name:
            module_name, _, qualname = name.partition(":")
            module = self._import(module_name, name)
            if module is None:
                raise TypeLoadError(name, f"module {module_name!r} not found")
            return _resolve_attribute(module, qualname, name)

        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            module = self._import(module_name, name)
            if module is not None:
                return _resolve_attribute(module, ".".join(parts[split:]), name)
        raise TypeLoadError(name, "no importable module")

    @staticmethod
    def _import(module_name: str, name: str) -> Optional[Any]:
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if _is_missing(e, module_name):
                return None
            raise TypeLoadError(name, str(e)) from e
        except ImportError as e:
            raise TypeLoadError(name, str(e)) from e

    def read_resource(self, package: str, resource_name: str) -> Optional[str]:
        """Read ``resource_name`` from ``package`` as UTF-8 text."""
        try:
            resource = resources.files(package).joinpath(resource_name)
        except ModuleNotFoundError:
            logger.debug("Package %s not found while looking for %s", package, resource_name)
            return None
        except TypeError:
            # plain module, not a package
            return None
        if not resource.is_file():
            return None
        return resource.read_text(encoding="utf-8")

    def discover(self, group: str) -> Iterator[str]:
        """Yield the ``module:attr`` value of every entry point in ``group``."""
        for ep in entry_points(group=group):
            logger.debug("Entry point %r in %s refers to %s", ep.name, group, ep.value)
            yield ep.value
