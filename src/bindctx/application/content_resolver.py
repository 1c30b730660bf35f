"""Application layer - Representative classes for a package path."""

import logging
from typing import Any, List, Optional

from bindctx.domain import (
    CONVENTIONAL_FACTORY_NAME,
    INDEX_FILE_NAME,
    ConfigurationError,
    ILoadingScope,
    TypeLoadError,
)
from bindctx.domain.constants import INDEX_COMMENT_MARKER

logger = logging.getLogger(__name__)


class ContentClassResolver:
    """Turns ``"pkg1:pkg2"`` into one representative class per package.

    For each package the conventional ``ObjectFactory`` class is tried first,
    then the first entry of the package's ``binding.index`` resource.
    Packages offering neither contribute nothing.

    Attributes:
        _scope: Scope used to load classes and read index resources.
    """

    def __init__(self, scope: ILoadingScope) -> None:
        self._scope = scope

    def resolve(self, package_path: str) -> List[Any]:
        """Resolve the representative classes of ``package_path``.

        Args:
            package_path: Colon-separated package names.

        Returns:
            At most one class per package, in package order.

        Raises:
            ConfigurationError: If an index file lists a class that does not load.

        Example:
            >>> resolver = ContentClassResolver(ImportlibLoadingScope())
            >>> resolver.resolve("app.model:app.extra")
            [<class 'app.model.ObjectFactory'>, <class 'app.extra.Widget'>]
        """
        classes: List[Any] = []
        if not package_path:
            return classes

        for package in package_path.split(":"):
            try:
                classes.append(self._scope.load_type(f"{package}.{CONVENTIONAL_FACTORY_NAME}"))
                continue
            except TypeLoadError:
                # not necessarily an error
                pass

            first = self.find_first_by_index(package)
            if first is not None:
                classes.append(first)

        logger.debug("Resolved classes from package path %s: %s", package_path, classes)
        return classes

    def find_first_by_index(self, package: str) -> Optional[Any]:
        """Load the first class listed in the package's index resource.

        Blank lines and lines starting with ``#`` are skipped. Scanning stops
        at the first entry.

        Returns:
            The loaded class, or None if the package has no index resource or
            the index lists nothing.

        Raises:
            ConfigurationError: If the listed class does not load.
        """
        text = self._scope.read_resource(package, INDEX_FILE_NAME)
        if text is None:
            return None

        for line in text.splitlines():
            entry = line.strip()
            if not entry or entry.startswith(INDEX_COMMENT_MARKER):
                continue
            try:
                return self._scope.load_type(f"{package}.{entry}")
            except TypeLoadError as e:
                raise ConfigurationError(f"Error loading class {entry} listed in {package}/{INDEX_FILE_NAME}") from e
        return None
