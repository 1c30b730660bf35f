"""Application layer - Single-slot cache of the last resolved context."""

import logging
from typing import Any, Optional

from bindctx.domain import BindingContext, CacheEntry, IContextFinder

logger = logging.getLogger(__name__)


class ContextCache:
    """Remembers the context of the last class it was asked about.

    The slot holds one immutable ``CacheEntry`` and is replaced by a single
    reference assignment, so no lock is taken. Threads racing on a miss may
    each resolve a context and publish it; readers always see a complete
    entry.

    The entry references the key class weakly, but it holds the context
    strongly. A context that keeps its classes, as ``DefaultBindingContext``
    does, therefore keeps the key class alive until the next miss replaces
    the entry or ``clear()`` drops it.

    Attributes:
        _finder: Finder used on a miss.
        _entry: The current entry, or None.
    """

    def __init__(self, finder: IContextFinder) -> None:
        self._finder = finder
        self._entry: Optional[CacheEntry] = None

    def get(self, cls: Any) -> BindingContext:
        """Return the context for ``cls``, resolving it on a miss.

        A hit requires the cached key to be the very same class object.

        Example:
            >>> cache = ContextCache(finder)
            >>> cache.get(Invoice) is cache.get(Invoice)
            True
        """
        entry = self._entry
        if entry is not None and entry.matches(cls):
            return entry.context

        logger.debug("Context cache miss for %r", cls)
        context = self._finder.new_instance(cls)
        self._entry = CacheEntry.of(cls, context)
        return context

    def peek(self) -> Optional[CacheEntry]:
        """Current entry, without resolving anything."""
        return self._entry

    def clear(self) -> None:
        self._entry = None
