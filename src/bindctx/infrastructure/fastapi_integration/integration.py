from typing import Any, Callable, List, Mapping, Optional

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from bindctx.application import ContextCache
from bindctx.domain import BindingContext, BindingException, IContextFinder, ILoadingScope


def create_context_dependency(cache: ContextCache, content_class: Any) -> Callable[[], BindingContext]:
    """Create a FastAPI Depends() callable returning the context for ``content_class``.

    Contexts come from ``cache``, so repeated requests for the same class do
    not resolve a new factory.

    Args:
        cache: Cache to serve contexts from.
        content_class: Class the context is created for.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> cache = ContextCache(finder)
        >>> get_invoice_context = create_context_dependency(cache, Invoice)
        >>>
        >>> @app.post("/invoices")
        >>> async def create_invoice(ctx: BindingContext = Depends(get_invoice_context)):
        ...     ...
    """

    def dependency() -> BindingContext:
        """Return the cached context."""
        return cache.get(content_class)

    return dependency


def create_path_context_dependency(
    finder: IContextFinder,
    package_path: str,
    properties: Optional[Mapping[str, Any]] = None,
    scope: Optional[ILoadingScope] = None,
) -> Callable[[], BindingContext]:
    """Create a FastAPI Depends() callable returning a context for ``package_path``.

    The context is resolved on first use and reused afterwards. Concurrent
    first uses may each resolve one; the single slot keeps the last one stored.

    Args:
        finder: Finder used to resolve the context.
        package_path: Colon-separated package names.
        properties: Provider-specific properties.
        scope: Loading scope; the finder's own scope when None.
    """
    resolved: List[BindingContext] = []

    def dependency() -> BindingContext:
        """Resolve the context once, then reuse it."""
        if resolved:
            return resolved[-1]
        context = finder.new_instance_from_path(package_path, scope=scope, properties=properties)
        resolved[:] = [context]
        return context

    return dependency


def install_binding_error_handler(app: FastAPI, status_code: int = 500) -> None:
    """Report ``BindingException`` raised by endpoints as JSON responses.

    Args:
        app: The FastAPI application.
        status_code: HTTP status used for binding failures.

    Example:
        >>> app = FastAPI()
        >>> install_binding_error_handler(app)
    """

    async def handle_binding_error(request: Request, exc: BindingException) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    app.add_exception_handler(BindingException, handle_binding_error)
