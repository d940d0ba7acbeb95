"""
Bridge between FastAPI's dependency system and the service containers.

``get_request_scope`` opens one ``RequestScope`` per request (FastAPI
caches a dependency for the duration of a request, so every ``Inject``
in the same request shares it).  ``Inject`` is used in route
signatures the same way as ``Depends``, naming a ``RequestScope``
provider::

    @router.post("/")
    async def send_email(data: EmailCreate, email: EmailService = Inject(RequestScope.email_service)):
        ...
"""

import logging
from typing import Any

from dependency_injector import errors, providers
from fastapi import Depends, HTTPException, Request, status

from .context import RequestContext
from .wiring import AppContainer, RequestScope, open_request_scope


logger = logging.getLogger(__name__)


def get_container(request: Request) -> AppContainer:
    """Return the application container."""
    return request.app.state.container


def get_request_scope(request: Request) -> RequestScope:
    """Dependency returning the services container of the current request."""
    return open_request_scope(
        get_container(request),
        RequestContext(method=request.method, path=request.url.path),
    )


def _provider_name(provider: providers.Provider) -> str:
    for name, candidate in RequestScope.providers.items():
        if candidate is provider:
            return name
    raise ValueError(f"{provider!r} is not a RequestScope provider")


def Inject(provider: providers.Provider) -> Any:
    """Declare a route parameter resolved from the request scope.

    Each call creates a distinct dependency, so two ``Inject`` parameters
    for the same provider resolve it twice.  Whether they receive the
    same object depends on the provider's lifetime.
    """
    name = _provider_name(provider)

    def _resolve(scope: RequestScope = Depends(get_request_scope)) -> Any:
        try:
            return getattr(scope, name)()
        except errors.Error as e:
            logger.exception("Failed to resolve %s", name)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e),
            )

    return Depends(_resolve)
