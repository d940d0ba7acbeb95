"""
Main entrypoint for the DI Showcase API.

This module assembles the FastAPI application, sets up logging, builds
the application container and includes versioned routers.
``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
directly::

    uvicorn di_showcase_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.wiring import AppContainer, build_container
from .api.v1.router import router as v1_router


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[AppContainer] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment based
        ``core.config.settings``.
    container : Optional[AppContainer]
        Pre‑built container, e.g. ``build_container(settings)`` with
        some providers overridden.  Defaults to the standard wiring.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the wiring below
    # can log.
    setup_logging(settings.log_level, settings.log_file or None)

    if container is None:
        container = build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # The database singleton is created here and migrated before the
        # first request.
        container.init_resources()
        container.database().init_db()
        try:
            yield
        finally:
            container.shutdown_resources()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
