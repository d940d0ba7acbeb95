"""
Service catalog endpoint for API v1.

Returns what requests are resolved from: each provider of the
application container and of the request scope, the class it builds
and its lifetime.
"""

from fastapi import APIRouter, Depends, Request

from di_showcase_api.app.core.dependencies import get_container
from di_showcase_api.app.core.wiring import AppContainer, describe_services
from di_showcase_api.app.schemas.lifetime import ServiceCatalog, ServiceRegistration

router = APIRouter()


@router.get("/", response_model=ServiceCatalog)
async def list_services(request: Request, container: AppContainer = Depends(get_container)) -> ServiceCatalog:
    settings = request.app.state.settings
    return ServiceCatalog(
        project=settings.project_name,
        version=settings.api_version,
        services=[ServiceRegistration(**entry) for entry in describe_services(container)],
    )
