"""
Lifetime endpoint for API v1.

Each probe is injected twice into the same route.  Comparing the
instance ids shows the three lifetime policies side by side: two
different transients, one shared scoped instance per request and one
singleton shared by every request.
"""

from fastapi import APIRouter

from di_showcase_api.app.core.context import RequestContext
from di_showcase_api.app.core.dependencies import Inject
from di_showcase_api.app.core.wiring import RequestScope
from di_showcase_api.app.schemas.lifetime import LifetimeReport, ProbeResolution
from di_showcase_api.app.services.lifetime_service import (
    LifetimeProbe,
    ScopedProbe,
    SingletonProbe,
    TransientProbe,
)


router = APIRouter()


def _compare(first: LifetimeProbe, second: LifetimeProbe) -> ProbeResolution:
    return ProbeResolution(
        lifetime=first.lifetime,
        first=first.instance_id,
        second=second.instance_id,
        same_instance=first is second,
    )


@router.get("/", response_model=LifetimeReport)
async def inspect_lifetimes(
    transient_a: TransientProbe = Inject(RequestScope.transient_probe),
    transient_b: TransientProbe = Inject(RequestScope.transient_probe),
    scoped_a: ScopedProbe = Inject(RequestScope.scoped_probe),
    scoped_b: ScopedProbe = Inject(RequestScope.scoped_probe),
    singleton_a: SingletonProbe = Inject(RequestScope.singleton_probe),
    singleton_b: SingletonProbe = Inject(RequestScope.singleton_probe),
    context: RequestContext = Inject(RequestScope.context),
) -> LifetimeReport:
    return LifetimeReport(
        request_id=context.request_id,
        transient=_compare(transient_a, transient_b),
        scoped=_compare(scoped_a, scoped_b),
        singleton=_compare(singleton_a, singleton_b),
    )
