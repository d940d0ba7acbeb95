"""
Schemas describing service lifetimes as observed within one request.
"""

from typing import List

from pydantic import BaseModel


class ProbeResolution(BaseModel):
    """Instance ids obtained by resolving the same service twice."""

    lifetime: str
    first: str
    second: str
    same_instance: bool


class LifetimeReport(BaseModel):
    request_id: str
    transient: ProbeResolution
    scoped: ProbeResolution
    singleton: ProbeResolution


class ServiceRegistration(BaseModel):
    service: str
    implementation: str
    lifetime: str


class ServiceCatalog(BaseModel):
    project: str
    version: str
    services: List[ServiceRegistration]
