"""
Top‑level router for version 1 of the API.

This router aggregates the routers of each example under a unified
prefix.  When a new example is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import emails, users, lifetimes, notifications, logs, services

router = APIRouter()

router.include_router(emails.router, prefix="/emails", tags=["emails"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(lifetimes.router, prefix="/lifetimes", tags=["lifetimes"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
router.include_router(logs.router, prefix="/logs", tags=["logs"])
router.include_router(services.router, prefix="/services", tags=["services"])
