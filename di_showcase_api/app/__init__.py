"""
Application package initializer.

Each dependency injection example (email, registration, lifetimes,
notifications) lives in its own service module and is exposed by a
router in ``api/v1/endpoints``.  All services are wired together in
``core.wiring``, the single composition root of the application.
"""

from .main import app  # noqa: F401
