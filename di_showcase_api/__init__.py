"""
Top‑level package for the DI Showcase API.

The application itself lives in the ``app`` subpackage and can be
imported as ``di_showcase_api.app.main``.  ``client`` provides a small
HTTP client for the API.
"""

__all__ = []
