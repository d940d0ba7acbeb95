"""
Endpoint modules for API v1, one per dependency injection example.
"""
