"""
Core infrastructure: configuration, logging, database access and the
application containers.
"""
