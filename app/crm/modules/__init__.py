"""
Feature modules live under this package.

Each module owns its models, data access and routes, and reuses the platform
primitives (config, DB session, error handlers).
"""
