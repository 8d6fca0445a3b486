"""
CELESTIAL Crystals Server Package.

This package contains the web server implementation for the storefront.
It includes the API definition, HTML pages, service layer and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration, constants and request dependencies.
    exception_handlers: Application-wide error responses.
    middleware: Request tracing middleware.
    services: Business logic that orchestrates database writes.
"""
