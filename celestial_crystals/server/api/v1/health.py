"""
Health Check Endpoints.

Basic status endpoints used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from celestial_crystals.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the storefront server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the storefront API.",
    response_description="Version object.",
)
async def version():
    """Return the API version and the supported schema version."""
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
