"""
Middleware for the CELESTIAL Crystals server.

Request timing and monitoring live here.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
