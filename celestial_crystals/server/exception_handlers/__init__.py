"""
Exception handlers for the CELESTIAL Crystals server.
"""

from .global_handler import setup_exception_handlers, to_http_exception

__all__ = ["setup_exception_handlers", "to_http_exception"]
