"""
Core utilities for CELESTIAL Crystals.

This package provides shared functionality including logging configuration,
monitoring, error types and the database layer.
"""

from celestial_crystals.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
