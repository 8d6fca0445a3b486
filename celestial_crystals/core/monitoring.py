"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing the
storefront, including:
- FastAPI request spans
- SQLAlchemy and HTTPX instrumentation
- Pydantic AI model calls made by the blog generator
- Business events (orders, webhooks, email, generated content)

Logfire stays off unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is
set. Every helper below falls back to a DEBUG log line when it is off.
"""

import logging
import os
from typing import Any, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "celestial-crystals")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

LOGFIRE_TRACE_PYDANTIC_AI = os.getenv("LOGFIRE_TRACE_PYDANTIC_AI", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    if LOGFIRE_TRACE_PYDANTIC_AI:
        try:
            logfire.instrument_pydantic_ai()
            logger.info("Logfire: Pydantic AI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument Pydantic AI: {e}")

    if LOGFIRE_TRACE_SQLALCHEMY:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if LOGFIRE_TRACE_HTTPX:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    _logfire_active = True
    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def _emit(event: str, level: str = "info", /, **attributes: Any) -> None:
    if not _logfire_active:
        logger.debug(f"{event}: {attributes}")
        return
    try:
        getattr(logfire, level)(event, **attributes)
    except Exception:
        logger.debug(f"Could not send '{event}' to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record a finished API request."""
    _emit("API request", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_order_created(order_number: str, total: float, source: str) -> None:
    """
    Record a newly created order.

    Args:
        order_number: Human-facing order number (``CC...``)
        total: Charged total in major currency units
        source: What created the order (``webhook``, ``reconcile``)
    """
    _emit("Order created", order_number=order_number, total=total, source=source)


def log_webhook_event(event_type: str, event_id: Optional[str], outcome: str) -> None:
    """Record how a Stripe webhook event was handled."""
    _emit("Stripe webhook handled", event_type=event_type, event_id=event_id, outcome=outcome)


def log_email_sent(email_type: str, recipients: int, simulated: bool) -> None:
    """Record outgoing email."""
    _emit("Email sent", email_type=email_type, recipients=recipients, simulated=simulated)


def log_content_generated(template: str, used_llm: bool) -> None:
    """Record a generated blog post."""
    _emit("Blog content generated", template=template, used_llm=used_llm)


def log_error(error_type: str, message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context.

    Args:
        error_type: The type of error
        message: The error message
        context: Additional context information
    """
    _emit("Error occurred", "error", error_type=error_type, error_message=message, **(context or {}))
