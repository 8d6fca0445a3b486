"""Error types shared by the storefront domain and service layers.

Purpose:
- Provide typed exceptions raised by services, the payment gateway and the
  email client.
- Carry an HTTP-oriented status code so route handlers and the application
  exception handler can answer consistently.

Usage:
- Catch ``StorefrontError`` for general failures and inspect ``status_code``
  or ``details``.
- Catch the specific subclasses where a route needs a different response.
"""

from __future__ import annotations

from typing import Any, Optional


class StorefrontError(Exception):
    """Base error for storefront failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload (e.g. an upstream error body).
    """

    default_status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.details = details


class CrystalNotFoundError(StorefrontError):
    """Raised when a crystal id is not in the catalog or the database."""

    default_status_code = 404

    def __init__(self, crystal_id: str) -> None:
        super().__init__(f"Crystal '{crystal_id}' not found")
        self.crystal_id = crystal_id


class OrderNotFoundError(StorefrontError):
    default_status_code = 404


class CustomerNotFoundError(StorefrontError):
    default_status_code = 404


class InsufficientStockError(StorefrontError):
    """Raised when a sale asks for more units than are in stock."""

    default_status_code = 409

    def __init__(self, crystal_id: str, requested: int, available: int) -> None:
        super().__init__(f"Insufficient stock for '{crystal_id}': requested {requested}, available {available}")
        self.crystal_id = crystal_id
        self.requested = requested
        self.available = available


class InvalidInventoryChangeError(StorefrontError):
    default_status_code = 400


class InvalidOrderStatusError(StorefrontError):
    default_status_code = 400


class OrderStateConflictError(StorefrontError):
    """Raised when an order is not in a state that allows the requested change."""

    default_status_code = 409


class OrderDataTooLargeError(StorefrontError):
    """Raised when order data does not fit into payment-intent metadata."""

    default_status_code = 400


class PaymentGatewayError(StorefrontError):
    """Raised for Stripe API failures; 503 when Stripe is not configured."""

    default_status_code = 502


class EmailDeliveryError(StorefrontError):
    default_status_code = 502


class ContentTemplateNotFoundError(StorefrontError):
    default_status_code = 404


class InvalidEmailError(StorefrontError):
    default_status_code = 400


class SubscriberNotFoundError(StorefrontError):
    default_status_code = 404


class ContactFormError(StorefrontError):
    default_status_code = 400
