"""Server-side services: inventory, order fulfillment, newsletter and request dependencies."""
