"""CELESTIAL Crystals.

This package contains the storefront backend for the CELESTIAL crystal bracelet
shop: a server-rendered catalog, a JSON API for checkout and customer
accounts, the Stripe payment webhook, and the admin dashboards.

High-level architecture
-----------------------

- ``celestial_crystals.catalog``: the static crystal catalog, catalog queries
  and the zodiac/birth-month recommendation matcher.
- ``celestial_crystals.checkout``: discount codes and server-side cart pricing.
- ``celestial_crystals.payments``: Stripe gateway wrapper and the codec that
  packs order data into payment-intent metadata.
- ``celestial_crystals.notifications``: transactional and campaign email.
- ``celestial_crystals.content``: blog post generation (LLM with a template
  fallback).
- ``celestial_crystals.seo``: sitemap, structured data and coverage reports.
- ``celestial_crystals.core``: logging, monitoring, errors and the database
  layer (entities, repositories, IO schemas).
- ``celestial_crystals.server``: the FastAPI application, its routers and the
  services that orchestrate database writes.

Typical order flow
------------------

1. The storefront prices the cart with ``POST /api/v1/checkout/quote``.
2. ``POST /api/v1/checkout/payment-intent`` creates a Stripe PaymentIntent
   whose metadata carries the order data.
3. Stripe delivers ``payment_intent.succeeded`` to the webhook, which creates
   the order exactly once, decrements stock and emails a confirmation.
"""
