"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes the JSON API
routers and the server-rendered storefront pages.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from celestial_crystals.core.database import engine, init_db
from celestial_crystals.core.logging_config import get_logger, setup_logging
from celestial_crystals.core.monitoring import initialize_logfire

from . import pages
from .api.v1 import (
    blog,
    checkout,
    contact,
    crystals,
    discounts,
    health,
    newsletter,
    orders,
    recommendations,
    reviews,
    user,
    webhooks,
)
from .api.v1.admin import analytics as admin_analytics
from .api.v1.admin import blog_posts as admin_blog_posts
from .api.v1.admin import customers as admin_customers
from .api.v1.admin import email_subscribers as admin_email_subscribers
from .api.v1.admin import inventory as admin_inventory
from .api.v1.admin import orders as admin_orders
from .api.v1.admin import payments as admin_payments
from .api.v1.admin import seo as admin_seo
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables and, when enabled, syncs the static catalog into the
    database. A failure is logged and the server still starts.
    """
    try:
        logger.info("Starting up CELESTIAL Crystals storefront...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down CELESTIAL Crystals storefront...")
    await engine.dispose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    CELESTIAL Crystals Storefront API

    Catalog, birth-date recommendations, reviews, checkout with Stripe,
    order tracking, newsletter and the admin dashboards for orders,
    customers, inventory, email campaigns, blog posts and SEO.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

initialize_logfire(app)
setup_exception_handlers(app)

API = constant.API_V1_STR
ADMIN = f"{constant.API_V1_STR}/admin"

app.include_router(health.router, tags=["health"])
app.include_router(crystals.router, prefix=f"{API}/crystals")
app.include_router(reviews.router, prefix=f"{API}/crystals")
app.include_router(recommendations.router, prefix=API)
app.include_router(discounts.router, prefix=f"{API}/discounts")
app.include_router(checkout.router, prefix=f"{API}/checkout")
app.include_router(orders.router, prefix=f"{API}/orders")
app.include_router(user.router, prefix=f"{API}/user")
app.include_router(newsletter.router, prefix=f"{API}/newsletter")
app.include_router(contact.router, prefix=f"{API}/contact")
app.include_router(webhooks.router, prefix=f"{API}/webhooks")
app.include_router(blog.router, prefix=f"{API}/blog")

app.include_router(admin_orders.router, prefix=f"{ADMIN}/orders")
app.include_router(admin_customers.router, prefix=f"{ADMIN}/customers")
app.include_router(admin_inventory.router, prefix=f"{ADMIN}/inventory")
app.include_router(admin_email_subscribers.router, prefix=f"{ADMIN}/email-subscribers")
app.include_router(admin_blog_posts.router, prefix=f"{ADMIN}/blog-posts")
app.include_router(admin_analytics.router, prefix=f"{ADMIN}/analytics")
app.include_router(admin_payments.router, prefix=f"{ADMIN}/payments")
app.include_router(admin_seo.router, prefix=f"{ADMIN}/seo")

app.include_router(pages.router)
