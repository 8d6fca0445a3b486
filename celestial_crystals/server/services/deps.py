"""
Request dependencies.

Provides sessions, repositories, settings, external clients and the two
identities the API knows about: the customer named by the ``X-User-Id``
header and the admin holding the shared bearer key.
"""

from __future__ import annotations

import secrets
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.content.generator import BlogPostGenerator
from celestial_crystals.core.database.entities.users import User
from celestial_crystals.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos
from celestial_crystals.core.database.session import get_session
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.notifications.email import EmailClient
from celestial_crystals.payments.gateway import StripeGateway
from celestial_crystals.server.core.config import Settings, get_settings

logger = get_logger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos(session)


def get_payment_gateway(settings: SettingsDep) -> StripeGateway:
    stripe_config = settings.stripe
    return StripeGateway(stripe_config.secret_key, stripe_config.webhook_secret)


async def get_email_client(settings: SettingsDep) -> AsyncGenerator[EmailClient, None]:
    email_config = settings.email
    client = EmailClient(
        email_config.api_key,
        email_config.from_email,
        base_url=email_config.base_url,
        timeout=email_config.timeout,
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_blog_generator(settings: SettingsDep) -> BlogPostGenerator:
    return BlogPostGenerator(settings.content.model)


RepoDep = Annotated[SqlRepoBundle, Depends(get_repos)]
GatewayDep = Annotated[StripeGateway, Depends(get_payment_gateway)]
EmailClientDep = Annotated[EmailClient, Depends(get_email_client)]
BlogGeneratorDep = Annotated[BlogPostGenerator, Depends(get_blog_generator)]


def require_admin(
    settings: SettingsDep,
    authorization: Annotated[Optional[str], Header()] = None,
) -> str:
    """
    Check the admin bearer key.

    Raises:
        HTTPException: 503 when no admin key is configured, 401 when the
            header is missing or does not match
    """
    expected = settings.admin_api_key
    if not expected:
        logger.error("Admin request rejected: ADMIN_API_KEY is not configured")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Admin access is not configured")

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(token.strip().encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin authorization required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return "admin"


async def get_current_user(
    repos: RepoDep,
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> User:
    """Resolve the customer named by the ``X-User-Id`` header."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    user = await repos.users.get_by_id(x_user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


AdminDep = Annotated[str, Depends(require_admin)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
