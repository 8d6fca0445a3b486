"""
Newsletter subscription endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.models.io.subscribers import SubscribeRequest, SubscribeResponse, UnsubscribeRequest
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.deps import EmailClientDep, SessionDep, SettingsDep
from celestial_crystals.server.services.newsletter import NewsletterService

router = APIRouter(tags=["newsletter"])


def get_newsletter_service(session: SessionDep, email_client: EmailClientDep, settings: SettingsDep) -> NewsletterService:
    return NewsletterService(session, email_client, settings.site_url)


NewsletterDep = Annotated[NewsletterService, Depends(get_newsletter_service)]


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    summary="Subscribe to Newsletter",
    description="Subscribe an email address and send the welcome email.",
    responses={400: {"description": "Missing or invalid email address"}},
)
async def subscribe(body: SubscribeRequest, service: NewsletterDep) -> SubscribeResponse:
    """
    Subscribe to the newsletter.

    An address that is already active answers with `already_subscribed=true`.
    An unsubscribed address is reactivated.

    - **email**: Address to subscribe.
    - **first_name** / **last_name**: Optional names for the greeting.
    - **source**: Where the signup happened (default `website`).
    """
    try:
        return await service.subscribe(body.email, body.first_name, body.last_name, body.source)
    except StorefrontError as e:
        raise to_http_exception(e)


@router.post(
    "/unsubscribe",
    response_model=SubscribeResponse,
    summary="Unsubscribe from Newsletter",
    description="Deactivate a newsletter subscription.",
    responses={
        400: {"description": "Missing or invalid email address"},
        404: {"description": "Address is not subscribed"},
    },
)
async def unsubscribe(body: UnsubscribeRequest, service: NewsletterDep) -> SubscribeResponse:
    try:
        await service.unsubscribe(body.email)
    except StorefrontError as e:
        raise to_http_exception(e)
    return SubscribeResponse(success=True, message="Successfully unsubscribed")
