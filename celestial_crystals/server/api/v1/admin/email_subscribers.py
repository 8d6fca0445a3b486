"""
Admin email subscribers and campaigns.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from celestial_crystals.core.errors import InvalidEmailError
from celestial_crystals.core.models.io.subscribers import (
    CampaignRequest,
    CampaignResult,
    EmailSubscribersOverview,
    RecentOrderRead,
    SubscriberRead,
    SubscriberStats,
    UserSubscriberRead,
)
from celestial_crystals.server.api.v1.newsletter import NewsletterDep
from celestial_crystals.server.services.deps import RepoDep, require_admin

router = APIRouter(tags=["admin-email-subscribers"], dependencies=[Depends(require_admin)])

RECENT_ORDER_LIMIT = 10


@router.get(
    "",
    response_model=EmailSubscribersOverview,
    summary="Email Subscribers",
    description="Newsletter subscribers, customers who accept marketing email and the latest orders.",
)
async def email_subscribers(repos: RepoDep) -> EmailSubscribersOverview:
    """
    Email audience overview.

    `total_unique_emails` counts the union of newsletter addresses and
    marketing-enabled customer addresses.
    """
    subscribers = await repos.subscribers.list()
    users = await repos.users.marketing_recipients()

    orders = await repos.orders.list(limit=RECENT_ORDER_LIMIT)
    emails = {}
    for user_id in {order.user_id for order in orders}:
        user = await repos.users.get_by_id(user_id)
        emails[user_id] = user.email if user else None

    unique_emails = {s.email.lower() for s in subscribers} | {u.email.lower() for u in users}
    return EmailSubscribersOverview(
        newsletter_subscribers=[SubscriberRead.model_validate(s) for s in subscribers],
        user_subscribers=[UserSubscriberRead.model_validate(u) for u in users],
        recent_orders=[
            RecentOrderRead(
                order_number=order.order_number,
                customer_email=emails.get(order.user_id),
                total_amount=order.total_amount,
                status=order.status,
                created_at=order.created_at,
            )
            for order in orders
        ],
        stats=SubscriberStats(
            total_newsletter=len(subscribers),
            active_newsletter=sum(1 for s in subscribers if s.is_active),
            total_user_subscribers=len(users),
            total_unique_emails=len(unique_emails),
        ),
    )


@router.post(
    "/campaigns",
    response_model=CampaignResult,
    summary="Send Campaign",
    description="Send an email campaign to a named audience or an explicit address list.",
    responses={400: {"description": "Invalid recipient address"}},
)
async def send_campaign(body: CampaignRequest, service: NewsletterDep) -> CampaignResult:
    """
    Send a campaign.

    - **email_type**: Label used in logs, e.g. `newsletter` or `promotion`.
    - **recipients**: `newsletter`, `customers`, `all` or a list of addresses.
    - **subject** / **content**: Subject line and HTML body.
    """
    try:
        return await service.send_campaign(body.email_type, body.recipients, body.subject, body.content)
    except InvalidEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
