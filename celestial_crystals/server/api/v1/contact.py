"""
Contact form endpoint.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.models.io.contact import ContactRequest, ContactResponse
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.contact import ContactService
from celestial_crystals.server.services.deps import EmailClientDep, SettingsDep

router = APIRouter(tags=["contact"])


def get_contact_service(email_client: EmailClientDep, settings: SettingsDep) -> ContactService:
    return ContactService(email_client, settings.admin_email, settings.site_url)


ContactDep = Annotated[ContactService, Depends(get_contact_service)]


@router.post(
    "",
    response_model=ContactResponse,
    summary="Send Contact Message",
    description="Forward a customer message to the store inbox.",
    responses={
        400: {"description": "Missing field, invalid email or message too short"},
        502: {"description": "Message could not be delivered"},
    },
)
async def send_contact_message(body: ContactRequest, service: ContactDep) -> ContactResponse:
    """
    Send a message to the CELESTIAL team.

    - **name**, **email**, **subject**, **message**: All required.
    - **message**: At least 10 characters.
    """
    try:
        return await service.submit(body)
    except StorefrontError as e:
        raise to_http_exception(e)
