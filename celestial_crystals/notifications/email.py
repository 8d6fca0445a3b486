"""Transactional email via the Resend REST API

Sends HTML email through ``POST {base_url}/emails`` with bearer auth. When no
API key is configured (or the placeholder key from the sample ``.env`` is
still in place) messages are logged and reported as simulated, so local
development and tests never need network access.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
from pydantic import BaseModel

from celestial_crystals.core.errors import EmailDeliveryError
from celestial_crystals.core.logging_config import get_logger

logger = get_logger(__name__)

PLACEHOLDER_API_KEY = "re_your_resend_api_key_here"


class EmailResult(BaseModel):
    success: bool
    id: Optional[str] = None
    simulated: bool = False


class EmailClient:
    """Async Resend client.

    - Uses `httpx.AsyncClient` for HTTP operations; pass ``client`` to inject
      a configured or mocked transport.
    - Raises `EmailDeliveryError` for non-2xx answers and transport failures.
    """

    def __init__(
        self,
        api_key: Optional[str],
        from_email: str,
        *,
        base_url: str = "https://api.resend.com",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.from_email = from_email
        self.base_url = base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def send(
        self,
        to: Union[str, Sequence[str]],
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> EmailResult:
        """Send one email.

        Args:
            to: One address or a list of addresses.
            subject: Subject line.
            html: HTML body.
            text: Optional plain-text alternative.

        Returns:
            An `EmailResult`; ``simulated`` is true when nothing was sent.

        Raises:
            EmailDeliveryError: When Resend rejects the message or is unreachable.
        """
        recipients: List[str] = [to] if isinstance(to, str) else list(to)

        if not self.is_configured:
            logger.info(f"Email simulated (no Resend API key): to={recipients} subject={subject!r}")
            return EmailResult(success=True, id=f"simulated-{int(time.time() * 1000)}", simulated=True)

        payload: Dict[str, Any] = {"from": self.from_email, "to": recipients, "subject": subject, "html": html}
        if text:
            payload["text"] = text

        logger.debug(f"EmailClient.send: POST {self.base_url}/emails to={recipients}")
        try:
            response = await self._http.post(f"{self.base_url}/emails", json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Resend request failed: {e}", exc_info=True)
            raise EmailDeliveryError(f"Email delivery failed: {e}") from e

        if response.is_error:
            try:
                details: Any = response.json()
            except ValueError:
                details = response.text
            logger.error(f"Resend rejected email to {recipients}: {response.status_code} {details}")
            raise EmailDeliveryError("Email delivery failed", status_code=response.status_code, details=details)

        body = response.json()
        return EmailResult(success=True, id=body.get("id"), simulated=False)

    async def aclose(self) -> None:
        await self._http.aclose()
