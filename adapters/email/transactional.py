"""
HTTP client for a Resend-compatible transactional email API.

POSTs a JSON message to the configured endpoint with a bearer API key. The
provider's message id is returned on success; any HTTP or transport failure
becomes a DeliveryError. Nothing is retried.
"""

from typing import Any

import httpx
import structlog

from healthcalc.config import EmailProviderConfig
from healthcalc.domain.errors import DeliveryError
from healthcalc.domain.result import Result
from healthcalc.services.contact import OutgoingEmail

logger = structlog.get_logger(__name__)


class TransactionalEmailClient:
    """EmailSender backed by an httpx.AsyncClient."""

    def __init__(
        self, config: EmailProviderConfig, client: httpx.AsyncClient | None = None
    ) -> None:
        self.config = config
        self._client = client
        self.logger = logger.bind(component="email_client")

    @staticmethod
    def payload(email: OutgoingEmail) -> dict[str, Any]:
        body: dict[str, Any] = {
            "from": email.sender,
            "to": email.to,
            "subject": email.subject,
            "html": email.html,
            "text": email.text,
        }
        if email.reply_to:
            body["reply_to"] = email.reply_to
        return body

    async def send(self, email: OutgoingEmail) -> Result[str, DeliveryError]:
        if not self.config.is_configured:
            return Result.err(DeliveryError("Email provider API key is not configured"))

        headers = {"Authorization": f"Bearer {self.config.api_key}"}
        try:
            if self._client is not None:
                response = await self._client.post(
                    self.config.api_url, json=self.payload(email), headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.post(
                        self.config.api_url, json=self.payload(email), headers=headers
                    )
        except httpx.HTTPError as exc:
            self.logger.warning("email_transport_error", error_type=type(exc).__name__)
            return Result.err(DeliveryError(f"Email provider unreachable: {exc}"))

        if response.is_error:
            return Result.err(
                DeliveryError(
                    f"Email provider rejected the message ({response.status_code})",
                    status_code=response.status_code,
                )
            )

        try:
            message_id = str(response.json().get("id", ""))
        except ValueError:
            message_id = ""
        if not message_id:
            return Result.err(
                DeliveryError("Email provider response did not include a message id")
            )
        return Result.ok(message_id)
