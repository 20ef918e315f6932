"""
Contact form relay.

A submission is formatted into an email addressed to the site inbox and
handed to an EmailSender. There are no retries; a delivery failure is
returned to the caller as `Result.err(DeliveryError)`.
"""

import html
import re
from typing import Protocol

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from healthcalc.config import EmailProviderConfig
from healthcalc.domain.errors import DeliveryError
from healthcalc.domain.result import Result

logger = structlog.get_logger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ContactSubmission(BaseModel):
    """A message from the public contact form."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    subject: str = Field(min_length=1, max_length=300)
    phone: str | None = Field(default=None, max_length=50)
    country: str = Field(default="", max_length=100)
    message: str = Field(min_length=1, max_length=10000)

    @field_validator("email")
    @classmethod
    def looks_like_email(cls, v: str) -> str:
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Enter a valid email address")
        return v


class OutgoingEmail(BaseModel):
    """Provider-neutral email message."""

    model_config = ConfigDict(frozen=True)

    sender: str
    to: list[str]
    subject: str
    html: str
    text: str
    reply_to: str | None = None


class EmailSender(Protocol):
    """Anything that can deliver an OutgoingEmail and report the provider's message id."""

    async def send(self, email: OutgoingEmail) -> Result[str, DeliveryError]: ...


def format_contact_email(
    submission: ContactSubmission, sender: str, recipient: str
) -> OutgoingEmail:
    phone = submission.phone or "N/A"
    rows = (
        ("Name", submission.name),
        ("Email", submission.email),
        ("Phone", phone),
        ("Country", submission.country),
    )
    html_rows = "".join(
        f"<p><strong>{label}:</strong> {html.escape(value)}</p>" for label, value in rows
    )
    message_html = html.escape(submission.message).replace("\n", "<br>")
    body_html = (
        "<h2>New Contact Form Submission</h2>"
        f"{html_rows}"
        f"<p><strong>Message:</strong></p><p>{message_html}</p>"
    )
    body_text = "\n".join(f"{label}: {value}" for label, value in rows)
    body_text += f"\nMessage:\n{submission.message}\n"
    return OutgoingEmail(
        sender=sender,
        to=[recipient],
        subject=f"New Contact Form: {submission.subject}",
        html=body_html,
        text=body_text,
        reply_to=submission.email,
    )


class ContactService:
    """Formats contact submissions and relays them through an EmailSender."""

    def __init__(self, sender: EmailSender, config: EmailProviderConfig) -> None:
        self.sender = sender
        self.config = config
        self.logger = logger.bind(component="contact_service")

    async def submit(self, submission: ContactSubmission) -> Result[str, DeliveryError]:
        email = format_contact_email(
            submission, self.config.from_address, self.config.to_address
        )
        outcome = await self.sender.send(email)
        if outcome.is_err():
            error = outcome.unwrap_err()
            self.logger.error(
                "contact_email_failed",
                error=str(error),
                status_code=error.status_code,
            )
            return outcome
        self.logger.info("contact_email_sent", message_id=outcome.unwrap())
        return outcome
