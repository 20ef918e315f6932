"""
Tests for the contact relay in `healthcalc/services/contact.py`.

Covers:
- Submission validation (required fields, email shape, whitespace)
- Email formatting (escaping, missing phone, reply-to)
- ContactService passes provider ids and delivery errors through
"""

import pytest
from pydantic import ValidationError

from healthcalc.config import EmailProviderConfig
from healthcalc.domain.errors import DeliveryError
from healthcalc.domain.result import Result
from healthcalc.services.contact import (
    ContactService,
    ContactSubmission,
    OutgoingEmail,
    format_contact_email,
)


class RecordingSender:
    """EmailSender double that records messages and returns a canned outcome."""

    def __init__(self, outcome: Result[str, DeliveryError]) -> None:
        self.outcome = outcome
        self.sent: list[OutgoingEmail] = []

    async def send(self, email: OutgoingEmail) -> Result[str, DeliveryError]:
        self.sent.append(email)
        return self.outcome


def _submission(**overrides: str) -> ContactSubmission:
    fields = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "subject": "Question",
        "country": "UK",
        "message": "Hello\nthere",
    }
    fields.update(overrides)
    return ContactSubmission(**fields)


class TestContactSubmission:
    def test_whitespace_is_stripped(self) -> None:
        submission = _submission(name="  Ada  ")
        assert submission.name == "Ada"

    def test_invalid_email_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _submission(email="not-an-email")

    def test_blank_message_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _submission(message="   ")


class TestFormatContactEmail:
    def test_subject_recipient_and_reply_to(self) -> None:
        email = format_contact_email(_submission(), "site@example.com", "inbox@example.com")
        assert email.subject == "New Contact Form: Question"
        assert email.to == ["inbox@example.com"]
        assert email.sender == "site@example.com"
        assert email.reply_to == "ada@example.com"

    def test_missing_phone_is_shown_as_na(self) -> None:
        email = format_contact_email(_submission(), "a@example.com", "b@example.com")
        assert "Phone: N/A" in email.text
        assert "N/A" in email.html

    def test_html_is_escaped(self) -> None:
        email = format_contact_email(
            _submission(name="<script>x</script>", message="a < b"),
            "a@example.com",
            "b@example.com",
        )
        assert "<script>" not in email.html
        assert "&lt;script&gt;" in email.html
        assert "a &lt; b" in email.html

    def test_message_newlines_become_breaks(self) -> None:
        email = format_contact_email(_submission(), "a@example.com", "b@example.com")
        assert "Hello<br>there" in email.html


class TestContactService:
    @pytest.mark.asyncio
    async def test_success_returns_message_id(self) -> None:
        sender = RecordingSender(Result.ok("msg_123"))
        config = EmailProviderConfig(api_key="key", to_address="inbox@example.com")
        service = ContactService(sender, config)

        outcome = await service.submit(_submission())

        assert outcome.unwrap() == "msg_123"
        assert sender.sent[0].to == ["inbox@example.com"]

    @pytest.mark.asyncio
    async def test_delivery_failure_is_returned(self) -> None:
        sender = RecordingSender(Result.err(DeliveryError("rejected", status_code=422)))
        service = ContactService(sender, EmailProviderConfig(api_key="key"))

        outcome = await service.submit(_submission())

        assert outcome.is_err()
        assert outcome.unwrap_err().status_code == 422
