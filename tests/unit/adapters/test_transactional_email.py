"""
Tests for the transactional email client in `adapters/email/transactional.py`.

Covers:
- Request shape (URL, bearer header, JSON payload)
- Provider message id on success
- Error statuses, transport failures and missing ids become DeliveryError
- Missing API key short-circuits without a request
"""

import json

import httpx
import pytest

from adapters.email import TransactionalEmailClient
from healthcalc.config import EmailProviderConfig
from healthcalc.services.contact import OutgoingEmail

API_URL = "https://mail.example.test/emails"


def _email() -> OutgoingEmail:
    return OutgoingEmail(
        sender="site@example.com",
        to=["inbox@example.com"],
        subject="New Contact Form: Hi",
        html="<p>Hi</p>",
        text="Hi",
        reply_to="ada@example.com",
    )


def _client(
    transport: httpx.MockTransport, api_key: str | None = "re_key"
) -> TransactionalEmailClient:
    config = EmailProviderConfig(api_key=api_key, api_url=API_URL)
    return TransactionalEmailClient(config, httpx.AsyncClient(transport=transport))


class TestSend:
    @pytest.mark.asyncio
    async def test_success_returns_provider_id(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "msg_42"})

        outcome = await _client(httpx.MockTransport(handler)).send(_email())

        assert outcome.unwrap() == "msg_42"
        request = seen[0]
        assert str(request.url) == API_URL
        assert request.headers["Authorization"] == "Bearer re_key"
        body = json.loads(request.content)
        assert body["from"] == "site@example.com"
        assert body["to"] == ["inbox@example.com"]
        assert body["reply_to"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_error_status_becomes_delivery_error(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(422, json={"message": "invalid from"})
        )

        outcome = await _client(transport).send(_email())

        error = outcome.unwrap_err()
        assert error.status_code == 422

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_delivery_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        outcome = await _client(httpx.MockTransport(handler)).send(_email())

        error = outcome.unwrap_err()
        assert "unreachable" in str(error)
        assert error.status_code is None

    @pytest.mark.asyncio
    async def test_missing_message_id_is_an_error(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        outcome = await _client(transport).send(_email())
        assert outcome.is_err()

    @pytest.mark.asyncio
    async def test_missing_api_key_sends_nothing(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"id": "never"})

        outcome = await _client(httpx.MockTransport(handler), api_key=None).send(_email())

        assert "not configured" in str(outcome.unwrap_err())
        assert calls == []


class TestPayload:
    def test_reply_to_is_omitted_when_absent(self) -> None:
        email = _email().model_copy(update={"reply_to": None})
        assert "reply_to" not in TransactionalEmailClient.payload(email)
