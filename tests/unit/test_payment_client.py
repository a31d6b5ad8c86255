"""Unit tests for the payment gateway client"""

import httpx
import pytest
from urllib.parse import parse_qs
from boiler_funnel.infrastructure.clients.payments import PaymentGatewayClient
from boiler_funnel.domain.exceptions import (
    PaymentGatewayAuthError,
    PaymentGatewayError,
    PaymentGatewayNotConfiguredError,
)

INTENT = {
    "id": "pi_123",
    "object": "payment_intent",
    "amount": 268500,
    "currency": "gbp",
    "status": "requires_payment_method",
    "client_secret": "pi_123_secret_abc",
}


def make_client(handler, api_key: str = "sk_test_123") -> PaymentGatewayClient:
    return PaymentGatewayClient(
        api_key=api_key,
        base_url="https://gateway.test",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_create_payment_intent_sends_pence_once():
    """£2,685 goes over the wire as 268500 pence with submission metadata"""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["auth"] = request.headers["Authorization"]
        captured["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json=INTENT)

    intent = await make_client(handler).create_payment_intent(2685, "gbp", {"submission_id": "sub-1"})

    assert captured["method"] == "POST"
    assert captured["path"] == "/v1/payment_intents"
    assert captured["auth"] == "Bearer sk_test_123"
    assert captured["form"]["amount"] == ["268500"]
    assert captured["form"]["currency"] == ["gbp"]
    assert captured["form"]["automatic_payment_methods[enabled]"] == ["true"]
    assert captured["form"]["metadata[submission_id]"] == ["sub-1"]

    assert intent.id == "pi_123"
    assert intent.client_secret == "pi_123_secret_abc"
    assert intent.amount_pence == 268500


async def test_create_payment_intent_rounds_half_up():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json=INTENT)

    await make_client(handler).create_payment_intent(26.905)
    assert captured["form"]["amount"] == ["2691"]


async def test_retrieve_payment_intent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/v1/payment_intents/pi_123"
        return httpx.Response(200, json={**INTENT, "status": "succeeded"})

    intent = await make_client(handler).retrieve_payment_intent("pi_123")

    assert intent.status == "succeeded"
    assert intent.currency == "gbp"


async def test_retrieve_payment_intent_keeps_id_in_one_path_segment():
    """Slashes and query characters in the id are escaped, not followed"""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["raw_path"] = request.url.raw_path
        captured["query"] = request.url.query
        return httpx.Response(200, json=INTENT)

    await make_client(handler).retrieve_payment_intent("pi_1/../../v1/refunds?limit=1")

    assert captured["raw_path"] == b"/v1/payment_intents/pi_1%2F..%2F..%2Fv1%2Frefunds%3Flimit%3D1"
    assert captured["query"] == b""


async def test_missing_api_key_fails_before_network():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("gateway should not be called")

    with pytest.raises(PaymentGatewayNotConfiguredError):
        await make_client(handler, api_key="").create_payment_intent(100)


async def test_rejected_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"type": "invalid_request_error"}})

    with pytest.raises(PaymentGatewayAuthError):
        await make_client(handler).create_payment_intent(100)


async def test_server_error_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(PaymentGatewayError) as exc_info:
        await make_client(handler).retrieve_payment_intent("pi_123")
    assert not isinstance(exc_info.value, PaymentGatewayAuthError)


async def test_timeout_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(PaymentGatewayError, match="timeout"):
        await make_client(handler).create_payment_intent(100)


async def test_malformed_intent_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"object": "payment_intent"})

    with pytest.raises(PaymentGatewayError):
        await make_client(handler).retrieve_payment_intent("pi_123")
