"""Payment gateway HTTP client for creating and verifying payment intents"""

import httpx
from typing import Any, Dict, Mapping
from urllib.parse import quote
from boiler_funnel.domain.models import PaymentIntent
from boiler_funnel.domain.pricing import to_minor_units
from boiler_funnel.domain.exceptions import (
    PaymentGatewayAuthError,
    PaymentGatewayError,
    PaymentGatewayNotConfiguredError,
)
from boiler_funnel.config import settings
from boiler_funnel.infrastructure.observability.metrics import (
    payment_gateway_failures_counter,
    payment_gateway_latency_histogram,
)


class PaymentGatewayClient:
    """
    Client for a hosted payment-intent API (Stripe-compatible).

    Amounts cross this boundary in pounds and are converted to integer pence
    here, once. Card details never reach this service.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.payment_secret_key
        self.base_url = base_url or settings.payment_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise PaymentGatewayNotConfiguredError(
                "Payment gateway is not configured. Set PAYMENT_SECRET_KEY in the environment."
            )
        return {"Authorization": f"Bearer {self.api_key}"}

    async def create_payment_intent(
        self,
        amount: float,
        currency: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> PaymentIntent:
        """
        Create a payment intent for an amount in pounds.

        Raises:
            PaymentGatewayNotConfiguredError: No secret key configured
            PaymentGatewayAuthError: Secret key rejected
            PaymentGatewayError: On timeout, HTTP errors, or invalid response
        """
        form = {
            "amount": str(to_minor_units(amount)),
            "currency": currency or settings.payment_currency,
            "automatic_payment_methods[enabled]": "true",
        }
        for key, value in (metadata or {}).items():
            form[f"metadata[{key}]"] = value

        data = await self._request("POST", "/v1/payment_intents", data=form)
        return self._parse_intent(data)

    async def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntent:
        """Fetch a payment intent to verify its status"""
        # The id comes from the browser; keep it inside a single path segment
        data = await self._request("GET", f"/v1/payment_intents/{quote(payment_intent_id, safe='')}")
        return self._parse_intent(data)

    async def _request(self, method: str, path: str, data: Dict[str, str] | None = None) -> Dict[str, Any]:
        headers = self._headers()
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                with payment_gateway_latency_histogram.time():
                    response = await client.request(method, path, data=data, headers=headers)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                payment_gateway_failures_counter.inc()
                raise PaymentGatewayError(f"Payment gateway timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                payment_gateway_failures_counter.inc()
                if e.response.status_code == 401:
                    raise PaymentGatewayAuthError("Invalid payment gateway API key") from e
                raise PaymentGatewayError(f"Payment gateway error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                payment_gateway_failures_counter.inc()
                raise PaymentGatewayError(f"Payment gateway unreachable: {e}") from e
            except ValueError as e:
                payment_gateway_failures_counter.inc()
                raise PaymentGatewayError(f"Invalid response from payment gateway: {e}") from e

    @staticmethod
    def _parse_intent(data: Dict[str, Any]) -> PaymentIntent:
        try:
            return PaymentIntent(
                id=data["id"],
                client_secret=data.get("client_secret"),
                status=data["status"],
                amount_pence=int(data["amount"]),
                currency=data.get("currency", settings.payment_currency),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise PaymentGatewayError(f"Invalid payment intent from gateway: {e}") from e
