"""Integration tests for payment endpoints with a mocked gateway"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from boiler_funnel.api.dependencies import get_payment_client
from boiler_funnel.domain.exceptions import PaymentGatewayError
from boiler_funnel.domain.models import PaymentIntent
from boiler_funnel.infrastructure.clients.payments import PaymentGatewayClient
from boiler_funnel.infrastructure.database.models import Product

CREATE_INTENT = "boiler_funnel.infrastructure.clients.payments.PaymentGatewayClient.create_payment_intent"
RETRIEVE_INTENT = "boiler_funnel.infrastructure.clients.payments.PaymentGatewayClient.retrieve_payment_intent"


def make_intent(status: str = "requires_payment_method", amount_pence: int = 268500) -> PaymentIntent:
    return PaymentIntent(
        id="pi_test_123",
        client_secret="pi_test_123_secret_abc",
        status=status,
        amount_pence=amount_pence,
        currency="gbp",
    )


def prepare_checkout(client: TestClient, submission_id: str, product: Product) -> None:
    client.post(f"/api/forms/{submission_id}/product", json={"product_id": str(product.id)})
    client.post(f"/api/forms/{submission_id}/booking", json={"install_date": "2025-06-13"})


@patch(CREATE_INTENT, new_callable=AsyncMock)
def test_create_intent_with_amount(mock_create, client: TestClient):
    mock_create.return_value = make_intent()

    response = client.post("/api/payments/create-intent", json={"amount": 2685})

    assert response.status_code == 200
    data = response.json()
    assert data["client_secret"] == "pi_test_123_secret_abc"
    assert data["payment_intent_id"] == "pi_test_123"
    assert data["amount"] == 2685
    mock_create.assert_awaited_once_with(2685.0, "gbp", {"submission_id": ""})


@patch(CREATE_INTENT, new_callable=AsyncMock)
def test_create_intent_derives_amount_from_submission(
    mock_create, client: TestClient, submission_id: str, product: Product
):
    mock_create.return_value = make_intent()
    prepare_checkout(client, submission_id, product)

    response = client.post(
        "/api/payments/create-intent",
        json={"submission_id": submission_id, "metadata": {"source": "checkout"}},
    )

    assert response.status_code == 200
    assert response.json()["amount"] == 2685
    mock_create.assert_awaited_once_with(2685.0, "gbp", {"submission_id": submission_id, "source": "checkout"})


@patch(CREATE_INTENT, new_callable=AsyncMock)
def test_create_intent_invalid_amount(mock_create, client: TestClient, submission_id: str):
    assert client.post("/api/payments/create-intent", json={"amount": 0}).status_code == 400
    assert client.post("/api/payments/create-intent", json={"amount": -5}).status_code == 400
    assert client.post("/api/payments/create-intent", json={}).status_code == 400
    # Submission without a product has nothing to charge
    response = client.post("/api/payments/create-intent", json={"submission_id": submission_id})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid amount"
    mock_create.assert_not_awaited()


def test_create_intent_unknown_submission(client: TestClient):
    response = client.post(
        "/api/payments/create-intent",
        json={"submission_id": "00000000-0000-0000-0000-000000000000"},
    )
    assert response.status_code == 404


def test_create_intent_gateway_not_configured(client: TestClient):
    client.app.dependency_overrides[get_payment_client] = lambda: PaymentGatewayClient(api_key="")

    response = client.post("/api/payments/create-intent", json={"amount": 2600})

    assert response.status_code == 500
    assert "PAYMENT_SECRET_KEY" in response.json()["detail"]


@patch(CREATE_INTENT, new_callable=AsyncMock)
def test_create_intent_gateway_unavailable(mock_create, client: TestClient):
    mock_create.side_effect = PaymentGatewayError("Payment gateway timeout after 10.0s")

    response = client.post("/api/payments/create-intent", json={"amount": 2600})

    assert response.status_code == 503
    assert response.json()["detail"] == "Payment service unavailable"


@patch(RETRIEVE_INTENT, new_callable=AsyncMock)
def test_confirm_payment_marks_submission_paid(
    mock_retrieve, client: TestClient, submission_id: str, product: Product
):
    mock_retrieve.return_value = make_intent(status="succeeded")
    prepare_checkout(client, submission_id, product)

    response = client.post(
        "/api/payments/confirm",
        json={"payment_intent_id": "pi_test_123", "submission_id": submission_id},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Payment confirmed successfully"
    assert body["payment_intent"] == {"id": "pi_test_123", "status": "succeeded", "amount": 2685}
    mock_retrieve.assert_awaited_once_with("pi_test_123")

    stored = client.get(f"/api/forms/{submission_id}").json()["data"]
    assert stored["payment_status"] == "completed"
    assert stored["payment_intent_id"] == "pi_test_123"
    assert stored["payment_amount"] == 2685
    assert stored["payment_date"] is not None


@patch(RETRIEVE_INTENT, new_callable=AsyncMock)
def test_confirm_payment_not_completed(mock_retrieve, client: TestClient, submission_id: str):
    mock_retrieve.return_value = make_intent(status="requires_payment_method")

    response = client.post(
        "/api/payments/confirm",
        json={"payment_intent_id": "pi_test_123", "submission_id": submission_id},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == {"error": "Payment not completed", "status": "requires_payment_method"}

    stored = client.get(f"/api/forms/{submission_id}").json()["data"]
    assert stored["payment_status"] is None


@patch(RETRIEVE_INTENT, new_callable=AsyncMock)
def test_confirm_payment_without_submission(mock_retrieve, client: TestClient):
    mock_retrieve.return_value = make_intent(status="succeeded", amount_pence=260000)

    response = client.post("/api/payments/confirm", json={"payment_intent_id": "pi_test_123"})

    assert response.status_code == 200
    assert response.json()["payment_intent"]["amount"] == 2600


@pytest.mark.parametrize("intent_id", ["pi_1/../../v1/refunds", "pi_1?limit=1", "ch_123", ""])
@patch(RETRIEVE_INTENT, new_callable=AsyncMock)
def test_confirm_payment_rejects_malformed_intent_id(mock_retrieve, client: TestClient, intent_id: str):
    response = client.post("/api/payments/confirm", json={"payment_intent_id": intent_id})

    assert response.status_code == 422
    mock_retrieve.assert_not_awaited()


def test_confirm_payment_rejects_malformed_submission_id(client: TestClient):
    response = client.post(
        "/api/payments/confirm",
        json={"payment_intent_id": "pi_test_123", "submission_id": "abc"},
    )
    assert response.status_code == 400


@patch(RETRIEVE_INTENT, new_callable=AsyncMock)
def test_confirm_payment_storage_failure(
    mock_retrieve, client: TestClient, db: Session, submission_id: str, product: Product
):
    mock_retrieve.return_value = make_intent(status="succeeded")
    prepare_checkout(client, submission_id, product)

    with patch.object(db, "commit", side_effect=SQLAlchemyError("database is locked")):
        response = client.post(
            "/api/payments/confirm",
            json={"payment_intent_id": "pi_test_123", "submission_id": submission_id},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to record payment"
    assert client.get(f"/api/forms/{submission_id}").json()["data"]["payment_status"] is None
