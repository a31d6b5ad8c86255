"""/api/payments - card checkout through the payment gateway"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boiler_funnel.api.schemas import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreatePaymentIntentRequest,
    CreatePaymentIntentResponse,
    PaymentIntentSummary,
)
from boiler_funnel.api.dependencies import get_payment_client, get_request_id, parse_object_id
from boiler_funnel.infrastructure.database.session import get_db
from boiler_funnel.infrastructure.database.repositories import SubmissionRepository
from boiler_funnel.infrastructure.clients.payments import PaymentGatewayClient
from boiler_funnel.domain.exceptions import (
    InvalidPriceError,
    PaymentGatewayAuthError,
    PaymentGatewayError,
    PaymentGatewayNotConfiguredError,
)
from boiler_funnel.domain.pricing import from_minor_units
from boiler_funnel.infrastructure.observability.metrics import record_payment_intent
from boiler_funnel.infrastructure.observability.logging import log_payment

router = APIRouter()

PAYMENT_SUCCEEDED = "succeeded"


def _gateway_http_error(e: PaymentGatewayError, request_id: str) -> HTTPException:
    """Map payment gateway failures to HTTP errors"""
    if isinstance(e, (PaymentGatewayNotConfiguredError, PaymentGatewayAuthError)):
        logging.error(f"Payment gateway misconfigured: {e}", extra={"request_id": request_id})
        return HTTPException(status_code=500, detail=str(e))

    logging.error(f"Payment gateway error: {e}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail="Payment service unavailable")


@router.post("/create-intent", response_model=CreatePaymentIntentResponse)
async def create_payment_intent(
    request_body: CreatePaymentIntentRequest,
    request: Request,
    db: Session = Depends(get_db),
    payment_client: PaymentGatewayClient = Depends(get_payment_client),
):
    """
    Create a payment intent for the checkout total.

    When no amount is sent, the total is derived from the submission's
    selected product and install-date surcharge.
    """
    request_id = get_request_id(request)
    amount = request_body.amount

    if amount is None and request_body.submission_id:
        repo = SubmissionRepository(db)
        submission = repo.get_submission(parse_object_id(request_body.submission_id, "submission"))
        if not submission:
            raise HTTPException(status_code=404, detail="Form submission not found")
        try:
            amount = repo.load_session(submission).checkout_total()
        except InvalidPriceError as e:
            raise HTTPException(status_code=422, detail=str(e))

    if amount is None or amount <= 0:
        raise HTTPException(status_code=400, detail="Invalid amount")

    metadata = {"submission_id": request_body.submission_id or "", **request_body.metadata}

    try:
        intent = await payment_client.create_payment_intent(amount, request_body.currency, metadata)
    except PaymentGatewayError as e:
        raise _gateway_http_error(e, request_id)

    record_payment_intent("created")
    log_payment(request_id, intent.id, request_body.submission_id, intent.status, amount)

    return CreatePaymentIntentResponse(
        client_secret=intent.client_secret,
        payment_intent_id=intent.id,
        amount=amount,
    )


@router.post("/confirm", response_model=ConfirmPaymentResponse)
async def confirm_payment(
    request_body: ConfirmPaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
    payment_client: PaymentGatewayClient = Depends(get_payment_client),
):
    """
    Verify a payment intent with the gateway and mark the submission paid.

    The client-side confirmation is not trusted; the intent status is read
    back from the gateway.
    """
    request_id = get_request_id(request)
    submission_uuid = (
        parse_object_id(request_body.submission_id, "submission") if request_body.submission_id else None
    )

    try:
        intent = await payment_client.retrieve_payment_intent(request_body.payment_intent_id)
    except PaymentGatewayError as e:
        raise _gateway_http_error(e, request_id)

    amount = from_minor_units(intent.amount_pence)
    log_payment(request_id, intent.id, request_body.submission_id, intent.status, amount)

    if intent.status != PAYMENT_SUCCEEDED:
        record_payment_intent("not_completed")
        raise HTTPException(
            status_code=400,
            detail={"error": "Payment not completed", "status": intent.status},
        )

    if submission_uuid:
        try:
            submission = SubmissionRepository(db).mark_payment_completed(
                submission_uuid,
                payment_intent_id=intent.id,
                amount=amount,
                paid_at=datetime.now(timezone.utc),
            )
            if submission:
                db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logging.error(
                f"Error recording payment: {e}",
                extra={"request_id": request_id, "payment_intent_id": intent.id},
            )
            raise HTTPException(status_code=500, detail="Failed to record payment")

        if not submission:
            logging.warning(
                "Payment confirmed for unknown submission",
                extra={"request_id": request_id, "submission_id": request_body.submission_id},
            )

    record_payment_intent("succeeded")
    return ConfirmPaymentResponse(
        message="Payment confirmed successfully",
        payment_intent=PaymentIntentSummary(id=intent.id, status=intent.status, amount=amount),
    )
