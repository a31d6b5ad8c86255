"""/api/forms - qualification form submissions and funnel steps"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boiler_funnel.api.schemas import (
    BookingRequest,
    BookingResponse,
    CheckoutResponse,
    FinanceSelectionRequest,
    ProductSelectionRequest,
    SelectedProductSchema,
    SubmissionCreate,
    SubmissionCreatedResponse,
    SubmissionListResponse,
    SubmissionResponse,
    SubmissionSchema,
    SubmissionUpdate,
    SuccessResponse,
)
from boiler_funnel.api.dependencies import get_request_id, parse_object_id
from boiler_funnel.infrastructure.database.session import get_db
from boiler_funnel.infrastructure.database.models import FormSubmission
from boiler_funnel.infrastructure.database.repositories import ProductRepository, SubmissionRepository
from boiler_funnel.domain.booking import confirm_selection
from boiler_funnel.domain.finance import find_payment_option, quote_finance
from boiler_funnel.domain.models import SelectedProduct
from boiler_funnel.domain.exceptions import (
    DateNotSelectableError,
    InvalidDepositError,
    InvalidPriceError,
    UnknownPaymentOptionError,
)
from boiler_funnel.domain.pricing import format_currency
from boiler_funnel.infrastructure.observability.metrics import (
    record_booking,
    record_finance_quote,
    submission_counter,
)
from boiler_funnel.infrastructure.observability.logging import log_booking, log_finance_quote, log_submission

router = APIRouter()


def _get_submission_or_404(repo: SubmissionRepository, submission_id: str) -> FormSubmission:
    submission = repo.get_submission(parse_object_id(submission_id, "submission"))
    if not submission:
        raise HTTPException(status_code=404, detail="Form submission not found")
    return submission


@router.post("/submit", response_model=SubmissionCreatedResponse, status_code=201)
def submit_form(request_body: SubmissionCreate, request: Request, db: Session = Depends(get_db)):
    """Save the qualification answers and contact details of a new lead"""
    request_id = get_request_id(request)
    repo = SubmissionRepository(db)

    try:
        submission = repo.create_submission(request_body.model_dump())
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error saving form submission: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to save form submission")

    submission_counter.inc()
    log_submission(request_id, str(submission.id), "submitted")

    return SubmissionCreatedResponse(message="Form submission saved successfully", id=str(submission.id))


@router.get("/all", response_model=SubmissionListResponse)
def list_submissions(db: Session = Depends(get_db)):
    """All submissions, newest first"""
    submissions = SubmissionRepository(db).list_submissions()
    return SubmissionListResponse(data=[SubmissionSchema.model_validate(s) for s in submissions])


@router.get("/{submission_id}", response_model=SubmissionResponse)
def get_submission(submission_id: str, db: Session = Depends(get_db)):
    submission = _get_submission_or_404(SubmissionRepository(db), submission_id)
    return SubmissionResponse(data=SubmissionSchema.model_validate(submission))


@router.put("/{submission_id}", response_model=SubmissionResponse)
def update_submission(
    submission_id: str,
    request_body: SubmissionUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Partial update of qualification, contact and payment fields"""
    request_id = get_request_id(request)
    repo = SubmissionRepository(db)
    submission = _get_submission_or_404(repo, submission_id)

    try:
        submission = repo.update_submission(submission.id, request_body.model_dump(exclude_unset=True))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating form submission: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to update form submission")

    log_submission(request_id, str(submission.id), "updated")
    return SubmissionResponse(
        message="Form submission updated successfully",
        data=SubmissionSchema.model_validate(submission),
    )


@router.delete("/{submission_id}", response_model=SuccessResponse)
def delete_submission(submission_id: str, request: Request, db: Session = Depends(get_db)):
    repo = SubmissionRepository(db)
    submission_uuid = parse_object_id(submission_id, "submission")

    try:
        deleted = repo.delete_submission(submission_uuid)
        if deleted:
            db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error deleting form submission: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to delete form submission")

    if not deleted:
        raise HTTPException(status_code=404, detail="Form submission not found")
    return SuccessResponse(message="Form submission deleted successfully")


@router.post("/{submission_id}/product", response_model=SubmissionResponse)
def select_product(
    submission_id: str,
    request_body: ProductSelectionRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Record the chosen installation package; clears any earlier finance figures"""
    repo = SubmissionRepository(db)
    submission = _get_submission_or_404(repo, submission_id)

    product = ProductRepository(db).get_product(parse_object_id(request_body.product_id, "product"))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    session = repo.load_session(submission).with_product(
        SelectedProduct(id=str(product.id), name=product.name, brand=product.brand, price=product.price)
    )
    request_id = get_request_id(request)
    try:
        repo.save_session(submission, session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error saving product selection: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to save product selection")

    log_submission(request_id, str(submission.id), "product_selected")
    return SubmissionResponse(
        message="Product selection saved successfully",
        data=SubmissionSchema.model_validate(submission),
    )


@router.post("/{submission_id}/finance", response_model=SubmissionResponse)
def select_finance(
    submission_id: str,
    request_body: FinanceSelectionRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Quote the selected product on a catalog finance option and store the figures.

    The price always comes from the stored product selection, never the client.
    """
    request_id = get_request_id(request)
    repo = SubmissionRepository(db)
    submission = _get_submission_or_404(repo, submission_id)
    session = repo.load_session(submission)

    try:
        price = session.base_price()
        if price is None:
            raise HTTPException(status_code=409, detail="Select a product before choosing finance")

        option = find_payment_option(request_body.months, request_body.apr)
        quote = quote_finance(price, request_body.deposit_percentage, option.months, option.apr)
    except (InvalidPriceError, InvalidDepositError, UnknownPaymentOptionError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        repo.save_session(submission, session.with_finance(quote))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error saving finance details: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to save finance details")

    record_finance_quote(quote.apr)
    log_finance_quote(request_id, quote.price, quote.months, quote.apr, quote.monthly_payment)
    return SubmissionResponse(
        message="Finance details saved successfully",
        data=SubmissionSchema.model_validate(submission),
    )


@router.post("/{submission_id}/booking", response_model=BookingResponse)
def confirm_booking(
    submission_id: str,
    request_body: BookingRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Confirm the install date; stores the date and its surcharge"""
    repo = SubmissionRepository(db)
    submission = _get_submission_or_404(repo, submission_id)

    try:
        selection = confirm_selection(request_body.install_date)
    except DateNotSelectableError as e:
        raise HTTPException(status_code=422, detail=f"Please select an available date: {e}")

    session = repo.load_session(submission).with_booking(selection)
    try:
        total = session.checkout_total()
    except InvalidPriceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    request_id = get_request_id(request)
    try:
        repo.save_session(submission, session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error saving install date: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to save install date")

    record_booking(selection.status.value)
    log_booking(request_id, str(submission.id), selection.install_date.isoformat(), selection.surcharge)

    return BookingResponse(
        message="Install date confirmed",
        install_date=selection.install_date,
        status=selection.status.value,
        surcharge=selection.surcharge,
        total=total,
        formatted_total=format_currency(total) if total is not None else None,
    )


@router.get("/{submission_id}/checkout", response_model=CheckoutResponse)
def get_checkout_summary(submission_id: str, db: Session = Depends(get_db)):
    """Amount due at checkout: product price plus any date surcharge"""
    repo = SubmissionRepository(db)
    submission = _get_submission_or_404(repo, submission_id)
    session = repo.load_session(submission)

    if session.selected_product is None:
        raise HTTPException(status_code=409, detail="No product selected for this submission")

    try:
        base_price = session.base_price()
    except InvalidPriceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    total = base_price + session.surcharge()
    product = session.selected_product
    return CheckoutResponse(
        submission_id=str(submission.id),
        selected_product=SelectedProductSchema(
            id=product.id, name=product.name, brand=product.brand, price=product.price
        ),
        install_date=session.install_date,
        base_price=base_price,
        surcharge=session.surcharge(),
        total=total,
        formatted_total=format_currency(total),
    )
