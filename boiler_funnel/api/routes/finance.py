"""/api/finance - finance option catalog and installment quotes"""

from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Query, Request

from boiler_funnel.api.schemas import (
    FinanceQuoteListResponse,
    FinanceQuoteRequest,
    FinanceQuoteResponse,
    FinanceQuoteSchema,
    PaymentOptionListResponse,
    PaymentOptionSchema,
)
from boiler_funnel.api.dependencies import get_request_id
from boiler_funnel.domain.finance import PAYMENT_OPTIONS, find_payment_option, quote_all_options, quote_finance
from boiler_funnel.domain.models import FinanceQuote
from boiler_funnel.domain.exceptions import InvalidDepositError, InvalidPriceError, UnknownPaymentOptionError
from boiler_funnel.domain.pricing import format_currency, parse_price
from boiler_funnel.infrastructure.observability.metrics import record_finance_quote
from boiler_funnel.infrastructure.observability.logging import log_finance_quote

router = APIRouter()


def to_quote_schema(quote: FinanceQuote) -> FinanceQuoteSchema:
    return FinanceQuoteSchema(
        **asdict(quote),
        monthly_payment_display=format_currency(quote.monthly_payment),
        total_payable_display=format_currency(quote.total_payable),
    )


@router.get("/options", response_model=PaymentOptionListResponse)
def list_payment_options():
    """Term/APR pairs offered in the finance selector"""
    return PaymentOptionListResponse(
        data=[PaymentOptionSchema(months=o.months, apr=o.apr) for o in PAYMENT_OPTIONS]
    )


@router.post("/quote", response_model=FinanceQuoteResponse)
def create_quote(request_body: FinanceQuoteRequest, request: Request):
    """Quote a single catalog option"""
    try:
        price = parse_price(request_body.price)
        option = find_payment_option(request_body.months, request_body.apr)
        quote = quote_finance(price, request_body.deposit_percentage, option.months, option.apr)
    except (InvalidPriceError, InvalidDepositError, UnknownPaymentOptionError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    record_finance_quote(quote.apr)
    log_finance_quote(get_request_id(request), quote.price, quote.months, quote.apr, quote.monthly_payment)
    return FinanceQuoteResponse(data=to_quote_schema(quote))


@router.get("/quotes", response_model=FinanceQuoteListResponse)
def list_quotes(
    price: str = Query(..., description='Cash price, e.g. "£2,340" or 2340'),
    deposit_percentage: int = Query(0, ge=0, le=50),
):
    """Quote every catalog option for a price and deposit"""
    try:
        quotes = quote_all_options(parse_price(price), deposit_percentage)
    except (InvalidPriceError, InvalidDepositError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return FinanceQuoteListResponse(data=[to_quote_schema(q) for q in quotes])
