"""Installment finance calculator - core pricing logic for finance quotes"""

from typing import List

from boiler_funnel.domain.exceptions import (
    InvalidDepositError,
    InvalidFinanceTermError,
    UnknownPaymentOptionError,
)
from boiler_funnel.domain.models import FinanceDetails, FinanceQuote, PaymentOption
from boiler_funnel.domain.pricing import percentage_of

# Options offered in the finance selector, in display order
PAYMENT_OPTIONS: List[PaymentOption] = [
    PaymentOption(months=120, apr=11.9),
    PaymentOption(months=60, apr=11.9),
    PaymentOption(months=36, apr=11.9),
    PaymentOption(months=48, apr=0),
    PaymentOption(months=36, apr=0),
    PaymentOption(months=24, apr=0),
    PaymentOption(months=12, apr=0),
]

MIN_DEPOSIT_PERCENTAGE = 0
MAX_DEPOSIT_PERCENTAGE = 50

# Display-only approximation of the annual interest rate. Not derived from the
# APR and not suitable for regulatory disclosure.
ANNUAL_RATE_FACTOR = 0.565


def compute_monthly_payment(principal: float, months: int, apr: float) -> float:
    """
    Monthly installment for an amortizing loan.

    payment = P * r * (1 + r)^n / ((1 + r)^n - 1), with r = APR / 12 / 100.
    Zero-APR offers are an equal split of the principal.

    Result is unrounded; round only for display.

    Raises:
        InvalidFinanceTermError: If months is not positive
    """
    if months <= 0:
        raise InvalidFinanceTermError(f"Loan term must be positive, got {months} months")

    monthly_rate = apr / 12 / 100
    if monthly_rate == 0:
        return principal / months

    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def compute_finance_details(price: float, deposit_amount: float, months: int, apr: float) -> FinanceDetails:
    """
    Derive the finance summary for a price, deposit and term.

    total_payable = monthly_payment * months
    interest_payable = total_payable - loan_amount
    """
    loan_amount = price - deposit_amount
    monthly_payment = compute_monthly_payment(loan_amount, months, apr)
    total_payable = monthly_payment * months

    return FinanceDetails(
        monthly_payment=monthly_payment,
        deposit=deposit_amount,
        months=months,
        apr=apr,
        loan_amount=loan_amount,
        interest_payable=total_payable - loan_amount,
        total_payable=total_payable,
        annual_interest_rate=apr * ANNUAL_RATE_FACTOR,
    )


def validate_deposit_percentage(deposit_percentage: int) -> None:
    """Reject deposits outside 0-50% or not in whole percentage points"""
    if isinstance(deposit_percentage, bool) or not isinstance(deposit_percentage, int):
        raise InvalidDepositError(f"Deposit percentage must be a whole number, got {deposit_percentage!r}")
    if not MIN_DEPOSIT_PERCENTAGE <= deposit_percentage <= MAX_DEPOSIT_PERCENTAGE:
        raise InvalidDepositError(
            f"Deposit percentage must be between {MIN_DEPOSIT_PERCENTAGE} and "
            f"{MAX_DEPOSIT_PERCENTAGE}, got {deposit_percentage}"
        )


def quote_finance(price: float, deposit_percentage: int, months: int, apr: float) -> FinanceQuote:
    """
    Main entry point: finance quote for a cash price and deposit percentage.

    Accepts any term/APR pair; callers facing users should resolve the pair
    through find_payment_option() first.
    """
    validate_deposit_percentage(deposit_percentage)
    deposit_amount = percentage_of(price, deposit_percentage)
    details = compute_finance_details(price, deposit_amount, months, apr)

    return FinanceQuote(
        price=price,
        deposit_percentage=deposit_percentage,
        deposit_amount=deposit_amount,
        loan_amount=details.loan_amount,
        months=details.months,
        apr=details.apr,
        monthly_payment=details.monthly_payment,
        total_payable=details.total_payable,
        interest_payable=details.interest_payable,
        annual_interest_rate=details.annual_interest_rate,
    )


def quote_all_options(price: float, deposit_percentage: int) -> List[FinanceQuote]:
    """Quote every catalog option, in catalog order"""
    return [
        quote_finance(price, deposit_percentage, option.months, option.apr)
        for option in PAYMENT_OPTIONS
    ]


def find_payment_option(months: int, apr: float) -> PaymentOption:
    """
    Look up a term/APR pair in the catalog.

    Raises:
        UnknownPaymentOptionError: If the pair is not offered
    """
    for option in PAYMENT_OPTIONS:
        if option.months == months and option.apr == apr:
            return option
    raise UnknownPaymentOptionError(f"No finance option for {months} months at {apr}% APR")
