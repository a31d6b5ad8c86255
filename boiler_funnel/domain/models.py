"""Domain models - pure Python dataclasses representing funnel entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class PaymentOption:
    """Finance term paired with its APR"""

    months: int
    apr: float


@dataclass(frozen=True)
class FinanceDetails:
    """Figures derived from a financed amount, term and APR"""

    monthly_payment: float
    deposit: float
    months: int
    apr: float
    loan_amount: float
    interest_payable: float
    total_payable: float
    annual_interest_rate: float  # display-only approximation, see finance.ANNUAL_RATE_FACTOR


@dataclass(frozen=True)
class FinanceQuote:
    """Finance preview for a product price and deposit percentage"""

    price: float
    deposit_percentage: int
    deposit_amount: float
    loan_amount: float
    months: int
    apr: float
    monthly_payment: float
    total_payable: float
    interest_payable: float
    annual_interest_rate: float


class DateStatus(str, Enum):
    """Availability of a calendar day for installation"""

    UNAVAILABLE = "unavailable"
    FULL = "full"
    SURCHARGE = "surcharge"
    AVAILABLE = "available"


@dataclass(frozen=True)
class CalendarDay:
    """Single day cell in the booking calendar"""

    date: date
    status: DateStatus
    selectable: bool
    surcharge: float


@dataclass(frozen=True)
class BookingSelection:
    """Confirmed install date with its surcharge"""

    install_date: date
    status: DateStatus
    surcharge: float


@dataclass(frozen=True)
class SelectedProduct:
    """Product chosen on the product step"""

    id: str
    name: str
    brand: str
    price: str  # display string, e.g. "£2,340"


@dataclass(frozen=True)
class PaymentIntent:
    """Payment intent as returned by the payment gateway"""

    id: str
    client_secret: str | None
    status: str
    amount_pence: int
    currency: str
