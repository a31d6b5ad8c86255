"""Pydantic schemas for API request/response validation"""

import uuid
from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from boiler_funnel.domain.exceptions import InvalidPriceError
from boiler_funnel.domain.pricing import parse_price
from boiler_funnel.utils.list_fields import parse_string_list

FuelType = Literal["mains-gas", "lpg", "unknown-fuel"]
BoilerType = Literal["combi", "regular", "system", "back-boiler"]
PropertyType = Literal["detached", "bungalow", "flat-apartment"]
BedroomCount = Literal["1", "2", "3", "4", "5+"]
BathtubCount = Literal["none", "1", "2", "3+"]
ShowerCubicleCount = Literal["none", "1", "2+"]
FlueExitType = Literal["external-wall", "roof"]
ReplacementTiming = Literal["asap", "this-week", "next-week"]
PaymentStatus = Literal["pending", "completed", "failed", "refunded"]
ProductCategory = Literal["good", "better", "best"]
DateStatusValue = Literal["unavailable", "full", "surcharge", "available"]


class SuccessResponse(BaseModel):
    """Envelope shared by every API response"""

    success: bool = True
    message: Optional[str] = None


# Form submissions


class SelectedProductSchema(BaseModel):
    id: str
    name: str
    brand: str
    price: str


class PaymentOptionSchema(BaseModel):
    months: int = Field(..., gt=0)
    apr: float = Field(..., ge=0)


class FinanceDetailsSchema(BaseModel):
    """Finance figures stored on a submission"""

    deposit_percentage: int = Field(..., ge=0, le=50)
    deposit_amount: float = Field(..., ge=0)
    payment_option: PaymentOptionSchema
    monthly_payment: float
    total_payable: float
    interest_payable: Optional[float] = None


class QualificationFields(BaseModel):
    """Answers from the multi-step qualification form"""

    fuel_type: Optional[FuelType] = None
    boiler_type: Optional[BoilerType] = None
    property_type: Optional[PropertyType] = None
    bedroom_count: Optional[BedroomCount] = None
    bathtub_count: Optional[BathtubCount] = None
    shower_cubicle_count: Optional[ShowerCubicleCount] = None
    flue_exit_type: Optional[FlueExitType] = None
    replacement_timing: Optional[ReplacementTiming] = None
    postcode: str = ""
    address: str = ""


class SubmissionCreate(QualificationFields):
    """Request body for POST /api/forms/submit"""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    selected_product: Optional[SelectedProductSchema] = None
    finance_details: Optional[FinanceDetailsSchema] = None


class SubmissionUpdate(BaseModel):
    """Request body for PUT /api/forms/{id}; only fields sent are changed"""

    # selected_product and finance_details are only set by the /product and /finance steps
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    fuel_type: Optional[FuelType] = None
    boiler_type: Optional[BoilerType] = None
    property_type: Optional[PropertyType] = None
    bedroom_count: Optional[BedroomCount] = None
    bathtub_count: Optional[BathtubCount] = None
    shower_cubicle_count: Optional[ShowerCubicleCount] = None
    flue_exit_type: Optional[FlueExitType] = None
    replacement_timing: Optional[ReplacementTiming] = None
    postcode: Optional[str] = None
    address: Optional[str] = None
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    payment_status: Optional[PaymentStatus] = None
    payment_intent_id: Optional[str] = None
    payment_amount: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def contact_fields_not_cleared(self) -> "SubmissionUpdate":
        for field in ("first_name", "last_name", "email", "phone", "postcode", "address"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class SubmissionSchema(QualificationFields):
    """Stored submission"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    selected_product: Optional[SelectedProductSchema] = None
    finance_details: Optional[FinanceDetailsSchema] = None
    install_date: Optional[date] = None
    date_surcharge: float = 0.0
    payment_status: Optional[PaymentStatus] = None
    payment_intent_id: Optional[str] = None
    payment_amount: Optional[float] = None
    payment_date: Optional[datetime] = None
    submitted_at: datetime
    created_at: datetime
    updated_at: datetime


class SubmissionCreatedResponse(SuccessResponse):
    id: str


class SubmissionResponse(SuccessResponse):
    data: SubmissionSchema


class SubmissionListResponse(SuccessResponse):
    data: List[SubmissionSchema]


class ProductSelectionRequest(BaseModel):
    """Request body for POST /api/forms/{id}/product"""

    product_id: str = Field(..., min_length=1)


class FinanceSelectionRequest(BaseModel):
    """Request body for POST /api/forms/{id}/finance"""

    deposit_percentage: int = Field(0, ge=0, le=50)
    months: int = Field(..., gt=0)
    apr: float = Field(..., ge=0)


class BookingRequest(BaseModel):
    """Request body for POST /api/forms/{id}/booking"""

    install_date: date


class BookingResponse(SuccessResponse):
    install_date: date
    status: DateStatusValue
    surcharge: float
    total: Optional[float] = None
    formatted_total: Optional[str] = None


class CheckoutResponse(SuccessResponse):
    """Response for GET /api/forms/{id}/checkout"""

    submission_id: str
    selected_product: SelectedProductSchema
    install_date: Optional[date] = None
    base_price: float
    surcharge: float
    total: float
    formatted_total: str


# Products


def _validate_display_price(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        parse_price(value)
    except InvalidPriceError as e:
        raise ValueError('price must look like "£2,340"') from e
    return value


class ProductCreate(BaseModel):
    """Request body for POST /api/products/create"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: str = Field(..., min_length=1)
    original_price: Optional[str] = None
    rating: float = Field(..., ge=0, le=5)
    category: ProductCategory
    warranty: str = Field(..., min_length=1)
    features: List[str] = Field(default_factory=list)
    expert_opinion: str = Field(..., min_length=1)
    monthly_payment: Optional[str] = None
    zero_apr: Optional[str] = None
    suitable_bedrooms: List[str] = Field(default_factory=list)
    boiler_type: Optional[BoilerType] = None
    image_url: Optional[str] = None

    @field_validator("features", "suitable_bedrooms", mode="before")
    @classmethod
    def decode_list(cls, value):
        return parse_string_list(value)

    @field_validator("price", "original_price")
    @classmethod
    def check_price(cls, value):
        return _validate_display_price(value)


class ProductUpdate(BaseModel):
    """Request body for PUT /api/products/{id}"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[str] = Field(None, min_length=1)
    original_price: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    category: Optional[ProductCategory] = None
    warranty: Optional[str] = Field(None, min_length=1)
    features: Optional[List[str]] = None
    expert_opinion: Optional[str] = Field(None, min_length=1)
    monthly_payment: Optional[str] = None
    zero_apr: Optional[str] = None
    suitable_bedrooms: Optional[List[str]] = None
    boiler_type: Optional[BoilerType] = None
    image_url: Optional[str] = None

    @field_validator("features", "suitable_bedrooms", mode="before")
    @classmethod
    def decode_list(cls, value):
        return parse_string_list(value)

    @field_validator("price", "original_price")
    @classmethod
    def check_price(cls, value):
        return _validate_display_price(value)

    @model_validator(mode="after")
    def required_fields_not_cleared(self) -> "ProductUpdate":
        for field in ("name", "brand", "description", "price", "rating", "category", "warranty", "expert_opinion"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ProductSchema(BaseModel):
    """Stored product"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    brand: str
    description: str
    price: str
    original_price: Optional[str] = None
    rating: float
    category: ProductCategory
    warranty: str
    features: List[str]
    expert_opinion: str
    monthly_payment: Optional[str] = None
    zero_apr: Optional[str] = None
    suitable_bedrooms: List[str]
    boiler_type: Optional[BoilerType] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductResponse(SuccessResponse):
    data: ProductSchema


class ProductListResponse(SuccessResponse):
    data: List[ProductSchema]


# Finance


class FinanceQuoteRequest(BaseModel):
    """Request body for POST /api/finance/quote"""

    price: float | str = Field(..., description='Cash price, as a number or display string like "£2,340"')
    deposit_percentage: int = Field(0, ge=0, le=50)
    months: int = Field(..., gt=0)
    apr: float = Field(..., ge=0)


class FinanceQuoteSchema(BaseModel):
    """Finance quote with unrounded figures and whole-pound display strings"""

    model_config = ConfigDict(from_attributes=True)

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
    monthly_payment_display: str
    total_payable_display: str


class FinanceQuoteResponse(SuccessResponse):
    data: FinanceQuoteSchema


class FinanceQuoteListResponse(SuccessResponse):
    data: List[FinanceQuoteSchema]


class PaymentOptionListResponse(SuccessResponse):
    data: List[PaymentOptionSchema]


# Booking


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarDaySchema(BaseModel):
    date: date
    day: int
    weekday: str
    status: DateStatusValue
    selectable: bool
    surcharge: float


class CalendarResponse(SuccessResponse):
    """Response for GET /api/booking/calendar"""

    year: int
    month: int
    month_name: str
    leading_blanks: int
    days: List[CalendarDaySchema]
    previous: MonthRef
    next: MonthRef


class BookingTotalRequest(BaseModel):
    """Request body for POST /api/booking/total"""

    base_price: float | str
    selected_date: Optional[date] = None


class BookingTotalResponse(SuccessResponse):
    base_price: float
    surcharge: float
    total: float
    formatted_total: str


# Payments


class CreatePaymentIntentRequest(BaseModel):
    """Request body for POST /api/payments/create-intent"""

    amount: Optional[float] = Field(None, description="Amount in pounds; derived from the submission when omitted")
    currency: str = "gbp"
    submission_id: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)


class CreatePaymentIntentResponse(SuccessResponse):
    client_secret: Optional[str]
    payment_intent_id: str
    amount: float


class ConfirmPaymentRequest(BaseModel):
    """Request body for POST /api/payments/confirm"""

    payment_intent_id: str = Field(..., pattern=r"^pi_[A-Za-z0-9_]+$")
    submission_id: Optional[str] = None


class PaymentIntentSummary(BaseModel):
    id: str
    status: str
    amount: float


class ConfirmPaymentResponse(SuccessResponse):
    payment_intent: PaymentIntentSummary
