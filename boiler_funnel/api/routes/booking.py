"""/api/booking - install calendar and date-conditional pricing"""

import calendar
from datetime import date
from fastapi import APIRouter, HTTPException, Query

from boiler_funnel.api.schemas import (
    BookingTotalRequest,
    BookingTotalResponse,
    CalendarDaySchema,
    CalendarResponse,
    MonthRef,
)
from boiler_funnel.domain.booking import (
    leading_blank_cells,
    month_days,
    next_month,
    prev_month,
    surcharge_for,
    total_price,
)
from boiler_funnel.domain.exceptions import InvalidPriceError
from boiler_funnel.domain.pricing import format_currency, parse_price

router = APIRouter()


@router.get("/calendar", response_model=CalendarResponse)
def get_calendar(
    year: int | None = Query(None, ge=1, le=9999),
    month: int | None = Query(None, ge=1, le=12),
):
    """Monday-Saturday grid for a month; defaults to the current month"""
    today = date.today()
    year = year or today.year
    month = month or today.month

    prev_year, prev_mon = prev_month(year, month)
    next_year, next_mon = next_month(year, month)

    return CalendarResponse(
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        leading_blanks=leading_blank_cells(year, month),
        days=[
            CalendarDaySchema(
                date=d.date,
                day=d.date.day,
                weekday=calendar.day_abbr[d.date.weekday()],
                status=d.status.value,
                selectable=d.selectable,
                surcharge=d.surcharge,
            )
            for d in month_days(year, month)
        ],
        previous=MonthRef(year=prev_year, month=prev_mon),
        next=MonthRef(year=next_year, month=next_mon),
    )


@router.post("/total", response_model=BookingTotalResponse)
def get_total_price(request_body: BookingTotalRequest):
    """Base price plus the surcharge of the selected date, if any"""
    try:
        base_price = parse_price(request_body.base_price)
    except InvalidPriceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    total = total_price(base_price, request_body.selected_date)
    return BookingTotalResponse(
        base_price=base_price,
        surcharge=surcharge_for(request_body.selected_date),
        total=total,
        formatted_total=format_currency(total),
    )
