"""Booking calendar availability and date-conditional pricing"""

import calendar
from datetime import date
from typing import List, Tuple

from boiler_funnel.domain.exceptions import DateNotSelectableError
from boiler_funnel.domain.models import BookingSelection, CalendarDay, DateStatus

SURCHARGE_AMOUNT = 85.0  # £85 flat on high-demand dates

# Day-of-month classification. Days 1-4 are too soon to schedule.
LAST_UNAVAILABLE_DAY = 4
FULL_DAYS = frozenset({5, 6, 25, 26})
SURCHARGE_DAYS = frozenset({13, 20, 27})

SUNDAY = calendar.SUNDAY


def get_date_status(day: int) -> DateStatus:
    """Classify a day of the month"""
    if day <= LAST_UNAVAILABLE_DAY:
        return DateStatus.UNAVAILABLE
    if day in FULL_DAYS:
        return DateStatus.FULL
    if day in SURCHARGE_DAYS:
        return DateStatus.SURCHARGE
    return DateStatus.AVAILABLE


def is_selectable(status: DateStatus) -> bool:
    return status in (DateStatus.AVAILABLE, DateStatus.SURCHARGE)


def surcharge_for(selected_date: date | None, surcharge: float = SURCHARGE_AMOUNT) -> float:
    """Surcharge carried by a selected date, 0 when nothing is selected"""
    if selected_date is None:
        return 0.0
    if get_date_status(selected_date.day) == DateStatus.SURCHARGE:
        return surcharge
    return 0.0


def total_price(base_price: float, selected_date: date | None, surcharge: float = SURCHARGE_AMOUNT) -> float:
    """Base price plus the selected date's surcharge, if any"""
    return base_price + surcharge_for(selected_date, surcharge)


def leading_blank_cells(year: int, month: int) -> int:
    """
    Empty cells before the 1st in a Monday-first, six-column (Mon-Sat) grid.

    Sundays are not rendered, so a month starting on Sunday starts the grid
    on the following Monday with no blanks.
    """
    first_weekday, _ = calendar.monthrange(year, month)
    return 0 if first_weekday == SUNDAY else first_weekday


def month_days(year: int, month: int) -> List[CalendarDay]:
    """Monday-Saturday days of a month with their availability"""
    _, days_in_month = calendar.monthrange(year, month)
    days = []
    for day in range(1, days_in_month + 1):
        current = date(year, month, day)
        if current.weekday() == SUNDAY:
            continue

        status = get_date_status(day)
        days.append(
            CalendarDay(
                date=current,
                status=status,
                selectable=is_selectable(status),
                surcharge=surcharge_for(current),
            )
        )
    return days


def prev_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) before the given one; January borrows from the year"""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) after the given one; December carries into the year"""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def confirm_selection(selected_date: date) -> BookingSelection:
    """
    Confirm an install date chosen from the calendar.

    Raises:
        DateNotSelectableError: For Sundays and unavailable or full days
    """
    if selected_date.weekday() == SUNDAY:
        raise DateNotSelectableError(f"{selected_date.isoformat()} is a Sunday")

    status = get_date_status(selected_date.day)
    if not is_selectable(status):
        raise DateNotSelectableError(f"{selected_date.isoformat()} is {status.value}")

    return BookingSelection(
        install_date=selected_date,
        status=status,
        surcharge=surcharge_for(selected_date),
    )
