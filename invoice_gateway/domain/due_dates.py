"""Due-date resolution for a fixed monthly due day"""

from datetime import date

from invoice_gateway.domain.validation import validate_day_of_month
from invoice_gateway.utils.date_utils import DateLike, add_months, clamp_day, to_date


def due_date_in_month(year: int, month: int, due_day: int) -> date:
    """Due date of a given month, clamped to the month's last day"""
    return clamp_day(year, month, due_day)


def _shift_due_date(due_date: date, due_day: int, months: int) -> date:
    shifted = add_months(due_date, months)
    return due_date_in_month(shifted.year, shifted.month, due_day)


def first_installment_due_date(purchase_date: DateLike, due_day: int) -> date:
    """
    Due date of the first installment of a purchase.

    A purchase made on or after this month's due date cannot be billed on it
    any more, so it rolls to next month's due date. A purchase made exactly on
    the due day therefore lands on the following month.

    Example (due_day=10):
        2024-12-05 -> 2024-12-10
        2024-12-10 -> 2025-01-10
        2024-12-31 -> 2025-01-10
    """
    validate_day_of_month(due_day, "due_day")
    purchased_on = to_date(purchase_date)

    this_month = due_date_in_month(purchased_on.year, purchased_on.month, due_day)
    if purchased_on >= this_month:
        return _shift_due_date(this_month, due_day, 1)
    return this_month


def current_cycle_due_date(reference_date: DateLike, due_day: int) -> date:
    """Upcoming due date: this month's if not reached yet, otherwise next month's"""
    validate_day_of_month(due_day, "due_day")
    reference = to_date(reference_date)

    this_month = due_date_in_month(reference.year, reference.month, due_day)
    if reference >= this_month:
        return _shift_due_date(this_month, due_day, 1)
    return this_month


def previous_cycle_due_date(reference_date: DateLike, due_day: int) -> date:
    """Most recent due date on or before the reference date"""
    return _shift_due_date(current_cycle_due_date(reference_date, due_day), due_day, -1)


def next_cycle_due_date(reference_date: DateLike, due_day: int) -> date:
    """Due date one cycle after the upcoming one"""
    return _shift_due_date(current_cycle_due_date(reference_date, due_day), due_day, 1)


def nth_due_date(first_due_date: date, due_day: int, offset: int) -> date:
    """first_due_date moved offset cycles, re-clamped against due_day"""
    return _shift_due_date(first_due_date, due_day, offset)
