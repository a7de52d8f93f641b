"""Credit card statement cycles: closing date, due date and progress"""

from datetime import date, timedelta
from typing import List

from invoice_gateway.domain.models import BillingCycle, BillingDates, BillingMonth, Period
from invoice_gateway.domain.validation import validate_day_of_month, validate_installment_count
from invoice_gateway.utils.date_utils import DateLike, add_months, clamp_day, iter_months, month_name, shift_month, to_date


def _closing_date(year: int, month: int, closing_day: int) -> date:
    return clamp_day(year, month, closing_day)


def _active_closing_date(anchor: date, closing_day: int) -> date:
    """Closing date of the statement a day belongs to"""
    year, month = anchor.year, anchor.month
    if anchor.day > closing_day:
        year, month = shift_month(year, month, 1)
    return _closing_date(year, month, closing_day)


def _statement_due_date(closing_date: date, closing_day: int, due_day: int) -> date:
    """
    Due date of the statement closing on closing_date.

    A due day earlier in the month than the closing day can only be reached
    in the following month.
    """
    year, month = closing_date.year, closing_date.month
    if due_day < closing_day:
        year, month = shift_month(year, month, 1)
    return clamp_day(year, month, due_day)


def _shift_closing(closing_date: date, closing_day: int, months: int) -> date:
    shifted = add_months(closing_date, months)
    return _closing_date(shifted.year, shifted.month, closing_day)


def calculate_billing_dates(closing_day: int, due_day: int, reference_date: DateLike) -> BillingDates:
    """
    Statement that is open on the reference date.

    Rules:
    - The statement closes on closing_day (clamped to the month length);
      once the reference day is past closing_day it rolls to next month
    - current_period runs from the day after the previous closing to the
      active closing, next_period from the day after it to the next closing
    - cycle_progress is days since the previous closing over the cycle
      length, as a percentage clamped to [0, 100]
    """
    validate_day_of_month(closing_day, "closing_day")
    validate_day_of_month(due_day, "due_day")
    reference = to_date(reference_date)

    closing_date = _active_closing_date(reference, closing_day)
    previous_closing = _shift_closing(closing_date, closing_day, -1)
    next_closing = _shift_closing(closing_date, closing_day, 1)

    total_days = (closing_date - previous_closing).days
    elapsed_days = (reference - previous_closing).days
    cycle_progress = max(0.0, min(100.0, elapsed_days / total_days * 100))

    return BillingDates(
        closing_date=closing_date,
        due_date=_statement_due_date(closing_date, closing_day, due_day),
        previous_closing_date=previous_closing,
        current_period=Period(start=previous_closing + timedelta(days=1), end=closing_date),
        next_period=Period(start=closing_date + timedelta(days=1), end=next_closing),
        cycle_progress=cycle_progress,
    )


def get_billing_cycle_for_purchase(purchase_date: DateLike, closing_day: int, due_day: int) -> BillingCycle:
    """Statement (and billing month) a purchase's first installment is charged on"""
    validate_day_of_month(closing_day, "closing_day")
    validate_day_of_month(due_day, "due_day")
    purchased_on = to_date(purchase_date)

    closing_date = _active_closing_date(purchased_on, closing_day)
    due_date = _statement_due_date(closing_date, closing_day, due_day)

    return BillingCycle(
        closing_date=closing_date,
        due_date=due_date,
        billing_month=due_date.month,
        billing_year=due_date.year,
        billing_month_name=month_name(due_date.year, due_date.month),
    )


def get_installment_billing_months(
    purchase_date: DateLike,
    installment_count: int,
    closing_day: int,
    due_day: int,
) -> List[BillingMonth]:
    """Billing month of every installment, starting at the purchase's statement"""
    validate_installment_count(installment_count)
    cycle = get_billing_cycle_for_purchase(purchase_date, closing_day, due_day)

    return [
        BillingMonth(month=month, year=year, month_name=month_name(year, month))
        for year, month in iter_months(cycle.billing_year, cycle.billing_month, installment_count)
    ]


def is_in_current_billing_cycle(purchase_date: DateLike, closing_day: int, reference_date: DateLike) -> bool:
    """Whether a purchase falls in the statement open on the reference date"""
    # Due day does not move the period boundaries
    billing_dates = calculate_billing_dates(closing_day, 1, reference_date)
    return billing_dates.current_period.contains(to_date(purchase_date))
