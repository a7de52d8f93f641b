"""Monthly installment schedule generation for credit purchases"""

from dataclasses import replace
from datetime import date
from typing import Iterator, List, Optional

from invoice_gateway.domain.due_dates import first_installment_due_date, nth_due_date
from invoice_gateway.domain.installment_state import resolve_paid_status
from invoice_gateway.domain.models import Installment, Purchase
from invoice_gateway.domain.validation import validate_day_of_month, validate_installment_count, validate_purchase
from invoice_gateway.utils.date_utils import DateLike, to_date


def iter_due_dates(first_due_date: date, due_day: int, count: int) -> Iterator[date]:
    """Lazily yield count monthly due dates starting at first_due_date"""
    for offset in range(count):
        yield nth_due_date(first_due_date, due_day, offset)


def schedule(purchase: Purchase, due_day: int, reference_date: Optional[DateLike] = None) -> List[Installment]:
    """
    Split a purchase into equal monthly installments.

    Requirements:
    - Exactly purchase.installment_count installments, numbered from 1
    - Due dates one calendar month apart starting at the first installment
      due date, always on due_day (clamped in short months)
    - Flat split: every installment is amount / installment_count, no
      remainder correction on the last one

    The schedule itself never depends on the clock. Paid flags are resolved
    only when a reference_date is given; otherwise every installment is
    returned unpaid.

    Example (due_day=10):
        2024-12-31, 2222.00 in 8x -> 2025-01-10 .. 2025-08-10, 277.75 each
    """
    validate_purchase(purchase)
    validate_day_of_month(due_day, "due_day")

    first_due = first_installment_due_date(purchase.date, due_day)
    installment_amount = purchase.amount / purchase.installment_count

    installments = []
    for index, due_date in enumerate(iter_due_dates(first_due, due_day, purchase.installment_count)):
        installments.append(
            Installment(
                installment_number=index + 1,
                due_date=due_date,
                amount=installment_amount,
            )
        )

    if reference_date is None:
        return installments

    return [
        replace(inst, is_paid=resolve_paid_status(inst, purchase, reference_date))
        for inst in installments
    ]


def current_installment_number(purchase: Purchase, due_day: int, reference_date: DateLike) -> int:
    """
    Installment number that is active on the reference date.

    0 for a purchase made after the reference date. Otherwise the number of
    due dates already reached (a due date on the reference day counts),
    never below 1 and never above the installment count.
    """
    validate_installment_count(purchase.installment_count)
    reference = to_date(reference_date)

    if purchase.date > reference:
        return 0

    first_due = first_installment_due_date(purchase.date, due_day)
    reached = sum(
        1 for due_date in iter_due_dates(first_due, due_day, purchase.installment_count)
        if due_date <= reference
    )
    return min(max(1, reached), purchase.installment_count)
