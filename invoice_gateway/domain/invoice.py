"""Invoice view models: where a purchase stands as of a reference date"""

from decimal import Decimal
from typing import Dict, Iterable, Optional

from invoice_gateway.domain.billing import calculate_billing_dates, get_billing_cycle_for_purchase
from invoice_gateway.domain.due_dates import (
    current_cycle_due_date,
    first_installment_due_date,
    next_cycle_due_date,
    previous_cycle_due_date,
)
from invoice_gateway.domain.exceptions import InvalidConfigurationError
from invoice_gateway.domain.installments import current_installment_number, schedule
from invoice_gateway.domain.models import CreditCardCycle, CycleSummary, InstallmentProgress, InvoiceInfo, Purchase
from invoice_gateway.domain.validation import validate_day_of_month, validate_purchase
from invoice_gateway.utils.date_utils import DateLike, iter_months, month_key, to_date, today


def get_invoice_info(
    due_day: int,
    reference_date: Optional[DateLike] = None,
    purchase: Optional[Purchase] = None,
    tz_name: str = "UTC",
) -> InvoiceInfo:
    """
    Cycle metrics for a due day, and installment metrics for a purchase.

    Without a reference_date the current date in tz_name is used; pass one
    explicitly for reproducible results.

    Example (due_day=10, purchase 2024-12-31 in 8x):
        reference 2025-03-20 -> current_installment 3, next due 2025-04-10
        reference 2025-03-05 -> current_installment 2, next due 2025-03-10
    """
    validate_day_of_month(due_day, "due_day")
    reference = to_date(reference_date) if reference_date is not None else today(tz_name)

    current_due = current_cycle_due_date(reference, due_day)
    previous_due = previous_cycle_due_date(reference, due_day)

    cycle_days = (current_due - previous_due).days
    days_since_last = (reference - previous_due).days
    cycle_progress = max(0.0, min(100.0, days_since_last / cycle_days * 100))

    info = InvoiceInfo(
        current_due_date=current_due,
        next_due_date=next_cycle_due_date(reference, due_day),
        previous_due_date=previous_due,
        cycle_progress=cycle_progress,
        days_since_last_due_date=days_since_last,
        days_until_next_due_date=(current_due - reference).days,
    )

    if purchase is None:
        return info

    installments = schedule(purchase, due_day, reference)
    info.first_due_date = first_installment_due_date(purchase.date, due_day)
    info.current_installment = current_installment_number(purchase, due_day, reference)
    info.total_installments = purchase.installment_count
    info.paid_installments = [inst.installment_number for inst in installments if inst.is_paid]
    info.installment_details = installments
    return info


def get_installment_progress(purchase: Purchase, due_day: int, reference_date: DateLike) -> InstallmentProgress:
    """Paid count and next installment to pay, for progress bars"""
    installments = schedule(purchase, due_day, reference_date)
    paid = [inst for inst in installments if inst.is_paid]
    next_unpaid = next((inst for inst in installments if not inst.is_paid), None)

    total = purchase.installment_count
    return InstallmentProgress(
        paid_count=len(paid),
        total_installments=total,
        current_installment=next_unpaid.installment_number if next_unpaid else total,
        progress=min(100.0, len(paid) / total * 100),
        next_due_installment=next_unpaid,
    )


def summarize_current_cycle(
    purchases: Iterable[Purchase],
    card: CreditCardCycle,
    reference_date: DateLike,
) -> CycleSummary:
    """
    Open statement of a card plus what is billed on it.

    A purchase counts when its first installment is billed in the reference
    date's month; it contributes one installment (amount / count).
    """
    reference = to_date(reference_date)
    billing_dates = calculate_billing_dates(card.closing_day, card.due_day, reference)

    total = Decimal("0")
    count = 0
    for purchase in purchases:
        validate_purchase(purchase)
        cycle = get_billing_cycle_for_purchase(purchase.date, card.closing_day, card.due_day)
        if (cycle.billing_year, cycle.billing_month) == (reference.year, reference.month):
            total += purchase.amount / purchase.installment_count
            count += 1

    available = card.credit_limit - total if card.credit_limit is not None else None
    return CycleSummary(
        billing_dates=billing_dates,
        current_total=total,
        purchase_count=count,
        credit_limit=card.credit_limit,
        available_credit=available,
    )


def project_monthly_installments(
    purchases: Iterable[Purchase],
    due_day: int,
    reference_date: DateLike,
    months_ahead: int = 12,
) -> Dict[str, Decimal]:
    """
    Unpaid installment amounts per month, from the reference month onwards.

    Returns an ordered YYYY-MM -> amount map covering exactly months_ahead
    months, zero-filled.
    """
    if isinstance(months_ahead, bool) or not isinstance(months_ahead, int) or months_ahead < 1:
        raise InvalidConfigurationError(f"months_ahead must be a positive integer, got {months_ahead!r}")
    reference = to_date(reference_date)

    projection = {
        f"{year:04d}-{month:02d}": Decimal("0")
        for year, month in iter_months(reference.year, reference.month, months_ahead)
    }
    for purchase in purchases:
        for inst in schedule(purchase, due_day, reference):
            key = month_key(inst.due_date)
            if not inst.is_paid and key in projection:
                projection[key] += inst.amount
    return projection
