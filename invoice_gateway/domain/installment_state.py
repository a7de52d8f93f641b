"""Paid/unpaid resolution for scheduled installments"""

import logging
from typing import List

from invoice_gateway.domain.models import Installment, Purchase
from invoice_gateway.utils.date_utils import DateLike, to_date


def find_override_conflicts(purchase: Purchase) -> List[int]:
    """Installment numbers marked both paid and unpaid"""
    return sorted(purchase.paid_installments & purchase.unpaid_installments)


def resolve_paid_status(installment: Installment, purchase: Purchase, reference_date: DateLike) -> bool:
    """
    Decide whether an installment counts as paid.

    Precedence:
    1. Listed in unpaid_installments -> not paid, even if also listed as paid
    2. Listed in paid_installments -> paid
    3. Otherwise paid only if its due date is before the reference date
       (the money has already left the account)
    """
    number = installment.installment_number

    if number in purchase.unpaid_installments:
        if number in purchase.paid_installments:
            logging.warning(
                "Installment marked both paid and unpaid, treating as unpaid",
                extra={"installment_number": number, "purchase_date": purchase.date.isoformat()},
            )
        return False

    if number in purchase.paid_installments:
        return True

    return installment.due_date < to_date(reference_date)
