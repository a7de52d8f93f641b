"""Boundary checks that turn raw records into domain models"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from invoice_gateway.domain.exceptions import InvalidConfigurationError, InvalidDateError
from invoice_gateway.domain.models import CreditCardCycle, Purchase
from invoice_gateway.utils.date_utils import DateLike, to_date


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_day_of_month(value: int, name: str = "day") -> int:
    """Accept a day-of-month setting in 1..31"""
    if not _is_int(value) or not 1 <= value <= 31:
        raise InvalidConfigurationError(f"{name} must be an integer between 1 and 31, got {value!r}")
    return value


def validate_installment_count(value: int) -> int:
    if not _is_int(value) or value < 1:
        raise InvalidConfigurationError(f"installment_count must be a positive integer, got {value!r}")
    return value


def to_amount(value, name: str = "amount") -> Decimal:
    """
    Convert a monetary value to Decimal.

    Floats go through str() so 2222.0 becomes Decimal('2222.0'), not its
    binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be numeric, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidConfigurationError(f"{name} must be numeric, got {value!r}") from e

    if not amount.is_finite():
        raise InvalidConfigurationError(f"{name} must be finite, got {value!r}")
    if amount < 0:
        raise InvalidConfigurationError(f"{name} must not be negative, got {value!r}")
    return amount


def _installment_numbers(values: Optional[Iterable[int]], name: str) -> frozenset:
    numbers = frozenset(values or ())
    for number in numbers:
        if not _is_int(number) or number < 1:
            raise InvalidConfigurationError(f"{name} must hold 1-based installment numbers, got {number!r}")
    return numbers


def make_purchase(
    purchase_date: DateLike,
    amount,
    installment_count: int,
    paid_installments: Optional[Iterable[int]] = None,
    unpaid_installments: Optional[Iterable[int]] = None,
) -> Purchase:
    """Validate a stored purchase record and build a Purchase"""
    return Purchase(
        date=to_date(purchase_date),
        amount=to_amount(amount),
        installment_count=validate_installment_count(installment_count),
        paid_installments=_installment_numbers(paid_installments, "paid_installments"),
        unpaid_installments=_installment_numbers(unpaid_installments, "unpaid_installments"),
    )


def make_card(closing_day: int, due_day: int, credit_limit=None) -> CreditCardCycle:
    """Validate a stored card record and build a CreditCardCycle"""
    limit = None
    if credit_limit is not None:
        limit = to_amount(credit_limit, "credit_limit")
        if limit == 0:
            raise InvalidConfigurationError("credit_limit must be positive when set")

    return CreditCardCycle(
        closing_day=validate_day_of_month(closing_day, "closing_day"),
        due_day=validate_day_of_month(due_day, "due_day"),
        credit_limit=limit,
    )


def validate_purchase(purchase: Purchase) -> Purchase:
    """Re-check a Purchase built without make_purchase"""
    if not isinstance(purchase.date, date) or isinstance(purchase.date, datetime):
        raise InvalidDateError(f"purchase date must be a calendar date, got {purchase.date!r}")
    validate_installment_count(purchase.installment_count)
    to_amount(purchase.amount)
    _installment_numbers(purchase.paid_installments, "paid_installments")
    _installment_numbers(purchase.unpaid_installments, "unpaid_installments")
    return purchase
