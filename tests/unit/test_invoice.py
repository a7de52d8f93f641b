"""Unit tests for invoice view models"""

import pytest
from dataclasses import replace
from datetime import date
from decimal import Decimal
from invoice_gateway.domain.exceptions import InvalidConfigurationError, InvalidDateError
from invoice_gateway.domain.invoice import (
    get_installment_progress,
    get_invoice_info,
    project_monthly_installments,
    summarize_current_cycle,
)
from invoice_gateway.domain.models import CreditCardCycle, Purchase


def test_invoice_info_after_due_day(december_purchase):
    """Purchase 2024-12-31 in 8x, seen on 2025-03-20: third installment"""
    info = get_invoice_info(10, date(2025, 3, 20), december_purchase)

    assert info.first_due_date == date(2025, 1, 10)
    assert info.current_installment == 3
    assert info.total_installments == 8
    assert info.paid_installments == [1, 2, 3]
    assert len(info.installment_details) == 8

    assert info.current_due_date == date(2025, 4, 10)
    assert info.next_due_date == date(2025, 5, 10)
    assert info.previous_due_date == date(2025, 3, 10)
    assert info.days_since_last_due_date == 10
    assert info.days_until_next_due_date == 21
    assert info.cycle_progress == pytest.approx(10 / 31 * 100)


def test_invoice_info_before_due_day(december_purchase):
    info = get_invoice_info(10, date(2025, 3, 5), december_purchase)

    assert info.current_installment == 2
    assert info.current_due_date == date(2025, 3, 10)
    assert info.previous_due_date == date(2025, 2, 10)
    assert info.days_since_last_due_date == 23
    assert info.days_until_next_due_date == 5


def test_invoice_info_future_purchase():
    purchase = Purchase(date=date(2025, 4, 15), amount=Decimal("1000"), installment_count=3)
    info = get_invoice_info(10, date(2025, 3, 20), purchase)

    assert info.current_installment == 0
    assert info.paid_installments == []


def test_invoice_info_all_installments_elapsed():
    purchase = Purchase(date=date(2024, 7, 15), amount=Decimal("1000"), installment_count=3)
    info = get_invoice_info(10, date(2025, 3, 20), purchase)

    assert info.current_installment == 3
    assert info.paid_installments == [1, 2, 3]


def test_invoice_info_without_purchase_has_only_cycle_fields():
    info = get_invoice_info(10, "2025-03-20")

    assert info.current_due_date == date(2025, 4, 10)
    assert info.first_due_date is None
    assert info.current_installment is None
    assert info.installment_details == []


def test_invoice_info_defaults_to_today():
    info = get_invoice_info(10, tz_name="UTC")
    assert 0.0 <= info.cycle_progress <= 100.0
    assert info.days_until_next_due_date > 0


def test_invoice_info_on_due_day_starts_new_cycle():
    info = get_invoice_info(10, date(2025, 3, 10))

    assert info.cycle_progress == 0.0
    assert info.days_since_last_due_date == 0
    assert info.current_due_date == date(2025, 4, 10)


def test_invoice_info_rejects_bad_input(december_purchase):
    with pytest.raises(InvalidConfigurationError):
        get_invoice_info(0, date(2025, 3, 20))
    with pytest.raises(InvalidDateError):
        get_invoice_info(10, "20/03/2025", december_purchase)
    with pytest.raises(InvalidConfigurationError):
        get_invoice_info(10, tz_name="Mars/Olympus_Mons")


def test_installment_progress_midway(december_purchase):
    progress = get_installment_progress(december_purchase, 10, date(2025, 3, 20))

    assert progress.paid_count == 3
    assert progress.total_installments == 8
    assert progress.current_installment == 4
    assert progress.progress == pytest.approx(37.5)
    assert progress.next_due_installment.due_date == date(2025, 4, 10)


def test_installment_progress_fully_paid():
    purchase = Purchase(date=date(2024, 7, 15), amount=Decimal("1000"), installment_count=3)
    progress = get_installment_progress(purchase, 10, date(2025, 3, 20))

    assert progress.paid_count == 3
    assert progress.current_installment == 3
    assert progress.progress == 100.0
    assert progress.next_due_installment is None


def test_installment_progress_respects_unpaid_override(december_purchase):
    purchase = replace(december_purchase, unpaid_installments=frozenset({2}))
    progress = get_installment_progress(purchase, 10, date(2025, 3, 20))

    assert progress.paid_count == 2
    assert progress.current_installment == 2


def test_cycle_summary_totals_purchases_billed_this_month():
    card = CreditCardCycle(closing_day=15, due_day=5, credit_limit=Decimal("5000.00"))
    purchases = [
        Purchase(date=date(2025, 2, 10), amount=Decimal("1000"), installment_count=4),
        Purchase(date=date(2025, 1, 20), amount=Decimal("300"), installment_count=1),
        Purchase(date=date(2025, 3, 18), amount=Decimal("900"), installment_count=3),  # billed in May
    ]

    summary = summarize_current_cycle(purchases, card, date(2025, 3, 20))

    assert summary.purchase_count == 2
    assert summary.current_total == Decimal("550")
    assert summary.available_credit == Decimal("4450.00")
    assert summary.billing_dates.closing_date == date(2025, 4, 15)


def test_cycle_summary_without_limit(card):
    summary = summarize_current_cycle([], replace(card, credit_limit=None), date(2025, 3, 20))

    assert summary.current_total == Decimal("0")
    assert summary.credit_limit is None
    assert summary.available_credit is None


def test_projection_sums_unpaid_installments(december_purchase):
    purchases = [
        december_purchase,
        Purchase(date=date(2025, 3, 15), amount=Decimal("1000"), installment_count=2),
    ]

    projection = project_monthly_installments(purchases, 10, date(2025, 3, 20), months_ahead=3)

    assert list(projection) == ["2025-03", "2025-04", "2025-05"]
    assert projection["2025-03"] == Decimal("0")
    assert projection["2025-04"] == Decimal("777.75")
    assert projection["2025-05"] == Decimal("777.75")


def test_projection_includes_overdue_unpaid_installment(december_purchase):
    purchase = replace(december_purchase, unpaid_installments=frozenset({3}))
    projection = project_monthly_installments([purchase], 10, date(2025, 3, 20), months_ahead=1)

    assert projection == {"2025-03": Decimal("277.75")}


def test_projection_rejects_non_positive_horizon(december_purchase):
    with pytest.raises(InvalidConfigurationError):
        project_monthly_installments([december_purchase], 10, date(2025, 3, 20), months_ahead=0)
