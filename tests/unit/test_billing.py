"""Unit tests for credit card statement cycles"""

import pytest
from datetime import date
from invoice_gateway.domain.billing import (
    calculate_billing_dates,
    get_billing_cycle_for_purchase,
    get_installment_billing_months,
    is_in_current_billing_cycle,
)
from invoice_gateway.domain.exceptions import InvalidConfigurationError
from invoice_gateway.domain.models import Period


def test_billing_dates_after_closing_day_roll_to_next_month():
    """Closing 15 / due 5: on 2025-03-20 the open statement closes on April 15"""
    dates = calculate_billing_dates(15, 5, date(2025, 3, 20))

    assert dates.closing_date == date(2025, 4, 15)
    assert dates.due_date == date(2025, 5, 5)  # due day before closing day -> following month
    assert dates.previous_closing_date == date(2025, 3, 15)
    assert dates.current_period == Period(start=date(2025, 3, 16), end=date(2025, 4, 15))
    assert dates.next_period == Period(start=date(2025, 4, 16), end=date(2025, 5, 15))
    assert dates.cycle_progress == pytest.approx(5 / 31 * 100)


def test_billing_dates_before_closing_day():
    dates = calculate_billing_dates(15, 5, date(2025, 3, 10))

    assert dates.closing_date == date(2025, 3, 15)
    assert dates.due_date == date(2025, 4, 5)
    assert dates.previous_closing_date == date(2025, 2, 15)
    assert dates.cycle_progress == pytest.approx(23 / 28 * 100)


def test_billing_dates_on_closing_day_complete_the_cycle():
    dates = calculate_billing_dates(15, 5, date(2025, 3, 15))

    assert dates.closing_date == date(2025, 3, 15)
    assert dates.cycle_progress == 100.0


def test_due_day_after_closing_day_stays_in_closing_month():
    dates = calculate_billing_dates(5, 15, date(2025, 3, 1))

    assert dates.closing_date == date(2025, 3, 5)
    assert dates.due_date == date(2025, 3, 15)


def test_closing_day_31_clamps_in_february():
    dates = calculate_billing_dates(31, 10, date(2025, 2, 10))

    assert dates.closing_date == date(2025, 2, 28)
    assert dates.previous_closing_date == date(2025, 1, 31)
    assert dates.current_period == Period(start=date(2025, 2, 1), end=date(2025, 2, 28))
    assert dates.next_period == Period(start=date(2025, 3, 1), end=date(2025, 3, 31))
    assert dates.due_date == date(2025, 3, 10)


def test_due_day_clamped_in_due_month():
    dates = calculate_billing_dates(20, 31, date(2025, 4, 1))

    assert dates.closing_date == date(2025, 4, 20)
    assert dates.due_date == date(2025, 4, 30)


@pytest.mark.parametrize("closing_day", [1, 15, 28, 29, 30, 31])
def test_cycle_progress_bounded(closing_day):
    day = date(2024, 1, 1)
    while day < date(2025, 1, 1):
        dates = calculate_billing_dates(closing_day, 10, day)
        assert 0.0 <= dates.cycle_progress <= 100.0
        assert dates.current_period.contains(day)
        day = date.fromordinal(day.toordinal() + 1)


def test_billing_dates_reject_invalid_days():
    with pytest.raises(InvalidConfigurationError):
        calculate_billing_dates(0, 5, date(2025, 3, 1))
    with pytest.raises(InvalidConfigurationError):
        calculate_billing_dates(15, 32, date(2025, 3, 1))


def test_purchase_after_closing_billed_two_months_later():
    cycle = get_billing_cycle_for_purchase(date(2025, 3, 20), 15, 5)

    assert cycle.closing_date == date(2025, 4, 15)
    assert cycle.due_date == date(2025, 5, 5)
    assert (cycle.billing_month, cycle.billing_year) == (5, 2025)
    assert cycle.billing_month_name == "May 2025"


def test_purchase_before_closing_billed_next_month():
    cycle = get_billing_cycle_for_purchase("2025-03-10", 15, 5)

    assert cycle.closing_date == date(2025, 3, 15)
    assert cycle.billing_month_name == "April 2025"


def test_purchase_on_closing_day_stays_in_statement():
    cycle = get_billing_cycle_for_purchase(date(2025, 3, 15), 15, 5)
    assert cycle.closing_date == date(2025, 3, 15)


def test_installment_billing_months_cross_year():
    months = get_installment_billing_months(date(2025, 11, 20), 3, 15, 5)

    assert [(m.month, m.year) for m in months] == [(1, 2026), (2, 2026), (3, 2026)]
    assert months[0].month_name == "January 2026"


def test_installment_billing_months_rejects_zero_installments():
    with pytest.raises(InvalidConfigurationError):
        get_installment_billing_months(date(2025, 11, 20), 0, 15, 5)


def test_is_in_current_billing_cycle():
    reference = date(2025, 3, 20)

    assert is_in_current_billing_cycle(date(2025, 3, 16), 15, reference) is True
    assert is_in_current_billing_cycle(date(2025, 4, 15), 15, reference) is True
    assert is_in_current_billing_cycle(date(2025, 3, 15), 15, reference) is False
    assert is_in_current_billing_cycle("2025-04-16", 15, reference) is False
