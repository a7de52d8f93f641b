"""Domain models - pure Python dataclasses representing billing entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import FrozenSet, List, Optional


@dataclass(frozen=True)
class Purchase:
    """Credit purchase split into equal monthly installments"""

    date: date
    amount: Decimal
    installment_count: int
    paid_installments: FrozenSet[int] = frozenset()
    unpaid_installments: FrozenSet[int] = frozenset()  # explicit "not paid" overrides


@dataclass(frozen=True)
class CreditCardCycle:
    """Card billing configuration"""

    closing_day: int
    due_day: int
    credit_limit: Optional[Decimal] = None


@dataclass(frozen=True)
class Installment:
    """Single monthly share of a purchase"""

    installment_number: int
    due_date: date
    amount: Decimal
    is_paid: bool = False


@dataclass(frozen=True)
class Period:
    """Inclusive date range"""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class BillingDates:
    """Active statement of a card as seen from a reference date"""

    closing_date: date
    due_date: date
    previous_closing_date: date
    current_period: Period
    next_period: Period
    cycle_progress: float


@dataclass(frozen=True)
class BillingCycle:
    """Statement a purchase's first installment is billed on"""

    closing_date: date
    due_date: date
    billing_month: int  # 1-12
    billing_year: int
    billing_month_name: str


@dataclass(frozen=True)
class BillingMonth:
    month: int
    year: int
    month_name: str


@dataclass
class InvoiceInfo:
    """Cycle metrics, plus purchase metrics when a purchase was given"""

    current_due_date: date
    next_due_date: date
    previous_due_date: date
    cycle_progress: float
    days_since_last_due_date: int
    days_until_next_due_date: int
    first_due_date: Optional[date] = None
    current_installment: Optional[int] = None
    total_installments: Optional[int] = None
    paid_installments: List[int] = field(default_factory=list)
    installment_details: List[Installment] = field(default_factory=list)


@dataclass
class InstallmentProgress:
    paid_count: int
    total_installments: int
    current_installment: int
    progress: float
    next_due_installment: Optional[Installment] = None


@dataclass
class CycleSummary:
    """Current statement of a card with the purchases billed on it"""

    billing_dates: BillingDates
    current_total: Decimal
    purchase_count: int
    credit_limit: Optional[Decimal] = None
    available_credit: Optional[Decimal] = None
