"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# Dates travel as strings and are parsed by the domain, which accepts both
# plain dates and ISO-8601 datetimes
DATE_DESCRIPTION = "ISO-8601 date or datetime; the time of day is ignored"


class PurchaseSchema(BaseModel):
    """Stored credit purchase record"""

    date: str = Field(..., description=DATE_DESCRIPTION)
    amount: Decimal = Field(..., description="Total amount, split equally across installments")
    installment_count: int = Field(..., description="Number of monthly installments")
    paid_installments: List[int] = Field(default_factory=list)
    unpaid_installments: List[int] = Field(default_factory=list)


class CardSchema(BaseModel):
    """Stored credit card billing configuration"""

    closing_day: int = Field(..., ge=1, le=31)
    due_day: int = Field(..., ge=1, le=31)
    credit_limit: Optional[Decimal] = Field(None, gt=0)


class ScheduleRequest(BaseModel):
    """Request body for POST /v1/installments/schedule and /v1/installments/progress"""

    purchase: PurchaseSchema
    due_day: int = Field(..., ge=1, le=31)
    reference_date: Optional[str] = Field(None, description=DATE_DESCRIPTION)


class InvoiceRequest(BaseModel):
    """Request body for POST /v1/invoice"""

    due_day: int = Field(..., ge=1, le=31)
    reference_date: Optional[str] = Field(None, description=DATE_DESCRIPTION)
    purchase: Optional[PurchaseSchema] = None


class PurchaseCycleRequest(BaseModel):
    """Request body for POST /v1/billing/purchase-cycle"""

    purchase_date: str = Field(..., description=DATE_DESCRIPTION)
    installment_count: int = Field(1, description="Installments to lay out in billing months")
    card: CardSchema
    reference_date: Optional[str] = Field(None, description=DATE_DESCRIPTION)


class CycleSummaryRequest(BaseModel):
    """Request body for POST /v1/billing/summary"""

    card: CardSchema
    purchases: List[PurchaseSchema] = Field(default_factory=list)
    reference_date: Optional[str] = Field(None, description=DATE_DESCRIPTION)


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projections/monthly"""

    due_day: int = Field(..., ge=1, le=31)
    purchases: List[PurchaseSchema] = Field(default_factory=list)
    reference_date: Optional[str] = Field(None, description=DATE_DESCRIPTION)
    months_ahead: Optional[int] = Field(None, description="Defaults to the configured projection horizon")


class InstallmentSchema(BaseModel):
    """Single installment of a purchase"""

    installment_number: int
    due_date: date
    amount: Decimal
    is_paid: bool


class ScheduleResponse(BaseModel):
    """Response for POST /v1/installments/schedule"""

    first_due_date: date
    total_installments: int
    installments: List[InstallmentSchema]


class InvoiceInfoResponse(BaseModel):
    """Response for POST /v1/invoice"""

    current_due_date: date
    next_due_date: date
    previous_due_date: date
    cycle_progress: float
    days_since_last_due_date: int
    days_until_next_due_date: int
    first_due_date: Optional[date] = None
    current_installment: Optional[int] = None
    total_installments: Optional[int] = None
    paid_installments: List[int] = Field(default_factory=list)
    installment_details: List[InstallmentSchema] = Field(default_factory=list)


class InstallmentProgressResponse(BaseModel):
    """Response for POST /v1/installments/progress"""

    paid_count: int
    total_installments: int
    current_installment: int
    progress: float
    next_due_installment: Optional[InstallmentSchema] = None


class PeriodSchema(BaseModel):
    start: date
    end: date


class BillingDatesResponse(BaseModel):
    """Response for GET /v1/billing/dates"""

    closing_date: date
    due_date: date
    previous_closing_date: date
    current_period: PeriodSchema
    next_period: PeriodSchema
    cycle_progress: float


class BillingMonthSchema(BaseModel):
    month: int
    year: int
    month_name: str


class PurchaseCycleResponse(BaseModel):
    """Response for POST /v1/billing/purchase-cycle"""

    closing_date: date
    due_date: date
    billing_month: int
    billing_year: int
    billing_month_name: str
    in_current_cycle: bool
    billing_months: List[BillingMonthSchema]


class CycleSummaryResponse(BaseModel):
    """Response for POST /v1/billing/summary"""

    billing_dates: BillingDatesResponse
    current_total: Decimal
    purchase_count: int
    credit_limit: Optional[Decimal] = None
    available_credit: Optional[Decimal] = None


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projections/monthly"""

    reference_date: date
    months: Dict[str, Decimal]
