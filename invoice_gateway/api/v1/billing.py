"""Card statement endpoints: open cycle, purchase classification and cycle totals"""

import logging
import time
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from invoice_gateway.api.dependencies import get_request_id, reject, resolve_reference_date, to_card, to_purchase
from invoice_gateway.api.v1.schemas import (
    BillingDatesResponse,
    CycleSummaryRequest,
    CycleSummaryResponse,
    PurchaseCycleRequest,
    PurchaseCycleResponse,
)
from invoice_gateway.domain.billing import (
    calculate_billing_dates,
    get_billing_cycle_for_purchase,
    get_installment_billing_months,
    is_in_current_billing_cycle,
)
from invoice_gateway.domain.exceptions import ValidationError
from invoice_gateway.domain.invoice import summarize_current_cycle
from invoice_gateway.infrastructure.observability.logging import log_computation
from invoice_gateway.infrastructure.observability.metrics import record_computation

router = APIRouter()


@router.get("/billing/dates", response_model=BillingDatesResponse)
def get_billing_dates(
    request: Request,
    closing_day: int = Query(..., ge=1, le=31, description="Day of month the statement closes"),
    due_day: int = Query(..., ge=1, le=31, description="Day of month the statement is due"),
    reference_date: Optional[str] = Query(None, description="ISO-8601 date, defaults to today"),
):
    """
    Statement open on the reference date.

    Returns:
        Closing and due dates, current/next periods and cycle progress
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        reference = resolve_reference_date(reference_date)
        billing_dates = calculate_billing_dates(closing_day, due_day, reference)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    record_computation("billing_dates")
    log_computation(request_id, "billing_dates", (time.time() - start_time) * 1000)

    return BillingDatesResponse(**asdict(billing_dates))


@router.post("/billing/purchase-cycle", response_model=PurchaseCycleResponse)
def classify_purchase(request_body: PurchaseCycleRequest, request: Request):
    """
    Statement a purchase is billed on and the billing month of each installment.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        card = to_card(request_body.card)
        reference = resolve_reference_date(request_body.reference_date)
        cycle = get_billing_cycle_for_purchase(request_body.purchase_date, card.closing_day, card.due_day)
        months = get_installment_billing_months(
            request_body.purchase_date,
            request_body.installment_count,
            card.closing_day,
            card.due_day,
        )
        in_current_cycle = is_in_current_billing_cycle(request_body.purchase_date, card.closing_day, reference)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    record_computation("purchase_cycle")
    log_computation(
        request_id,
        "purchase_cycle",
        (time.time() - start_time) * 1000,
        billing_month=cycle.billing_month_name,
    )

    return PurchaseCycleResponse(
        **asdict(cycle),
        in_current_cycle=in_current_cycle,
        billing_months=[asdict(month) for month in months],
    )


@router.post("/billing/summary", response_model=CycleSummaryResponse)
def summarize_cycle(request_body: CycleSummaryRequest, request: Request):
    """
    Open statement of a card with the purchases first billed in this month.

    Returns:
        Billing dates, billed total, credit limit and available credit
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        card = to_card(request_body.card)
        purchases = [to_purchase(p) for p in request_body.purchases]
        reference = resolve_reference_date(request_body.reference_date)
        summary = summarize_current_cycle(purchases, card, reference)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    record_computation("summary")
    log_computation(
        request_id,
        "summary",
        (time.time() - start_time) * 1000,
        purchase_count=summary.purchase_count,
    )

    return CycleSummaryResponse(**asdict(summary))
