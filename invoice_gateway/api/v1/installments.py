"""Installment endpoints: schedule, invoice status and progress of a purchase"""

import logging
import time
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from invoice_gateway.api.dependencies import get_request_id, reject, resolve_reference_date, to_purchase
from invoice_gateway.api.v1.schemas import (
    InstallmentProgressResponse,
    InvoiceInfoResponse,
    InvoiceRequest,
    ScheduleRequest,
    ScheduleResponse,
)
from invoice_gateway.domain.due_dates import first_installment_due_date
from invoice_gateway.domain.exceptions import ValidationError
from invoice_gateway.domain.installment_state import find_override_conflicts
from invoice_gateway.domain.installments import schedule
from invoice_gateway.domain.invoice import get_installment_progress, get_invoice_info
from invoice_gateway.infrastructure.observability.logging import log_computation
from invoice_gateway.infrastructure.observability.metrics import record_computation

router = APIRouter()


@router.post("/installments/schedule", response_model=ScheduleResponse)
def create_schedule(request_body: ScheduleRequest, request: Request):
    """
    Lay out every installment of a purchase with its paid flag.

    Flow:
    1. Validate the purchase record
    2. Resolve the reference date (today when omitted)
    3. Generate the schedule and resolve paid/unpaid state
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        purchase = to_purchase(request_body.purchase)
        reference = resolve_reference_date(request_body.reference_date)
        installments = schedule(purchase, request_body.due_day, reference)
        first_due = first_installment_due_date(purchase.date, request_body.due_day)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    record_computation("schedule", len(find_override_conflicts(purchase)))
    log_computation(
        request_id,
        "schedule",
        (time.time() - start_time) * 1000,
        installment_count=purchase.installment_count,
    )

    return ScheduleResponse(
        first_due_date=first_due,
        total_installments=len(installments),
        installments=[asdict(inst) for inst in installments],
    )


@router.post("/invoice", response_model=InvoiceInfoResponse)
def create_invoice_info(request_body: InvoiceRequest, request: Request):
    """
    Current cycle of a due day and, optionally, where a purchase stands in it.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        purchase = to_purchase(request_body.purchase) if request_body.purchase else None
        reference = resolve_reference_date(request_body.reference_date)
        info = get_invoice_info(request_body.due_day, reference, purchase)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    conflicts = len(find_override_conflicts(purchase)) if purchase else 0
    record_computation("invoice", conflicts)
    log_computation(
        request_id,
        "invoice",
        (time.time() - start_time) * 1000,
        current_installment=info.current_installment,
    )

    return InvoiceInfoResponse(**asdict(info))


@router.post("/installments/progress", response_model=InstallmentProgressResponse)
def create_installment_progress(request_body: ScheduleRequest, request: Request):
    """Paid count, progress percent and next installment to pay"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        purchase = to_purchase(request_body.purchase)
        reference = resolve_reference_date(request_body.reference_date)
        progress = get_installment_progress(purchase, request_body.due_day, reference)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    record_computation("progress", len(find_override_conflicts(purchase)))
    log_computation(request_id, "progress", (time.time() - start_time) * 1000, paid_count=progress.paid_count)

    return InstallmentProgressResponse(**asdict(progress))
