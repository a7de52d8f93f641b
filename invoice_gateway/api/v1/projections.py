"""POST /v1/projections/monthly - upcoming installment load per month"""

import logging
import time

from fastapi import APIRouter, HTTPException, Request

from invoice_gateway.api.dependencies import get_request_id, reject, resolve_reference_date, to_purchase
from invoice_gateway.api.v1.schemas import ProjectionRequest, ProjectionResponse
from invoice_gateway.config import settings
from invoice_gateway.domain.exceptions import ValidationError
from invoice_gateway.domain.installment_state import find_override_conflicts
from invoice_gateway.domain.invoice import project_monthly_installments
from invoice_gateway.infrastructure.observability.logging import log_computation
from invoice_gateway.infrastructure.observability.metrics import record_computation

router = APIRouter()


@router.post("/projections/monthly", response_model=ProjectionResponse)
def project_installments(request_body: ProjectionRequest, request: Request):
    """
    Sum of unpaid installments due in each of the coming months.

    Returns:
        YYYY-MM -> amount, starting at the reference month
    """
    start_time = time.time()
    request_id = get_request_id(request)
    months_ahead = settings.projection_months if request_body.months_ahead is None else request_body.months_ahead

    try:
        purchases = [to_purchase(p) for p in request_body.purchases]
        reference = resolve_reference_date(request_body.reference_date)
        months = project_monthly_installments(purchases, request_body.due_day, reference, months_ahead)
    except ValidationError as e:
        raise reject(e, request_id) from e
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error") from e

    conflicts = sum(len(find_override_conflicts(p)) for p in purchases)
    record_computation("projection", conflicts)
    log_computation(request_id, "projection", (time.time() - start_time) * 1000, months_ahead=months_ahead)

    return ProjectionResponse(reference_date=reference, months=months)
