"""Dependency injection and shared helpers for FastAPI endpoints"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException, Request

from invoice_gateway.api.v1.schemas import CardSchema, PurchaseSchema
from invoice_gateway.config import settings
from invoice_gateway.domain.exceptions import ValidationError
from invoice_gateway.domain.models import CreditCardCycle, Purchase
from invoice_gateway.domain.validation import make_card, make_purchase
from invoice_gateway.infrastructure.observability.metrics import record_validation_failure
from invoice_gateway.utils.date_utils import to_date, today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def resolve_reference_date(value: Optional[str]) -> date:
    """Explicit reference date, or today in the configured time zone"""
    if value is None:
        return today(settings.timezone)
    return to_date(value)


def to_purchase(schema: PurchaseSchema) -> Purchase:
    return make_purchase(
        schema.date,
        schema.amount,
        schema.installment_count,
        paid_installments=schema.paid_installments,
        unpaid_installments=schema.unpaid_installments,
    )


def to_card(schema: CardSchema) -> CreditCardCycle:
    return make_card(schema.closing_day, schema.due_day, schema.credit_limit)


def reject(error: ValidationError, request_id: str) -> HTTPException:
    """Record a domain validation failure and build the 422 response"""
    record_validation_failure(error)
    logging.warning(f"Rejected input: {error}", extra={"request_id": request_id, "kind": error.kind})
    return HTTPException(status_code=422, detail=str(error))
