"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from invoice_gateway.api.main import create_app
from invoice_gateway.domain.models import CreditCardCycle, Purchase


DUE_DAY = 10


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def december_purchase() -> Purchase:
    """2222.00 bought on the last day of 2024, split in 8"""
    return Purchase(
        date=date(2024, 12, 31),
        amount=Decimal("2222.00"),
        installment_count=8,
    )


@pytest.fixture
def card() -> CreditCardCycle:
    """Card closing on the 15th and due on the 5th of the following month"""
    return CreditCardCycle(closing_day=15, due_day=5, credit_limit=Decimal("5000.00"))


@pytest.fixture
def december_purchase_payload() -> dict:
    """JSON form of the december purchase as stored by the UI"""
    return {
        "date": "2024-12-31",
        "amount": "2222.00",
        "installment_count": 8,
    }
