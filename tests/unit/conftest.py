import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository"""
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_reference = AsyncMock(return_value=None)
    repo.update_by_reference = AsyncMock(return_value=None)
    repo.generate_identifiers = AsyncMock(return_value=("inv_0123456789ab", "ref_0123456789abcd"))
    return repo


@pytest.fixture
def mock_gateway():
    """Mock payment gateway"""
    gateway = MagicMock()
    gateway.initialize_transaction = AsyncMock(
        return_value={"status": True, "data": {"authorization_url": "https://checkout.paystack.com/x"}}
    )
    gateway.verify_transaction = AsyncMock(return_value={"status": True, "data": {"status": "success"}})
    gateway.charge = AsyncMock(return_value={"status": True, "data": {"status": "pay_offline"}})
    gateway.verify_webhook_signature = MagicMock(return_value=True)
    return gateway


@pytest.fixture
def sample_invoice():
    """Pending invoice for KES 500"""
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Invoice(
        id="inv_0123456789ab",
        reference="ref_0123456789abcd",
        email="a@b.com",
        phone=None,
        amount=Decimal("500"),
        currency="KES",
        description="Lottery purchase",
        items=[],
        metadata={"campaign": "weekly"},
        status=InvoiceStatus.PENDING,
        created_at=created,
        updated_at=created,
    )
