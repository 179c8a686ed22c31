"""Unit tests for Invoice entity and its typed updates"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pydantic import ValidationError

from src.domain.invoice import (
    Invoice,
    InvoiceStatus,
    PaymentOutcomeUpdate,
    ProcessorEventUpdate,
)


class TestInvoice:

    def test_new_invoice_defaults_to_pending(self):
        invoice = Invoice(id="inv_1", reference="ref_1", email="a@b.com", amount=Decimal("500"))

        assert invoice.status == InvoiceStatus.PENDING
        assert invoice.currency == "KES"
        assert invoice.items == []
        assert invoice.metadata == {}
        assert invoice.paystack_data is None
        assert invoice.last_event is None

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError):
            Invoice(id="inv_1", reference="ref_1", email="a@b.com", amount=amount)

    def test_serializes_with_camel_case_keys(self, sample_invoice):
        data = sample_invoice.model_dump(mode="json", by_alias=True)

        assert set(data) >= {"paystackData", "lastEvent", "createdAt", "updatedAt"}
        assert data["status"] == "pending"
        assert Decimal(data["amount"]) == Decimal("500")
        assert data["createdAt"].startswith("2024-01-01T00:00:00")

    def test_loads_from_camel_case_record(self, sample_invoice):
        record = sample_invoice.model_dump(mode="json", by_alias=True)

        assert Invoice.model_validate(record) == sample_invoice


class TestInvoiceApply:

    def test_payment_outcome_sets_status_and_payload(self, sample_invoice):
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)
        update = PaymentOutcomeUpdate(status=InvoiceStatus.PAID, paystack_data={"reference": "ref_x"})

        updated = sample_invoice.apply(update, now)

        assert updated.status == InvoiceStatus.PAID
        assert updated.paystack_data == {"reference": "ref_x"}
        assert updated.last_event is None
        assert updated.updated_at == now
        assert updated.created_at == sample_invoice.created_at

    def test_processor_event_keeps_status(self, sample_invoice):
        update = ProcessorEventUpdate(last_event="transfer.success", paystack_data={"a": 1})

        updated = sample_invoice.apply(update)

        assert updated.status == InvoiceStatus.PENDING
        assert updated.last_event == "transfer.success"
        assert updated.paystack_data == {"a": 1}
        assert updated.updated_at > sample_invoice.updated_at

    def test_apply_does_not_touch_identity_or_amount(self, sample_invoice):
        updated = sample_invoice.apply(
            PaymentOutcomeUpdate(status=InvoiceStatus.FAILED, paystack_data={})
        )

        assert updated.id == sample_invoice.id
        assert updated.reference == sample_invoice.reference
        assert updated.amount == sample_invoice.amount
        assert updated.metadata == sample_invoice.metadata

    def test_apply_returns_a_copy(self, sample_invoice):
        updated = sample_invoice.apply(ProcessorEventUpdate(last_event="x", paystack_data={}))

        updated.metadata["campaign"] = "changed"

        assert sample_invoice.metadata == {"campaign": "weekly"}
        assert sample_invoice.last_event is None
