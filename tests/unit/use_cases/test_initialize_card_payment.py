"""Unit tests for InitializeCardPayment use case

Tests cover:
- Payload sent to Paystack (minor units, callback, channels, metadata)
- Invoice not found / already paid
- Missing secret key and Paystack failures
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.services.payment_gateway import MissingCredentialError, PaymentGatewayError
from src.app.use_cases.payments.dtos import CardPaymentCommandDTO
from src.app.use_cases.payments.initialize_card_payment import InitializeCardPayment
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def use_case(mock_invoice_repo, mock_gateway):
    return InitializeCardPayment(mock_invoice_repo, mock_gateway, app_url="http://localhost:4000/")


@pytest.mark.asyncio
class TestInitializeCardPaymentSuccess:

    async def test_sends_expected_payload(self, use_case, mock_invoice_repo, mock_gateway, sample_invoice):
        """
        Given: A pending KES 500 invoice
        When: A card payment is initialized
        Then: Paystack receives 50000 minor units with the invoice reference
        """
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=sample_invoice)

        # Act
        result = await use_case.execute(CardPaymentCommandDTO(invoice_id=sample_invoice.id))

        # Assert
        assert result.is_ok()
        assert result.value.invoice_id == sample_invoice.id
        assert result.value.reference == sample_invoice.reference
        assert result.value.paystack["status"] is True

        payload = mock_gateway.initialize_transaction.call_args.args[0]
        assert payload == {
            "email": "a@b.com",
            "amount": 50000,
            "currency": "KES",
            "reference": "ref_0123456789abcd",
            "metadata": {
                "invoiceId": "inv_0123456789ab",
                "description": "Lottery purchase",
                "campaign": "weekly",
            },
            "callback_url": "http://localhost:4000/api/payments/callback",
            "channels": ["card"],
        }

    async def test_custom_callback_path(self, use_case, mock_invoice_repo, mock_gateway, sample_invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=sample_invoice)

        await use_case.execute(
            CardPaymentCommandDTO(invoice_id=sample_invoice.id, callback_path="/thanks")
        )

        payload = mock_gateway.initialize_transaction.call_args.args[0]
        assert payload["callback_url"] == "http://localhost:4000/thanks"

    async def test_invoice_metadata_overrides_defaults(
        self, use_case, mock_invoice_repo, mock_gateway, sample_invoice
    ):
        invoice = sample_invoice.model_copy(update={"metadata": {"description": "custom"}})
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        await use_case.execute(CardPaymentCommandDTO(invoice_id=invoice.id))

        payload = mock_gateway.initialize_transaction.call_args.args[0]
        assert payload["metadata"]["description"] == "custom"

    async def test_failed_invoice_can_be_retried(self, use_case, mock_invoice_repo, sample_invoice):
        failed = sample_invoice.model_copy(update={"status": InvoiceStatus.FAILED})
        mock_invoice_repo.get_by_id = AsyncMock(return_value=failed)

        result = await use_case.execute(CardPaymentCommandDTO(invoice_id=failed.id))

        assert result.is_ok()

    async def test_amount_rounding(self, use_case, mock_invoice_repo, mock_gateway, sample_invoice):
        invoice = sample_invoice.model_copy(update={"amount": Decimal("99.995")})
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        await use_case.execute(CardPaymentCommandDTO(invoice_id=invoice.id))

        assert mock_gateway.initialize_transaction.call_args.args[0]["amount"] == 10000


@pytest.mark.asyncio
class TestInitializeCardPaymentErrors:

    async def test_invoice_not_found(self, use_case, mock_gateway):
        result = await use_case.execute(CardPaymentCommandDTO(invoice_id="inv_missing"))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_gateway.initialize_transaction.assert_not_called()

    async def test_invoice_already_paid(self, use_case, mock_invoice_repo, mock_gateway, sample_invoice):
        paid = sample_invoice.model_copy(update={"status": InvoiceStatus.PAID})
        mock_invoice_repo.get_by_id = AsyncMock(return_value=paid)

        result = await use_case.execute(CardPaymentCommandDTO(invoice_id=paid.id))

        assert result.error.code == "INVOICE_ALREADY_PAID"
        mock_gateway.initialize_transaction.assert_not_called()

    async def test_missing_secret_key(self, use_case, mock_invoice_repo, mock_gateway, sample_invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=sample_invoice)
        mock_gateway.initialize_transaction = AsyncMock(side_effect=MissingCredentialError("set it"))

        result = await use_case.execute(CardPaymentCommandDTO(invoice_id=sample_invoice.id))

        assert result.error.code == "PAYSTACK_SECRET_KEY_MISSING"
        assert result.error.message == "set it"

    async def test_paystack_error_keeps_status_and_body(
        self, use_case, mock_invoice_repo, mock_gateway, sample_invoice
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=sample_invoice)
        mock_gateway.initialize_transaction = AsyncMock(
            side_effect=PaymentGatewayError(
                "Paystack returned 401", status_code=401, body={"status": False, "message": "Invalid key"}
            )
        )

        result = await use_case.execute(CardPaymentCommandDTO(invoice_id=sample_invoice.id))

        assert result.error.code == "PAYSTACK_ERROR"
        assert result.error.details == {
            "status_code": 401,
            "response": {"status": False, "message": "Invalid key"},
        }
