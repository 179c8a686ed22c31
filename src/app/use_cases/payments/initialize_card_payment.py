"""InitializeCardPayment Use Case

Starts a hosted Paystack checkout restricted to the card channel.
"""

import logging
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import (
    MissingCredentialError,
    PaymentGateway,
    PaymentGatewayError,
)
from .dtos import CardPaymentCommandDTO, PaymentInitResponseDTO
from .helpers import build_base_payload, gateway_error, load_payable_invoice

logger = logging.getLogger(__name__)


class InitializeCardPayment:
    """
    Use Case: Initialize a card payment for an invoice

    Business Rules:
    1. Invoice must exist
    2. Invoice must not be paid already
    3. Amount is sent in minor units (x100, rounded)
    4. Paystack redirects back to APP_URL + callback_path

    Flow:
    1. Load payable invoice
    2. Build transaction payload
    3. Initialize transaction with Paystack
    4. Return Paystack response
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        payment_gateway: PaymentGateway,
        app_url: str,
    ):
        self.invoice_repo = invoice_repo
        self.payment_gateway = payment_gateway
        self.app_url = app_url.rstrip("/")

    async def execute(self, command: CardPaymentCommandDTO) -> Result[PaymentInitResponseDTO]:
        """
        Execute card payment initialization

        Args:
            command: CardPaymentCommandDTO with invoice_id and callback_path

        Returns:
            Result[PaymentInitResponseDTO]: Success with Paystack response or error
        """
        # Step 1: Load payable invoice
        loaded = await load_payable_invoice(self.invoice_repo, command.invoice_id)
        if loaded.is_err():
            return loaded
        invoice = loaded.value

        # Step 2: Build payload
        payload = build_base_payload(invoice, invoice.email)
        payload["callback_url"] = f"{self.app_url}{command.callback_path}"
        payload["channels"] = ["card"]

        # Step 3: Initialize transaction
        try:
            response = await self.payment_gateway.initialize_transaction(payload)
        except (MissingCredentialError, PaymentGatewayError) as e:
            return Return.err(gateway_error(e))

        logger.info(f"Initialized card payment for invoice {invoice.id} ({invoice.reference})")

        # Step 4: Build response
        return Return.ok(
            PaymentInitResponseDTO(
                invoice_id=invoice.id,
                reference=invoice.reference,
                paystack=response,
            )
        )
