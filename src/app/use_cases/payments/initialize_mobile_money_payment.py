"""InitializeMobileMoneyPayment Use Case

Charges an M-Pesa wallet through the Paystack charge API.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import (
    MissingCredentialError,
    PaymentGateway,
    PaymentGatewayError,
)
from src.domain.phone_number import normalize_msisdn
from .dtos import MobileMoneyPaymentCommandDTO, PaymentInitResponseDTO
from .helpers import build_base_payload, gateway_error, load_payable_invoice

logger = logging.getLogger(__name__)


class InitializeMobileMoneyPayment:
    """
    Use Case: Initialize a mobile money charge for an invoice

    Business Rules:
    1. A given phone must normalize to international format, checked first
    2. Invoice must exist and not be paid already
    3. An email is required (command email, else invoice email)
    4. mobile_money is added only when a phone is given without a charge_payload
    5. charge_payload fields override generated fields

    Flow:
    1. Normalize phone
    2. Load payable invoice
    3. Resolve email
    4. Build charge payload
    5. Charge with Paystack
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        payment_gateway: PaymentGateway,
        country_code: str = "254",
        provider: str = "mpesa",
    ):
        self.invoice_repo = invoice_repo
        self.payment_gateway = payment_gateway
        self.country_code = country_code
        self.provider = provider

    async def execute(self, command: MobileMoneyPaymentCommandDTO) -> Result[PaymentInitResponseDTO]:
        """
        Execute mobile money charge initialization

        Args:
            command: MobileMoneyPaymentCommandDTO

        Returns:
            Result[PaymentInitResponseDTO]: Success with Paystack response or error
        """
        # Step 1: Normalize phone before touching the store or Paystack
        phone = None
        if command.phone:
            try:
                phone = normalize_msisdn(command.phone, self.country_code)
            except ValueError as e:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message=str(e),
                        reason="Invalid phone number",
                    )
                )

        # Step 2: Load payable invoice
        loaded = await load_payable_invoice(self.invoice_repo, command.invoice_id)
        if loaded.is_err():
            return loaded
        invoice = loaded.value

        # Step 3: Resolve email
        email = command.email or invoice.email
        if not email:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="email is required for Paystack charge",
                    reason="Neither the request nor the invoice has an email",
                )
            )

        # Step 4: Build payload
        payload = build_base_payload(invoice, email)
        if phone and not command.charge_payload:
            payload["mobile_money"] = {"phone": phone, "provider": self.provider}
        if command.charge_payload:
            payload.update(command.charge_payload)

        # Step 5: Charge
        try:
            response = await self.payment_gateway.charge(payload)
        except (MissingCredentialError, PaymentGatewayError) as e:
            return Return.err(gateway_error(e))

        logger.info(f"Initialized mobile money charge for invoice {invoice.id} ({invoice.reference})")

        return Return.ok(
            PaymentInitResponseDTO(
                invoice_id=invoice.id,
                reference=invoice.reference,
                paystack=response,
            )
        )
