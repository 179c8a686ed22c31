"""VerifyPayment Use Case

Asks Paystack for the current state of a transaction.
"""

from libs.result import Result, Return
from src.app.services.payment_gateway import (
    MissingCredentialError,
    PaymentGateway,
    PaymentGatewayError,
)
from .dtos import VerifyPaymentResponseDTO
from .helpers import gateway_error


class VerifyPayment:
    """Use Case: Verify a transaction by reference (read-only, no invoice update)"""

    def __init__(self, payment_gateway: PaymentGateway):
        self.payment_gateway = payment_gateway

    async def execute(self, reference: str) -> Result[VerifyPaymentResponseDTO]:
        try:
            response = await self.payment_gateway.verify_transaction(reference)
        except (MissingCredentialError, PaymentGatewayError) as e:
            return Return.err(gateway_error(e))

        return Return.ok(VerifyPaymentResponseDTO(reference=reference, paystack=response))
