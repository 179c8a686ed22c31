"""Shared steps of the payment initialization use cases"""

from typing import Any, Dict
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import MissingCredentialError, PaymentGatewayError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import to_minor_units


async def load_payable_invoice(invoice_repo: InvoiceRepository, invoice_id: str) -> Result[Invoice]:
    """Fetch an invoice that exists and is not paid yet"""
    invoice = await invoice_repo.get_by_id(invoice_id)

    if not invoice:
        return Return.err(
            Error(
                code="INVOICE_NOT_FOUND",
                message=f"Invoice {invoice_id} not found",
                reason="Invoice does not exist",
            )
        )

    if invoice.status == InvoiceStatus.PAID:
        return Return.err(
            Error(
                code="INVOICE_ALREADY_PAID",
                message="Invoice already paid",
                reason=f"Invoice {invoice_id} has status paid",
            )
        )

    return Return.ok(invoice)


def build_base_payload(invoice: Invoice, email: str) -> Dict[str, Any]:
    """Paystack payload fields common to card and mobile money payments"""
    return {
        "email": email,
        "amount": to_minor_units(invoice.amount),
        "currency": invoice.currency,
        "reference": invoice.reference,
        "metadata": {
            "invoiceId": invoice.id,
            "description": invoice.description,
            **invoice.metadata,
        },
    }


def gateway_error(error: Exception) -> Error:
    """Translate a gateway exception into a use case error"""
    if isinstance(error, MissingCredentialError):
        return Error(
            code=MissingCredentialError.code,
            message=str(error),
            reason="Paystack secret key is not configured",
        )
    if isinstance(error, PaymentGatewayError):
        return Error(
            code="PAYSTACK_ERROR",
            message=str(error),
            reason="Paystack request failed",
            details={"status_code": error.status_code, "response": error.body},
        )
    return Error(
        code="PAYSTACK_ERROR",
        message="Paystack error",
        reason=str(error),
    )
