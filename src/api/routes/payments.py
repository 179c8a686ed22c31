"""Payment API Routes

FastAPI routes for starting and verifying Paystack payments.
"""

from fastapi import APIRouter, Depends, status

from libs.result import Error
from src.api.schemas.payment_request import (
    CardPaymentRequestSchema,
    MobileMoneyPaymentRequestSchema,
)
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.payments.dtos import (
    CardPaymentCommandDTO,
    MobileMoneyPaymentCommandDTO,
    PaymentInitResponseDTO,
    VerifyPaymentResponseDTO,
)
from src.app.use_cases.payments.initialize_card_payment import InitializeCardPayment
from src.app.use_cases.payments.initialize_mobile_money_payment import InitializeMobileMoneyPayment
from src.app.use_cases.payments.verify_payment import VerifyPayment
from src.depends import get_config, get_invoice_repository, get_payment_gateway
from src.api.error import ClientError

router = APIRouter(prefix="/payments", tags=["Payments"])

ERROR_RESPONSES = {
    400: {
        "description": "Validation error or invoice already paid",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_ALREADY_PAID",
                        "message": "Invoice already paid"
                    }
                }
            }
        }
    },
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice inv_3f9a0c1b2d4e not found"
                    }
                }
            }
        }
    },
    500: {
        "description": "Paystack secret key missing or Paystack unreachable",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "PAYSTACK_SECRET_KEY_MISSING",
                        "message": "Missing or invalid PAYSTACK_SECRET_KEY. ..."
                    }
                }
            }
        }
    }
}


def raise_client_error(error: Error):
    if error.code == "INVOICE_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "PAYSTACK_SECRET_KEY_MISSING":
        raise ClientError(error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    if error.code == "PAYSTACK_ERROR":
        details = error.details or {}
        upstream_status = details.get("status_code") or status.HTTP_500_INTERNAL_SERVER_ERROR
        raise ClientError(
            error.model_copy(update={"details": details.get("response")}),
            status_code=upstream_status,
        )
    raise ClientError(error)


@router.post(
    "/card",
    response_model=PaymentInitResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def initialize_card_payment(
    request: CardPaymentRequestSchema,
    invoice_repo: InvoiceRepository = Depends(get_invoice_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
    config=Depends(get_config),
):
    """
    Start a Paystack card checkout for an invoice.

    **Returns:**
    - 200: `{invoiceId, reference, paystack}` with the authorization URL
    - 400: invoiceId missing or invoice already paid
    - 404: Invoice not found
    - 500 / Paystack status: Paystack failure
    """
    command = CardPaymentCommandDTO(
        invoice_id=request.invoice_id,
        callback_path=request.callback_path,
    )

    use_case = InitializeCardPayment(invoice_repo, payment_gateway, app_url=config.APP_URL)
    result = await use_case.execute(command)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/mpesa",
    response_model=PaymentInitResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def initialize_mpesa_payment(
    request: MobileMoneyPaymentRequestSchema,
    invoice_repo: InvoiceRepository = Depends(get_invoice_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
    config=Depends(get_config),
):
    """
    Charge an M-Pesa wallet for an invoice through the Paystack charge API.

    **Returns:**
    - 200: `{invoiceId, reference, paystack}`
    - 400: invoiceId missing, invalid phone, missing email or invoice already paid
    - 404: Invoice not found
    - 500 / Paystack status: Paystack failure
    """
    command = MobileMoneyPaymentCommandDTO(
        invoice_id=request.invoice_id,
        phone=request.phone,
        email=request.email,
        charge_payload=request.charge_payload,
    )

    use_case = InitializeMobileMoneyPayment(
        invoice_repo,
        payment_gateway,
        country_code=config.MSISDN_COUNTRY_CODE,
        provider=config.MOBILE_MONEY_PROVIDER,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/verify/{reference}",
    response_model=VerifyPaymentResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def verify_payment(
    reference: str,
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Look up a transaction on Paystack by reference."""
    result = await VerifyPayment(payment_gateway).execute(reference)

    if result.is_err():
        raise_client_error(result.error)

    return result.value
