"""Webhook API Routes

Paystack posts payment events here. The body is read raw so the signature
can be checked over the exact bytes received.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.payments.process_webhook import ProcessPaystackWebhook
from src.depends import get_invoice_repository, get_payment_gateway

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

SIGNATURE_HEADER = "x-paystack-signature"


@router.post("/paystack", response_class=PlainTextResponse)
async def paystack_webhook(
    request: Request,
    invoice_repo: InvoiceRepository = Depends(get_invoice_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Receive a Paystack event.

    Failures are always 400 so Paystack does not keep retrying them.

    **Returns:**
    - 200 `ok`: Authenticated and parsed, whether or not an invoice matched
    - 400: Invalid signature or invalid JSON
    """
    raw_body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    result = await ProcessPaystackWebhook(invoice_repo, payment_gateway).execute(raw_body, signature)

    if result.is_err():
        request.app.state.webhook_outcomes[result.error.code.lower()] += 1
        return PlainTextResponse(result.error.message, status_code=status.HTTP_400_BAD_REQUEST)

    request.app.state.webhook_outcomes[result.value.outcome.value] += 1
    return PlainTextResponse("ok", status_code=status.HTTP_200_OK)
