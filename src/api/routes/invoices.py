"""Invoice API Routes

FastAPI routes for invoice creation.
"""

from fastapi import APIRouter, Depends, status

from src.api.schemas.payment_request import CreateInvoiceRequestSchema
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.payments.create_invoice import CreateInvoice
from src.app.use_cases.payments.dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from src.depends import get_config, get_invoice_repository
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "amount: Value error, amount must be a positive number"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    invoice_repo: InvoiceRepository = Depends(get_invoice_repository),
    config=Depends(get_config),
):
    """
    Create a pending invoice.

    **Request body:**
    - `email` (required): Customer email
    - `amount` (required): Positive amount in major units (e.g. 500 = KES 500)
    - `phone`, `currency`, `description`, `items`, `metadata` (optional)

    **Returns:**
    - 201: Invoice created with status `pending`
    - 400: Missing or invalid fields
    """
    command = CreateInvoiceCommandDTO(
        email=request.email,
        amount=request.amount,
        phone=request.phone,
        currency=request.currency,
        description=request.description,
        items=request.items,
        metadata=request.metadata,
    )

    use_case = CreateInvoice(
        invoice_repo,
        default_currency=config.DEFAULT_CURRENCY,
        default_description=config.DEFAULT_INVOICE_DESCRIPTION,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value
