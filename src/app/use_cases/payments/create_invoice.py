"""CreateInvoice Use Case

Creates a pending invoice that can later be paid by card or mobile money.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus, utcnow
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create a pending invoice

    Business Rules:
    1. email and a positive amount are required (enforced by the command DTO)
    2. id and reference are generated here and never change afterwards
    3. Currency and description fall back to configured defaults
    4. items and metadata are stored as given

    Flow:
    1. Generate unique id and reference
    2. Build invoice with status=pending
    3. Persist invoice
    4. Return response
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        default_currency: str = "KES",
        default_description: str = "Lottery purchase",
    ):
        self.invoice_repo = invoice_repo
        self.default_currency = default_currency
        self.default_description = default_description

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with email, amount and optional fields

        Returns:
            Result[InvoiceResponseDTO]: Success with the invoice or error
        """
        try:
            # Step 1: Generate identifiers
            invoice_id, reference = await self.invoice_repo.generate_identifiers()

            # Step 2: Build invoice
            now = utcnow()
            invoice = Invoice(
                id=invoice_id,
                reference=reference,
                email=command.email,
                phone=command.phone or None,
                amount=command.amount,
                currency=command.currency or self.default_currency,
                description=command.description or self.default_description,
                items=command.items,
                metadata=command.metadata,
                status=InvoiceStatus.PENDING,
                created_at=now,
                updated_at=now,
            )

            # Step 3: Persist
            created_invoice = await self.invoice_repo.create(invoice)
            logger.info(f"Created invoice {created_invoice.id} ({created_invoice.reference})")

            return Return.ok(InvoiceResponseDTO(invoice=created_invoice))

        except Exception as e:
            logger.exception("Failed to create invoice")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
