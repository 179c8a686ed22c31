"""ProcessPaystackWebhook Use Case

Authenticates a Paystack webhook and reconciles the matching invoice.
"""

import json
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import PaymentGateway
from src.domain.invoice import (
    InvoiceStatus,
    PaymentOutcomeUpdate,
    ProcessorEventUpdate,
)
from src.domain.payment_event import EventCategory, PaymentEvent
from .dtos import WebhookOutcome, WebhookResultDTO

logger = logging.getLogger(__name__)


class ProcessPaystackWebhook:
    """
    Use Case: Reconcile an invoice from a Paystack webhook

    Business Rules:
    1. The signature is checked over the raw, unparsed body
    2. charge.success / invoice.payment_succeeded -> paid
    3. charge.failed / invoice.payment_failed -> failed
    4. Any other event only records last_event and the payload
    5. Events without a reference are acknowledged without changes
    6. Unknown references are acknowledged (and logged) so Paystack does not retry
    7. A paid invoice is never moved back; a later failure event is only recorded

    Flow:
    1. Verify signature
    2. Parse body
    3. Resolve reference
    4. Build typed update and apply it
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        payment_gateway: PaymentGateway,
    ):
        self.invoice_repo = invoice_repo
        self.payment_gateway = payment_gateway

    async def execute(self, raw_body: bytes, signature: Optional[str]) -> Result[WebhookResultDTO]:
        """
        Execute webhook reconciliation

        Args:
            raw_body: Request body exactly as received
            signature: Value of the x-paystack-signature header

        Returns:
            Result[WebhookResultDTO]: Success with the outcome or error
        """
        # Step 1: Verify signature
        if not self.payment_gateway.verify_webhook_signature(raw_body, signature):
            logger.warning("Rejected Paystack webhook with invalid signature")
            return Return.err(
                Error(
                    code="INVALID_SIGNATURE",
                    message="Invalid signature",
                )
            )

        # Step 2: Parse body
        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except ValueError:
            return Return.err(
                Error(
                    code="INVALID_PAYLOAD",
                    message="Invalid JSON",
                )
            )

        try:
            event = PaymentEvent.from_payload(payload)
            logger.info(f"Paystack webhook: {event.event}")

            # Step 3: Resolve reference
            reference = event.reference
            if not reference:
                return Return.ok(
                    WebhookResultDTO(event=event.event, outcome=WebhookOutcome.IGNORED)
                )

            # Step 4: Apply update
            update, outcome = await self._build_update(event, reference)
            invoice = await self.invoice_repo.update_by_reference(reference, update)

            if invoice is None:
                logger.warning(
                    f"Paystack webhook {event.event} references unknown invoice reference {reference}"
                )
                outcome = WebhookOutcome.UNMATCHED

            return Return.ok(
                WebhookResultDTO(
                    event=event.event,
                    reference=reference,
                    outcome=outcome,
                    invoice=invoice,
                )
            )

        except Exception as e:
            logger.exception("Failed to process Paystack webhook")
            return Return.err(
                Error(
                    code="WEBHOOK_PROCESSING_FAILED",
                    message="Failed to process webhook",
                    reason=str(e),
                )
            )

    async def _build_update(self, event: PaymentEvent, reference: str):
        if event.category == EventCategory.SUCCESS:
            return (
                PaymentOutcomeUpdate(status=InvoiceStatus.PAID, paystack_data=event.data),
                WebhookOutcome.APPLIED,
            )

        if event.category == EventCategory.FAILURE:
            current = await self.invoice_repo.get_by_reference(reference)
            if current is not None and current.status == InvoiceStatus.PAID:
                logger.warning(
                    f"Ignoring status change from {event.event} for paid invoice {current.id}"
                )
            else:
                return (
                    PaymentOutcomeUpdate(status=InvoiceStatus.FAILED, paystack_data=event.data),
                    WebhookOutcome.APPLIED,
                )

        return (
            ProcessorEventUpdate(last_event=event.event, paystack_data=event.data),
            WebhookOutcome.RECORDED,
        )
