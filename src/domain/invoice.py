"""Invoice Domain Entity

Tracks a payable invoice and its payment status as reported by Paystack.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class Invoice(BaseModel):
    """
    Invoice - A payable request correlated with a Paystack transaction

    Domain Rules:
    - id and reference are generated once at creation and never change
    - amount is positive and never mutated after creation
    - Status transitions: pending -> paid | failed, failed -> paid
    - A paid invoice is never moved back to pending or failed
    - updated_at is refreshed on every mutation, created_at never changes
    """

    id: str = Field(
        description="Unique invoice identifier (e.g., inv_3f9a0c1b2d4e)"
    )

    reference: str = Field(
        description="Unique Paystack transaction reference"
    )

    email: str = Field(
        description="Customer email address"
    )

    phone: Optional[str] = Field(
        default=None,
        description="Customer phone number"
    )

    amount: Decimal = Field(
        gt=0,
        description="Amount in major currency units"
    )

    currency: str = Field(
        default="KES",
        description="Currency code (ISO 4217)"
    )

    description: str = Field(
        default="",
        description="Human readable description"
    )

    items: List[Any] = Field(
        default_factory=list,
        description="Line items, stored as given"
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary metadata merged into Paystack payloads"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        description="Invoice status (pending, paid, failed)"
    )

    paystack_data: Optional[Dict[str, Any]] = Field(
        default=None,
        alias="paystackData",
        description="Last raw event payload received from Paystack"
    )

    last_event: Optional[str] = Field(
        default=None,
        alias="lastEvent",
        description="Name of the last Paystack event that did not change status"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        alias="createdAt",
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        alias="updatedAt",
        description="Last update timestamp"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "inv_3f9a0c1b2d4e",
                "reference": "ref_8c1d2e3f4a5b6c",
                "email": "customer@example.com",
                "phone": "+254712345678",
                "amount": "500",
                "currency": "KES",
                "description": "Lottery purchase",
                "items": [{"ticket": "A-12", "quantity": 2}],
                "metadata": {"campaign": "weekly-draw"},
                "status": "pending",
                "paystackData": None,
                "lastEvent": None,
                "createdAt": "2024-01-01T00:00:00Z",
                "updatedAt": "2024-01-01T00:00:00Z"
            }
        }

    def apply(self, update: "InvoiceUpdate", now: Optional[datetime] = None) -> "Invoice":
        """
        Return a copy of this invoice with the update applied

        Only the fields belonging to the update's shape are replaced.
        """
        changes: Dict[str, Any] = {
            "paystack_data": update.paystack_data,
            "updated_at": now or utcnow(),
        }
        if isinstance(update, PaymentOutcomeUpdate):
            changes["status"] = update.status
        else:
            changes["last_event"] = update.last_event
        return self.model_copy(update=changes, deep=True)


class PaymentOutcomeUpdate(BaseModel):
    """Moves an invoice to a new status and keeps the triggering payload"""

    kind: Literal["payment_outcome"] = "payment_outcome"
    status: InvoiceStatus
    paystack_data: Dict[str, Any] = Field(default_factory=dict)


class ProcessorEventUpdate(BaseModel):
    """Records an event that does not affect the invoice status"""

    kind: Literal["processor_event"] = "processor_event"
    last_event: Optional[str] = None
    paystack_data: Dict[str, Any] = Field(default_factory=dict)


InvoiceUpdate = Annotated[
    Union[PaymentOutcomeUpdate, ProcessorEventUpdate],
    Field(discriminator="kind"),
]
