"""Data Transfer Objects for Payment Use Cases

Pydantic models for command inputs and response outputs.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field

from src.domain.invoice import Invoice


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    email: str = Field(
        ...,
        min_length=1,
        description="Customer email address"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in major currency units (must be > 0)"
    )

    phone: Optional[str] = Field(
        default=None,
        description="Customer phone number"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Currency code, defaults to the configured currency"
    )

    description: Optional[str] = Field(
        default=None,
        description="Invoice description"
    )

    items: List[Any] = Field(
        default_factory=list,
        description="Line items, stored as given"
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary metadata forwarded to Paystack"
    )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO wrapping a single invoice

    Returned by CreateInvoice use case.
    """

    invoice: Invoice


class CardPaymentCommandDTO(BaseModel):
    """Command DTO for initializing a card payment"""

    invoice_id: str = Field(
        ...,
        min_length=1,
        description="Invoice to pay"
    )

    callback_path: str = Field(
        default="/api/payments/callback",
        description="Path on APP_URL that Paystack redirects to after payment"
    )


class MobileMoneyPaymentCommandDTO(BaseModel):
    """Command DTO for initializing an M-Pesa charge"""

    invoice_id: str = Field(
        ...,
        min_length=1,
        description="Invoice to pay"
    )

    phone: Optional[str] = Field(
        default=None,
        description="Payer phone number in local or international format"
    )

    email: Optional[str] = Field(
        default=None,
        description="Payer email, defaults to the invoice email"
    )

    charge_payload: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Fields merged over the generated charge payload"
    )


class PaymentInitResponseDTO(BaseModel):
    """
    Response DTO for payment initialization

    Returned by InitializeCardPayment and InitializeMobileMoneyPayment.
    """

    invoice_id: str = Field(
        ...,
        alias="invoiceId",
        description="Invoice identifier"
    )

    reference: str = Field(
        ...,
        description="Paystack transaction reference"
    )

    paystack: Dict[str, Any] = Field(
        ...,
        description="Raw Paystack response"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "invoiceId": "inv_3f9a0c1b2d4e",
                "reference": "ref_8c1d2e3f4a5b6c",
                "paystack": {
                    "status": True,
                    "message": "Authorization URL created",
                    "data": {
                        "authorization_url": "https://checkout.paystack.com/abc123",
                        "access_code": "abc123",
                        "reference": "ref_8c1d2e3f4a5b6c"
                    }
                }
            }
        }


class VerifyPaymentResponseDTO(BaseModel):
    """Response DTO for transaction verification"""

    reference: str
    paystack: Dict[str, Any]


class WebhookOutcome(str, Enum):
    """What a webhook did to the invoice store"""
    APPLIED = "applied"
    RECORDED = "recorded"
    IGNORED = "ignored"
    UNMATCHED = "unmatched"


class WebhookResultDTO(BaseModel):
    """Result of processing one Paystack webhook"""

    event: Optional[str] = None
    reference: Optional[str] = None
    outcome: WebhookOutcome
    invoice: Optional[Invoice] = None
