"""Request schemas for Invoice and Payment API

Pydantic models for validating incoming HTTP requests. JSON keys are
camelCase; snake_case names are accepted too.
"""

from decimal import Decimal
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field, field_validator


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    email: str = Field(
        ...,
        min_length=1,
        description="Customer email address (required, non-empty)"
    )

    phone: Optional[str] = Field(
        default=None,
        description="Customer phone number"
    )

    amount: Decimal = Field(
        ...,
        description="Amount in major currency units (must be > 0)"
    )

    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="Currency code (ISO 4217), defaults to KES"
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

    @field_validator("amount", mode="before")
    @classmethod
    def require_number(cls, v):
        """Only JSON numbers are accepted, not numeric strings"""
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise ValueError("amount must be a positive number")
        return v

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v <= 0:
            raise ValueError("amount must be a positive number")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "customer@example.com",
                "phone": "0712345678",
                "amount": 500,
                "currency": "KES",
                "description": "Lottery purchase",
                "items": [{"ticket": "A-12", "quantity": 2}],
                "metadata": {"campaign": "weekly-draw"}
            }
        }


class CardPaymentRequestSchema(BaseModel):
    """
    Request schema for card payments

    Used for POST /payments/card endpoint.
    """

    invoice_id: str = Field(
        ...,
        alias="invoiceId",
        min_length=1,
        description="Invoice to pay (required)"
    )

    callback_path: str = Field(
        default="/api/payments/callback",
        alias="callbackPath",
        description="Path on APP_URL that Paystack redirects to"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "invoiceId": "inv_3f9a0c1b2d4e",
                "callbackPath": "/api/payments/callback"
            }
        }


class MobileMoneyPaymentRequestSchema(BaseModel):
    """
    Request schema for M-Pesa charges

    Used for POST /payments/mpesa endpoint.
    """

    invoice_id: str = Field(
        ...,
        alias="invoiceId",
        min_length=1,
        description="Invoice to pay (required)"
    )

    phone: Optional[str] = Field(
        default=None,
        description="Phone as +2547XXXXXXXX, 2547XXXXXXXX or 07XXXXXXXX"
    )

    email: Optional[str] = Field(
        default=None,
        description="Payer email, defaults to the invoice email"
    )

    charge_payload: Optional[Dict[str, Any]] = Field(
        default=None,
        alias="chargePayload",
        description="Fields merged over the generated Paystack charge payload"
    )

    @field_validator("phone", mode="before")
    @classmethod
    def stringify_phone(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "invoiceId": "inv_3f9a0c1b2d4e",
                "phone": "0712345678"
            }
        }
