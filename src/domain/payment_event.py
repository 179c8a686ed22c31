"""Paystack Webhook Event

Parsed form of a webhook body and its mapping onto invoice statuses.
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator


class EventCategory(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    OTHER = "other"


SUCCESS_EVENTS = frozenset({"charge.success", "invoice.payment_succeeded"})
FAILURE_EVENTS = frozenset({"charge.failed", "invoice.payment_failed"})


class PaymentEvent(BaseModel):
    """
    Webhook event sent by Paystack

    Only ``event`` and ``data`` are interpreted; ``data`` is kept verbatim.
    """

    event: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("event", mode="before")
    @classmethod
    def coerce_event(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v):
        return v if isinstance(v, dict) else {}

    @classmethod
    def from_payload(cls, payload: Any) -> "PaymentEvent":
        if not isinstance(payload, dict):
            return cls()
        return cls(event=payload.get("event"), data=payload.get("data"))

    @property
    def reference(self) -> Optional[str]:
        """Transaction reference, checked under both field names Paystack uses"""
        reference = self.data.get("reference") or self.data.get("transaction_reference")
        return str(reference) if reference else None

    @property
    def category(self) -> EventCategory:
        if self.event in SUCCESS_EVENTS:
            return EventCategory.SUCCESS
        if self.event in FAILURE_EVENTS:
            return EventCategory.FAILURE
        return EventCategory.OTHER
