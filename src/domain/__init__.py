from .invoice import (
    Invoice,
    InvoiceStatus,
    InvoiceUpdate,
    PaymentOutcomeUpdate,
    ProcessorEventUpdate,
)
from .payment_event import PaymentEvent, EventCategory
from .money import to_minor_units
from .phone_number import normalize_msisdn

__all__ = [
    "Invoice",
    "InvoiceStatus",
    "InvoiceUpdate",
    "PaymentOutcomeUpdate",
    "ProcessorEventUpdate",
    "PaymentEvent",
    "EventCategory",
    "to_minor_units",
    "normalize_msisdn",
]
