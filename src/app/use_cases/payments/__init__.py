"""Invoice and payment use cases"""
from .create_invoice import CreateInvoice
from .initialize_card_payment import InitializeCardPayment
from .initialize_mobile_money_payment import InitializeMobileMoneyPayment
from .verify_payment import VerifyPayment
from .process_webhook import ProcessPaystackWebhook
from .dtos import (
    CreateInvoiceCommandDTO,
    InvoiceResponseDTO,
    CardPaymentCommandDTO,
    MobileMoneyPaymentCommandDTO,
    PaymentInitResponseDTO,
    VerifyPaymentResponseDTO,
    WebhookOutcome,
    WebhookResultDTO,
)

__all__ = [
    "CreateInvoice",
    "InitializeCardPayment",
    "InitializeMobileMoneyPayment",
    "VerifyPayment",
    "ProcessPaystackWebhook",
    "CreateInvoiceCommandDTO",
    "InvoiceResponseDTO",
    "CardPaymentCommandDTO",
    "MobileMoneyPaymentCommandDTO",
    "PaymentInitResponseDTO",
    "VerifyPaymentResponseDTO",
    "WebhookOutcome",
    "WebhookResultDTO",
]
