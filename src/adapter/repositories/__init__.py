from .invoice_repository import JsonFileInvoiceRepository

__all__ = [
    "JsonFileInvoiceRepository",
]
