from .invoice_repository import InvoiceRepository, StorageMode

__all__ = [
    "InvoiceRepository",
    "StorageMode",
]
