"""JSON File Invoice Repository Implementation

Keeps all invoices in a single pretty-printed JSON array on disk. When the
file cannot be created, read or written the repository switches to an
in-process list for the rest of its lifetime.
"""

import json
import logging
import os
import secrets
from typing import Callable, List, Optional, Tuple
from src.app.repositories.invoice_repository import InvoiceRepository, StorageMode
from src.domain.invoice import Invoice, InvoiceUpdate, utcnow

logger = logging.getLogger(__name__)


def _hex_token(length: int) -> str:
    return secrets.token_hex((length + 1) // 2)[:length]


class JsonFileInvoiceRepository(InvoiceRepository):
    """
    JSON file implementation of InvoiceRepository

    Every operation reads the whole collection, changes it in memory and
    rewrites the whole file.
    """

    def __init__(self, path: str):
        self.path = path
        self._mode = StorageMode.DURABLE
        self._memory: List[Invoice] = []

    @property
    def storage_mode(self) -> StorageMode:
        return self._mode

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Append a new invoice to the collection

        Args:
            invoice: Invoice entity to persist

        Returns:
            Copy of the stored Invoice
        """
        invoices = self._read_all()
        invoices.append(invoice.model_copy(deep=True))
        self._write_all(invoices)
        return invoice.model_copy(deep=True)

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return self._find(lambda i: i.id == invoice_id)

    async def get_by_reference(self, reference: str) -> Optional[Invoice]:
        return self._find(lambda i: i.reference == reference)

    async def update_by_reference(
        self, reference: str, update: InvoiceUpdate
    ) -> Optional[Invoice]:
        """
        Apply a partial update to the invoice with the given reference

        Args:
            reference: Transaction reference
            update: Typed partial update

        Returns:
            Updated Invoice, or None when no invoice has that reference
        """
        invoices = self._read_all()
        for index, invoice in enumerate(invoices):
            if invoice.reference == reference:
                invoices[index] = invoice.apply(update, utcnow())
                self._write_all(invoices)
                return invoices[index].model_copy(deep=True)
        return None

    async def generate_identifiers(self) -> Tuple[str, str]:
        invoices = self._read_all()
        ids = {i.id for i in invoices}
        references = {i.reference for i in invoices}

        invoice_id = f"inv_{_hex_token(12)}"
        while invoice_id in ids:
            invoice_id = f"inv_{_hex_token(12)}"

        reference = f"ref_{_hex_token(14)}"
        while reference in references:
            reference = f"ref_{_hex_token(14)}"

        return invoice_id, reference

    def _find(self, predicate: Callable[[Invoice], bool]) -> Optional[Invoice]:
        for invoice in self._read_all():
            if predicate(invoice):
                return invoice.model_copy(deep=True)
        return None

    def _degrade(self, action: str, error: Exception, invoices: Optional[List[Invoice]] = None):
        self._mode = StorageMode.MEMORY
        if invoices is not None:
            self._memory = invoices
        logger.warning(
            f"Invoice store {self.path} could not be {action} ({error}); "
            f"falling back to in-memory storage, data will not survive a restart"
        )

    def _ensure_store(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.path):
            with open(self.path, "w", encoding="utf-8") as w_file:
                json.dump([], w_file, indent=2)

    def _read_all(self) -> List[Invoice]:
        if self._mode == StorageMode.MEMORY:
            return list(self._memory)

        try:
            self._ensure_store()
        except OSError as e:
            self._degrade("created", e)
            return list(self._memory)

        try:
            with open(self.path, "r", encoding="utf-8") as r_file:
                records = json.load(r_file)
            return [Invoice.model_validate(record) for record in records]
        except (OSError, ValueError, TypeError) as e:
            self._degrade("read", e)
            return list(self._memory)

    def _write_all(self, invoices: List[Invoice]):
        if self._mode == StorageMode.MEMORY:
            self._memory = invoices
            return

        records = [invoice.model_dump(mode="json", by_alias=True) for invoice in invoices]
        try:
            with open(self.path, "w", encoding="utf-8") as w_file:
                json.dump(records, w_file, indent=2, ensure_ascii=False)
        except OSError as e:
            self._degrade("written", e, invoices)
