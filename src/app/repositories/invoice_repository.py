"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple
from src.domain.invoice import Invoice, InvoiceUpdate


class StorageMode(str, Enum):
    """Where a repository currently keeps its records"""
    DURABLE = "durable"
    MEMORY = "memory"


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Implementations hand out copies; callers never share mutable records.
    """

    @property
    @abstractmethod
    def storage_mode(self) -> StorageMode:
        """Current storage backend mode"""
        pass

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Persist a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            The stored Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_reference(self, reference: str) -> Optional[Invoice]:
        """
        Retrieve invoice by Paystack reference

        Args:
            reference: Transaction reference

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def generate_identifiers(self) -> Tuple[str, str]:
        """
        Generate a fresh (invoice id, reference) pair

        Format: inv_XXXXXXXXXXXX / ref_XXXXXXXXXXXXXX (lowercase hex)

        Returns:
            Tuple of identifiers not used by any stored invoice
        """
        pass
