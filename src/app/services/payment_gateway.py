"""Payment Gateway Interface

Defines the contract for talking to the external payment processor.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class MissingCredentialError(Exception):
    """The processor secret key is absent or malformed"""

    code = "PAYSTACK_SECRET_KEY_MISSING"


class PaymentGatewayError(Exception):
    """
    The processor call failed

    Attributes:
        status_code: HTTP status returned by the processor, None on network errors
        body: Response body returned by the processor, or an error description
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PaymentGateway(ABC):
    """
    Abstract payment processor client

    Outbound calls raise MissingCredentialError before any network I/O when
    the secret key is unusable, and PaymentGatewayError on failure.
    """

    @abstractmethod
    async def initialize_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Start a hosted (card) payment

        Args:
            payload: Transaction initialization payload

        Returns:
            Raw processor response
        """
        pass

    @abstractmethod
    async def verify_transaction(self, reference: str) -> Dict[str, Any]:
        """
        Fetch the current state of a transaction

        Args:
            reference: Transaction reference

        Returns:
            Raw processor response
        """
        pass

    @abstractmethod
    async def charge(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Start a direct charge (used for mobile money)

        Args:
            payload: Charge payload

        Returns:
            Raw processor response
        """
        pass

    @abstractmethod
    def verify_webhook_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        """
        Check a webhook signature against the exact bytes received

        Args:
            raw_body: Unparsed request body
            signature: Value of the signature header

        Returns:
            True if the signature is valid, False otherwise (never raises)
        """
        pass
