"""Paystack Payment Gateway Implementation

HTTP client for the Paystack REST API plus webhook signature checks.
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote
import httpx
from src.app.services.payment_gateway import (
    MissingCredentialError,
    PaymentGateway,
    PaymentGatewayError,
)

logger = logging.getLogger(__name__)

PAYSTACK_API_BASE = "https://api.paystack.co"

SECRET_KEY_HINT = (
    "Missing or invalid PAYSTACK_SECRET_KEY. Set a valid Paystack Secret Key "
    "(sk_test_... for test or sk_live_... for live) and restart the server."
)


def is_valid_secret_key(secret_key: Optional[str]) -> bool:
    return bool(secret_key) and secret_key.strip().startswith("sk_")


class PaystackGateway(PaymentGateway):
    """
    Paystack implementation of PaymentGateway

    A new httpx.AsyncClient is opened per call; there is no retry.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        base_url: str = PAYSTACK_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway

        Args:
            secret_key: Paystack secret key (sk_test_... / sk_live_...)
            base_url: Paystack API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.secret_key = secret_key or ""
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def initialize_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/transaction/initialize", json=payload)

    async def verify_transaction(self, reference: str) -> Dict[str, Any]:
        return await self._request("GET", f"/transaction/verify/{quote(reference, safe='')}")

    async def charge(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/charge", json=payload)

    def verify_webhook_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        """
        Verify Paystack webhook HMAC-SHA512 signature

        Args:
            raw_body: Raw request body bytes
            signature: Value of the X-Paystack-Signature header

        Returns:
            True if the signature is valid
        """
        if not self.secret_key or not signature:
            return False
        try:
            expected = hmac.new(
                self.secret_key.encode("utf-8"),
                raw_body,
                hashlib.sha512,
            ).hexdigest()
            return hmac.compare_digest(expected, signature)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not compute Paystack webhook signature: {e}")
            return False

    def _assert_secret_key(self):
        if not is_valid_secret_key(self.secret_key):
            raise MissingCredentialError(SECRET_KEY_HINT)

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._assert_secret_key()

        headers = {
            "Authorization": f"Bearer {self.secret_key.strip()}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            body = _response_body(e.response)
            logger.error(f"Paystack {method} {path} failed with {e.response.status_code}: {body}")
            raise PaymentGatewayError(
                f"Paystack returned {e.response.status_code}",
                status_code=e.response.status_code,
                body=body,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Paystack {method} {path} failed: {e!r}")
            raise PaymentGatewayError(f"Paystack request failed: {e!r}", body=str(e) or repr(e)) from e
        except ValueError as e:
            raise PaymentGatewayError("Paystack returned a non-JSON response", body=str(e)) from e


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
