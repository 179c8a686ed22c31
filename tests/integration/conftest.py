import hashlib
import hmac
import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import JsonFileInvoiceRepository
from src.adapter.services.paystack_gateway import PaystackGateway

TEST_SECRET_KEY = "sk_test_integration_secret"


class PaystackStub:
    """Stands in for api.paystack.co through httpx.MockTransport"""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"status": True, "message": "ok", "data": {"authorization_url": "https://checkout.paystack.com/t"}}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


def sign(body: bytes, secret: str = TEST_SECRET_KEY) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha512).hexdigest()


@pytest.fixture
def test_config(tmp_path):
    """ApplicationConfig pointing the invoice store at a temporary file"""
    return type(
        "TestConfig",
        (ApplicationConfig,),
        {
            "INVOICE_STORE_PATH": str(tmp_path / "invoices.json"),
            "PAYSTACK_SECRET_KEY": TEST_SECRET_KEY,
            "APP_URL": "http://testserver",
            "API_PREFIX": "/api",
        },
    )


@pytest.fixture
def paystack():
    return PaystackStub()


@pytest.fixture
def invoice_repository(test_config):
    return JsonFileInvoiceRepository(test_config.INVOICE_STORE_PATH)


@pytest.fixture
def app(test_config, invoice_repository, paystack):
    from src.api.app import create_app

    gateway = PaystackGateway(TEST_SECRET_KEY, transport=httpx.MockTransport(paystack))
    return create_app(test_config, invoice_repository=invoice_repository, payment_gateway=gateway)


@pytest_asyncio.fixture
async def client(app):
    """Create test client bound to the ASGI app"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def created_invoice(client):
    response = await client.post("/api/invoices", json={"email": "a@b.com", "amount": 500})
    assert response.status_code == 201
    return response.json()["invoice"]
