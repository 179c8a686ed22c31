"""Integration tests for the Paystack webhook endpoint"""

import json
import pytest
from httpx import AsyncClient

from tests.integration.conftest import sign

WEBHOOK_URL = "/api/webhooks/paystack"


def body_for(event: str, **data) -> bytes:
    # Deliberately not json.dumps defaults: spacing must survive untouched
    return ('{"event": "%s",   "data": %s}' % (event, json.dumps(data, indent=1))).encode()


async def post_signed(client: AsyncClient, body: bytes, signature=None):
    return await client.post(
        WEBHOOK_URL,
        content=body,
        headers={
            "content-type": "application/json",
            "x-paystack-signature": signature if signature is not None else sign(body),
        },
    )


class TestPaystackWebhookAPI:

    @pytest.mark.asyncio
    async def test_charge_success_marks_invoice_paid(
        self, client: AsyncClient, created_invoice, invoice_repository
    ):
        """A signed charge.success for a pending invoice marks it paid and returns ok"""
        # Arrange
        body = body_for("charge.success", reference=created_invoice["reference"], status="success")

        # Act
        response = await post_signed(client, body)

        # Assert
        assert response.status_code == 200
        assert response.text == "ok"
        invoice = await invoice_repository.get_by_id(created_invoice["id"])
        assert invoice.status.value == "paid"
        assert invoice.paystack_data == {"reference": created_invoice["reference"], "status": "success"}

    @pytest.mark.asyncio
    async def test_invalid_signature(self, client: AsyncClient, created_invoice, invoice_repository):
        body = body_for("charge.success", reference=created_invoice["reference"])

        response = await post_signed(client, body, signature="deadbeef")

        assert response.status_code == 400
        assert response.text == "Invalid signature"
        invoice = await invoice_repository.get_by_id(created_invoice["id"])
        assert invoice.status.value == "pending"

    @pytest.mark.asyncio
    async def test_missing_signature_header(self, client: AsyncClient):
        response = await client.post(WEBHOOK_URL, content=b"{}", headers={"content-type": "application/json"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_json(self, client: AsyncClient):
        response = await post_signed(client, b"{not json")

        assert response.status_code == 400
        assert response.text == "Invalid JSON"

    @pytest.mark.asyncio
    async def test_unknown_reference_still_ok(self, client: AsyncClient):
        response = await post_signed(client, body_for("charge.success", reference="ref_nobody"))

        assert response.status_code == 200
        assert response.text == "ok"

        health = (await client.get("/health")).json()
        assert health["webhooks"] == {"unmatched": 1}

    @pytest.mark.asyncio
    async def test_event_without_reference_ok(self, client: AsyncClient):
        response = await post_signed(client, body_for("transfer.success", id=1))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_charge_failed_then_payment_allowed(self, client: AsyncClient, created_invoice):
        await post_signed(client, body_for("charge.failed", reference=created_invoice["reference"]))

        response = await client.post("/api/payments/card", json={"invoiceId": created_invoice["id"]})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_paid_invoice_rejects_new_payment(self, client: AsyncClient, created_invoice):
        await post_signed(client, body_for("charge.success", reference=created_invoice["reference"]))

        card = await client.post("/api/payments/card", json={"invoiceId": created_invoice["id"]})
        mpesa = await client.post("/api/payments/mpesa", json={"invoiceId": created_invoice["id"]})

        assert card.status_code == 400
        assert card.json()["error"]["code"] == "INVOICE_ALREADY_PAID"
        assert mpesa.status_code == 400
