"""API tests for invoices and payments."""

from __future__ import annotations

import datetime
import uuid

import pytest

pytestmark = pytest.mark.asyncio

TODAY = datetime.date.today().isoformat()


def _invoice_body(**overrides) -> dict[str, object]:
    body: dict[str, object] = {
        "customer_name": "Meera Iyer",
        "customer_gst_number": "29aapfu0939f1zv",
        "invoice_date": TODAY,
        "line_items": [
            {
                "item_type": "room",
                "description": "Executive room",
                "quantity": 1,
                "unit_price": "1120",
                "gst_rate": 12,
                "gst_inclusive": True,
            },
            {
                "item_type": "service",
                "description": "Laundry",
                "quantity": 1,
                "unit_price": "200",
                "tax_rate": 0,
            },
        ],
    }
    body.update(overrides)
    return body


async def test_calculate_preview_reports_without_rejecting(client) -> None:
    response = await client.post(
        "/api/v1/invoices/calculate",
        json={
            "line_items": [
                {"description": "Room", "quantity": 1, "unit_price": "1000"},
                {"description": "", "quantity": 1, "unit_price": "50",
                 "tax_rate": 150},
            ]
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["line_items"][0]["tax_amount"] == "120.00"
    assert payload["total_amount"] == "1245.00"
    assert payload["formatted_total"] == "₹1,245.00"
    assert payload["amount_in_words"] == "One Thousand Two Hundred Forty Five Rupees Only"
    assert "Customer name is required" in payload["errors"]
    assert "Line item 2: Description is required" in payload["errors"]
    assert "Line item 2: Tax rate must be between 0 and 100" in payload["errors"]
    assert payload["gst_breakdown"] == [
        {"tax_rate": "12", "taxable_amount": "1000.00", "tax_amount": "120.00"},
        {"tax_rate": "150", "taxable_amount": "50.00", "tax_amount": "75.00"},
    ]


async def test_invoice_lifecycle(client) -> None:
    response = await client.post(
        "/api/v1/invoices", json=_invoice_body(), headers={"X-User-ID": "frontdesk-7"}
    )
    assert response.status_code == 201, response.text
    created = response.json()
    invoice_id = created["id"]
    assert created["invoice_number"].startswith("INV-")
    assert created["customer_gst_number"] == "29AAPFU0939F1ZV"
    assert created["created_by"] == "frontdesk-7"
    assert created["total_amount"] == "1320.00"
    assert created["total_tax"] == "120.00"
    assert created["amount_in_words"] == "One Thousand Three Hundred Twenty Rupees Only"
    assert created["gst_breakdown"] == [
        {"tax_rate": "12.00", "taxable_amount": "1000.00", "tax_amount": "120.00"}
    ]
    assert created["is_overdue"] is False

    response = await client.get(f"/api/v1/invoices/{invoice_id}")
    assert response.status_code == 200
    assert len(response.json()["line_items"]) == 2

    response = await client.post(
        f"/api/v1/invoices/{invoice_id}/payments",
        json={"amount": "320", "payment_method": "card", "reference_number": "TXN1"},
    )
    assert response.status_code == 201
    recorded = response.json()
    assert recorded["balance_amount"] == "1000.00"
    assert recorded["payment_status"] == "partial"

    response = await client.post(
        f"/api/v1/invoices/{invoice_id}/payments", json={"amount": "5000"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Payment amount cannot exceed balance amount"

    response = await client.post(
        f"/api/v1/invoices/{invoice_id}/payments", json={"amount": "0"}
    )
    assert response.status_code == 422

    response = await client.get(f"/api/v1/invoices/{invoice_id}/payments")
    assert response.status_code == 200
    assert [p["reference_number"] for p in response.json()] == ["TXN1"]

    response = await client.delete(f"/api/v1/invoices/{invoice_id}")
    assert response.status_code == 400


async def test_create_invoice_validation_errors(client) -> None:
    response = await client.post(
        "/api/v1/invoices", json=_invoice_body(customer_name="", line_items=[])
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Invoice validation failed"
    assert detail["errors"] == [
        "Customer name is required",
        "At least one line item is required",
    ]


async def test_bad_gst_number_is_a_shape_error(client) -> None:
    response = await client.post(
        "/api/v1/invoices", json=_invoice_body(customer_gst_number="NOTAGSTIN")
    )
    assert response.status_code == 422


async def test_update_list_and_delete(client) -> None:
    created = (await client.post("/api/v1/invoices", json=_invoice_body())).json()

    response = await client.put(
        f"/api/v1/invoices/{created['id']}",
        json=_invoice_body(
            customer_name="Meera I.",
            line_items=[{"description": "Late checkout", "quantity": 1,
                         "unit_price": "500", "tax_rate": 18}],
        ),
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["total_amount"] == "590.00"
    assert len(updated["line_items"]) == 1

    response = await client.get("/api/v1/invoices", params={"q": "meera"})
    assert response.status_code == 200
    listing = response.json()
    assert listing["total"] == 1
    assert listing["items"][0]["customer_name"] == "Meera I."

    response = await client.delete(f"/api/v1/invoices/{created['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/v1/invoices/{created['id']}")
    assert response.status_code == 404


async def test_missing_invoice_returns_404(client) -> None:
    missing = uuid.uuid4()
    response = await client.get(f"/api/v1/invoices/{missing}/payments")
    assert response.status_code == 404
    response = await client.post(
        f"/api/v1/invoices/{missing}/payments", json={"amount": "10"}
    )
    assert response.status_code == 404


async def test_edit_and_remove_payment(client) -> None:
    created = (await client.post("/api/v1/invoices", json=_invoice_body())).json()
    base = f"/api/v1/invoices/{created['id']}/payments"
    payment = (await client.post(base, json={"amount": "320"})).json()["payment"]

    response = await client.put(
        f"{base}/{payment['id']}", json={"amount": "1320", "payment_method": "upi"}
    )
    assert response.status_code == 200
    recorded = response.json()
    assert recorded["payment"]["payment_method"] == "upi"
    assert recorded["balance_amount"] == "0.00"
    assert recorded["payment_status"] == "paid"

    response = await client.put(f"{base}/{payment['id']}", json={"amount": "1320.01"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Payment amount cannot exceed balance amount"

    response = await client.put(f"{base}/{uuid.uuid4()}", json={"amount": "10"})
    assert response.status_code == 404

    response = await client.delete(f"{base}/{payment['id']}")
    assert response.status_code == 204
    invoice = (await client.get(f"/api/v1/invoices/{created['id']}")).json()
    assert invoice["paid_amount"] == "0.00"
    assert invoice["balance_amount"] == "1320.00"
    assert invoice["payment_status"] == "pending"
    assert invoice["status"] == "sent"

    response = await client.delete(f"{base}/{payment['id']}")
    assert response.status_code == 404
