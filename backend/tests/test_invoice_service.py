"""Tests for invoice persistence, numbering, and payments."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

import pytest

from frontdesk.models import InvoiceStatus, InvoiceType, PaymentMethod, PaymentStatus
from frontdesk.schemas import HotelConfigUpdate, InvoiceCreate, PaymentCreate
from frontdesk.services import hotel_config_service, invoice_service

pytestmark = pytest.mark.asyncio

TODAY = datetime.date.today()


def _payload(**overrides) -> InvoiceCreate:
    data = {
        "customer_name": "Asha Rao",
        "invoice_date": TODAY,
        "line_items": [
            {
                "item_type": "room",
                "description": "Deluxe room, 2 nights",
                "quantity": 2,
                "unit_price": "3500",
            },
            {
                "item_type": "food",
                "description": "Breakfast buffet",
                "quantity": 2,
                "unit_price": "250",
                "tax_rate": "5",
                "is_buffet_item": True,
                "buffet_type": "breakfast",
            },
        ],
    }
    data.update(overrides)
    return InvoiceCreate.model_validate(data)


async def test_create_invoice_numbers_and_totals(session) -> None:
    invoice = await invoice_service.create_invoice(
        session, _payload(), created_by="desk-1"
    )

    assert invoice.invoice_number == f"INV-{TODAY.year}-0001"
    assert invoice.created_by == "desk-1"
    # Room line picks up the 12% default; breakfast keeps its explicit 5%.
    assert [item.tax_rate for item in invoice.line_items] == [
        Decimal("12"),
        Decimal("5"),
    ]
    assert invoice.subtotal == Decimal("8365.00")
    assert invoice.total_tax == Decimal("865.00")
    assert invoice.total_amount == Decimal("8365.00")
    assert invoice.balance_amount == Decimal("8365.00")
    assert invoice.paid_amount == Decimal("0")
    assert invoice.payment_status is PaymentStatus.PENDING
    assert invoice.due_date == TODAY + datetime.timedelta(days=30)
    assert invoice.currency == "INR"
    assert invoice.customer_country == "India"
    assert invoice.payments == []

    second = await invoice_service.create_invoice(session, _payload())
    assert second.invoice_number == f"INV-{TODAY.year}-0002"


async def test_create_invoice_rejects_invalid_payload(session) -> None:
    with pytest.raises(invoice_service.InvoiceValidationError) as excinfo:
        await invoice_service.create_invoice(
            session,
            _payload(
                customer_name=" ",
                line_items=[{"description": "Room", "quantity": 0, "unit_price": 10}],
            ),
        )
    assert excinfo.value.errors == [
        "Customer name is required",
        "Line item 1: Quantity must be greater than 0",
    ]


async def test_explicit_zero_tax_rate_is_kept(session) -> None:
    invoice = await invoice_service.create_invoice(
        session,
        _payload(
            line_items=[
                {"description": "Airport pickup", "quantity": 1, "unit_price": 900,
                 "tax_rate": 0}
            ]
        ),
    )
    assert invoice.total_tax == Decimal("0")
    assert invoice.total_amount == Decimal("900.00")


async def test_hotel_config_drives_defaults(session) -> None:
    await hotel_config_service.update_config(
        session,
        HotelConfigUpdate(
            hotel_name="Lakeview Residency",
            hotel_city="Udaipur",
            hotel_gst_number="08AAPFU0939F1ZV",
            proforma_prefix="PRO",
            default_gst_rate=Decimal("18"),
            show_bank_details_default=False,
        ),
    )

    invoice = await invoice_service.create_invoice(
        session,
        _payload(
            invoice_type=InvoiceType.PROFORMA,
            line_items=[{"description": "Suite", "quantity": 1, "unit_price": 1000}],
        ),
    )

    assert invoice.invoice_number == f"PRO-{TODAY.year}-0001"
    assert invoice.hotel_name == "Lakeview Residency"
    assert invoice.hotel_city == "Udaipur"
    assert invoice.hotel_gst_number == "08AAPFU0939F1ZV"
    assert invoice.show_bank_details is False
    assert invoice.total_tax == Decimal("180.00")


async def test_duplicate_invoice_number_is_rejected(session) -> None:
    await invoice_service.create_invoice(session, _payload(invoice_number="INV-X-1"))
    with pytest.raises(ValueError, match="Invoice number already exists"):
        await invoice_service.create_invoice(session, _payload(invoice_number="INV-X-1"))


async def test_payments_update_settlement(session) -> None:
    invoice = await invoice_service.create_invoice(session, _payload())

    payment, updated = await invoice_service.record_payment(
        session,
        invoice_id=invoice.id,
        payload=PaymentCreate(amount=Decimal("4000"), payment_method=PaymentMethod.UPI),
        created_by="desk-2",
    )
    assert payment.amount == Decimal("4000.00")
    assert payment.created_by == "desk-2"
    assert updated.paid_amount == Decimal("4000.00")
    assert updated.balance_amount == Decimal("4365.00")
    assert updated.payment_status is PaymentStatus.PARTIAL
    assert updated.status is InvoiceStatus.DRAFT

    with pytest.raises(ValueError, match="cannot exceed balance"):
        await invoice_service.record_payment(
            session,
            invoice_id=invoice.id,
            payload=PaymentCreate(amount=Decimal("4365.01")),
        )

    _, settled = await invoice_service.record_payment(
        session,
        invoice_id=invoice.id,
        payload=PaymentCreate(amount=Decimal("4365")),
    )
    assert settled.balance_amount == Decimal("0.00")
    assert settled.payment_status is PaymentStatus.PAID
    assert settled.status is InvoiceStatus.PAID

    payments = await invoice_service.list_payments(session, invoice_id=invoice.id)
    assert len(payments) == 2


async def test_update_recalculates_and_keeps_payments(session) -> None:
    invoice = await invoice_service.create_invoice(session, _payload())
    await invoice_service.record_payment(
        session, invoice_id=invoice.id, payload=PaymentCreate(amount=Decimal("1000"))
    )

    updated = await invoice_service.update_invoice(
        session,
        invoice_id=invoice.id,
        payload=_payload(
            customer_name="Asha R.",
            line_items=[{"description": "Standard room", "quantity": 1,
                         "unit_price": 2000}],
        ),
    )
    assert updated.invoice_number == invoice.invoice_number
    assert updated.customer_name == "Asha R."
    assert len(updated.line_items) == 1
    assert updated.total_amount == Decimal("2240.00")
    assert updated.paid_amount == Decimal("1000.00")
    assert updated.balance_amount == Decimal("1240.00")
    assert updated.payment_status is PaymentStatus.PARTIAL

    with pytest.raises(ValueError, match="less than the amount already paid"):
        await invoice_service.update_invoice(
            session,
            invoice_id=invoice.id,
            payload=_payload(
                line_items=[{"description": "Tea", "quantity": 1, "unit_price": 100}]
            ),
        )


async def test_delete_is_blocked_once_paid(session) -> None:
    unpaid = await invoice_service.create_invoice(session, _payload())
    await invoice_service.delete_invoice(session, invoice_id=unpaid.id)
    assert await invoice_service.get_invoice(session, invoice_id=unpaid.id) is None

    paid = await invoice_service.create_invoice(session, _payload())
    await invoice_service.record_payment(
        session, invoice_id=paid.id, payload=PaymentCreate(amount=Decimal("10"))
    )
    with pytest.raises(ValueError, match="recorded payments"):
        await invoice_service.delete_invoice(session, invoice_id=paid.id)


async def test_search_invoices_filters(session) -> None:
    first = await invoice_service.create_invoice(session, _payload())
    await invoice_service.create_invoice(
        session,
        _payload(
            customer_name="Vikram Singh",
            invoice_date=TODAY - datetime.timedelta(days=40),
        ),
    )
    await invoice_service.record_payment(
        session, invoice_id=first.id, payload=PaymentCreate(amount=Decimal("100"))
    )

    items, total = await invoice_service.search_invoices(session)
    assert total == 2
    assert len(items) == 2

    items, total = await invoice_service.search_invoices(session, query="vikram")
    assert total == 1
    assert items[0].customer_name == "Vikram Singh"

    items, total = await invoice_service.search_invoices(
        session, payment_status=PaymentStatus.PARTIAL
    )
    assert [inv.id for inv in items] == [first.id]

    _, total = await invoice_service.search_invoices(
        session, date_from=TODAY - datetime.timedelta(days=1)
    )
    assert total == 1

    items, total = await invoice_service.search_invoices(session, limit=1)
    assert total == 2
    assert len(items) == 1


async def test_status_follows_settlement(session) -> None:
    invoice = await invoice_service.create_invoice(
        session, _payload(status=InvoiceStatus.PAID)
    )
    assert invoice.status is InvoiceStatus.SENT
    assert invoice.payment_status is PaymentStatus.PENDING

    _, settled = await invoice_service.record_payment(
        session, invoice_id=invoice.id, payload=PaymentCreate(amount=Decimal("8365"))
    )
    assert settled.status is InvoiceStatus.PAID

    raised = await invoice_service.update_invoice(
        session,
        invoice_id=invoice.id,
        payload=_payload(
            status=InvoiceStatus.PAID,
            line_items=[
                {"description": "Suite, 3 nights", "quantity": 3, "unit_price": 3500}
            ],
        ),
    )
    assert raised.total_amount == Decimal("11760.00")
    assert raised.balance_amount == Decimal("3395.00")
    assert raised.payment_status is PaymentStatus.PARTIAL
    assert raised.status is InvoiceStatus.SENT


async def test_update_payment_resettles_invoice(session) -> None:
    invoice = await invoice_service.create_invoice(session, _payload())
    first, _ = await invoice_service.record_payment(
        session, invoice_id=invoice.id, payload=PaymentCreate(amount=Decimal("4000"))
    )
    await invoice_service.record_payment(
        session, invoice_id=invoice.id, payload=PaymentCreate(amount=Decimal("1000"))
    )

    payment, updated = await invoice_service.update_payment(
        session,
        invoice_id=invoice.id,
        payment_id=first.id,
        payload=PaymentCreate(
            amount=Decimal("7365"),
            payment_method=PaymentMethod.BANK_TRANSFER,
            reference_number="NEFT-88",
        ),
    )
    assert payment.amount == Decimal("7365.00")
    assert payment.reference_number == "NEFT-88"
    assert updated.paid_amount == Decimal("8365.00")
    assert updated.balance_amount == Decimal("0.00")
    assert updated.payment_status is PaymentStatus.PAID
    assert updated.status is InvoiceStatus.PAID

    with pytest.raises(ValueError, match="cannot exceed balance"):
        await invoice_service.update_payment(
            session,
            invoice_id=invoice.id,
            payment_id=first.id,
            payload=PaymentCreate(amount=Decimal("7365.01")),
        )

    with pytest.raises(ValueError, match="Payment not found"):
        await invoice_service.update_payment(
            session,
            invoice_id=invoice.id,
            payment_id=uuid.uuid4(),
            payload=PaymentCreate(amount=Decimal("1")),
        )


async def test_delete_payment_resettles_invoice(session) -> None:
    invoice = await invoice_service.create_invoice(session, _payload())
    payment, settled = await invoice_service.record_payment(
        session, invoice_id=invoice.id, payload=PaymentCreate(amount=Decimal("8365"))
    )
    assert settled.status is InvoiceStatus.PAID

    reopened = await invoice_service.delete_payment(
        session, invoice_id=invoice.id, payment_id=payment.id
    )
    assert reopened.paid_amount == Decimal("0.00")
    assert reopened.balance_amount == Decimal("8365.00")
    assert reopened.payment_status is PaymentStatus.PENDING
    assert reopened.status is InvoiceStatus.SENT
    assert await invoice_service.list_payments(session, invoice_id=invoice.id) == []

    # With its payments gone the invoice can be deleted again.
    await invoice_service.delete_invoice(session, invoice_id=invoice.id)


async def test_numbering_treats_prefix_literally(session) -> None:
    await hotel_config_service.update_config(
        session, HotelConfigUpdate(hotel_name="Lakeview", invoice_prefix="A_B")
    )
    await invoice_service.create_invoice(
        session, _payload(invoice_number=f"AXB-{TODAY.year}-0009")
    )

    invoice = await invoice_service.create_invoice(session, _payload())
    assert invoice.invoice_number == f"A_B-{TODAY.year}-0001"


async def test_reload_failure_raises_not_found(session, monkeypatch) -> None:
    async def vanished(*args, **kwargs):
        return None

    monkeypatch.setattr(invoice_service, "get_invoice", vanished)
    with pytest.raises(ValueError, match="Invoice not found"):
        await invoice_service.create_invoice(session, _payload())
