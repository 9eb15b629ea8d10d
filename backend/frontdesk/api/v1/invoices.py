"""Invoice API endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated, Iterable, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api import deps
from frontdesk.core.settings import get_invoice_defaults
from frontdesk.models import Invoice
from frontdesk.models.invoice import InvoiceStatus, PaymentStatus
from frontdesk.schemas.invoice import (
    GSTBucketRead,
    InvoiceCalculationRead,
    InvoiceCreate,
    InvoiceDraft,
    InvoiceListResponse,
    InvoiceRead,
    InvoiceSummaryRead,
    LineCalculationRead,
    PaymentCreate,
    PaymentRead,
    PaymentRecorded,
)
from frontdesk.services import invoice_service
from frontdesk.services.currency import format_currency, number_to_words
from frontdesk.services.invoice_calculations import (
    LineItemLike,
    calculate_gst_breakdown,
    calculate_invoice_total,
    is_invoice_overdue,
    validate_invoice,
)

router = APIRouter(prefix="/invoices")


def _gst_rows(line_items: Iterable[LineItemLike]) -> list[GSTBucketRead]:
    return [
        GSTBucketRead(
            tax_rate=rate,
            taxable_amount=bucket.taxable_amount,
            tax_amount=bucket.tax_amount,
        )
        for rate, bucket in calculate_gst_breakdown(line_items).items()
    ]


def _invoice_read(invoice: Invoice) -> InvoiceRead:
    read = InvoiceRead.model_validate(invoice)
    return read.model_copy(
        update={
            "gst_breakdown": _gst_rows(invoice.line_items),
            "amount_in_words": number_to_words(invoice.total_amount),
            "is_overdue": is_invoice_overdue(invoice.due_date, invoice.payment_status),
        }
    )


def _raise_for(exc: ValueError) -> NoReturn:
    if isinstance(exc, invoice_service.InvoiceValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": exc.errors},
        ) from exc
    code = (
        status.HTTP_404_NOT_FOUND
        if str(exc).endswith("not found")
        else status.HTTP_400_BAD_REQUEST
    )
    raise HTTPException(status_code=code, detail=str(exc)) from exc


@router.post(
    "/calculate",
    response_model=InvoiceCalculationRead,
    summary="Preview invoice totals",
)
async def calculate_invoice(
    payload: InvoiceDraft,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> InvoiceCalculationRead:
    """Compute totals for a draft; problems are reported, never rejected."""
    gst_rate = await invoice_service.default_gst_rate(session)
    draft = payload.model_copy(
        update={
            "line_items": invoice_service.apply_line_defaults(
                payload.line_items, gst_rate
            )
        }
    )
    calculation = calculate_invoice_total(draft.line_items)
    return InvoiceCalculationRead(
        subtotal=calculation.subtotal,
        total_tax=calculation.total_tax,
        total_discount=calculation.total_discount,
        total_amount=calculation.total_amount,
        line_items=[
            LineCalculationRead.model_validate(line) for line in calculation.line_items
        ],
        gst_breakdown=_gst_rows(draft.line_items),
        amount_in_words=number_to_words(calculation.total_amount),
        formatted_total=format_currency(
            calculation.total_amount,
            draft.currency or get_invoice_defaults().default_currency,
        ),
        errors=validate_invoice(draft),
    )


@router.get("", response_model=InvoiceListResponse, summary="List invoices")
async def list_invoices(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    status_filter: InvoiceStatus | None = Query(default=None, alias="status"),
    payment_status: PaymentStatus | None = Query(default=None),
    customer_id: uuid.UUID | None = Query(default=None),
    limit: int = Query(default=20, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    search: str | None = Query(default=None, alias="q"),
) -> InvoiceListResponse:
    invoices, total = await invoice_service.search_invoices(
        session,
        status=status_filter,
        payment_status=payment_status,
        customer_id=customer_id,
        date_from=date_from,
        date_to=date_to,
        query=search.strip() if search else None,
        limit=limit,
        offset=offset,
    )
    return InvoiceListResponse(
        items=[InvoiceSummaryRead.model_validate(inv) for inv in invoices],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post(
    "",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create invoice",
)
async def create_invoice(
    payload: InvoiceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor_id: Annotated[str | None, Depends(deps.get_actor_id)],
) -> InvoiceRead:
    try:
        invoice = await invoice_service.create_invoice(
            session, payload, created_by=actor_id
        )
    except ValueError as exc:
        _raise_for(exc)
    return _invoice_read(invoice)


@router.get("/{invoice_id}", response_model=InvoiceRead, summary="Get invoice")
async def get_invoice(
    invoice_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> InvoiceRead:
    invoice = await invoice_service.get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found"
        )
    return _invoice_read(invoice)


@router.put("/{invoice_id}", response_model=InvoiceRead, summary="Update invoice")
async def update_invoice(
    invoice_id: uuid.UUID,
    payload: InvoiceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> InvoiceRead:
    try:
        invoice = await invoice_service.update_invoice(
            session, invoice_id=invoice_id, payload=payload
        )
    except ValueError as exc:
        _raise_for(exc)
    return _invoice_read(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete invoice",
)
async def delete_invoice(
    invoice_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        await invoice_service.delete_invoice(session, invoice_id=invoice_id)
    except ValueError as exc:
        _raise_for(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/payments",
    response_model=list[PaymentRead],
    summary="List invoice payments",
)
async def list_payments(
    invoice_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[PaymentRead]:
    try:
        payments = await invoice_service.list_payments(session, invoice_id=invoice_id)
    except ValueError as exc:
        _raise_for(exc)
    return [PaymentRead.model_validate(payment) for payment in payments]


@router.post(
    "/{invoice_id}/payments",
    response_model=PaymentRecorded,
    status_code=status.HTTP_201_CREATED,
    summary="Record payment",
)
async def record_payment(
    invoice_id: uuid.UUID,
    payload: PaymentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor_id: Annotated[str | None, Depends(deps.get_actor_id)],
) -> PaymentRecorded:
    try:
        payment, invoice = await invoice_service.record_payment(
            session, invoice_id=invoice_id, payload=payload, created_by=actor_id
        )
    except ValueError as exc:
        _raise_for(exc)
    return PaymentRecorded(
        payment=PaymentRead.model_validate(payment),
        paid_amount=invoice.paid_amount,
        balance_amount=invoice.balance_amount,
        payment_status=invoice.payment_status,
    )


@router.put(
    "/{invoice_id}/payments/{payment_id}",
    response_model=PaymentRecorded,
    summary="Update payment",
)
async def update_payment(
    invoice_id: uuid.UUID,
    payment_id: uuid.UUID,
    payload: PaymentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PaymentRecorded:
    try:
        payment, invoice = await invoice_service.update_payment(
            session, invoice_id=invoice_id, payment_id=payment_id, payload=payload
        )
    except ValueError as exc:
        _raise_for(exc)
    return PaymentRecorded(
        payment=PaymentRead.model_validate(payment),
        paid_amount=invoice.paid_amount,
        balance_amount=invoice.balance_amount,
        payment_status=invoice.payment_status,
    )


@router.delete(
    "/{invoice_id}/payments/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete payment",
)
async def delete_payment(
    invoice_id: uuid.UUID,
    payment_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        await invoice_service.delete_payment(
            session, invoice_id=invoice_id, payment_id=payment_id
        )
    except ValueError as exc:
        _raise_for(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
