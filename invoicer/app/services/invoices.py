"""Invoice aggregate service.

The only entry points that create or mutate invoices. Each write runs the
client upsert, the invoice row write and the line item replacement inside one
transaction, and stores a total computed here from the line items and hourly
rate as stored (both rounded to cents). A ``total`` sent by the caller is ignored.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from invoicer.app.core.errors import InvalidArgumentError, NotFoundError
from invoicer.app.core.logging import get_logger
from invoicer.app.crud.crud_client import client_crud
from invoicer.app.crud.crud_invoice import invoice_crud
from invoicer.app.crud.crud_settings import settings_crud
from invoicer.app.db.session import atomic
from invoicer.app.models.business_settings import BusinessSettings
from invoicer.app.models.invoice import Invoice
from invoicer.app.models.line_item import LineItem
from invoicer.app.schemas.business_settings import BusinessSettingsRead
from invoicer.app.schemas.invoice import InvoiceDetailRead, InvoiceStatus, InvoiceWrite, LineItemIn

logger = get_logger(__name__)

CENT = Decimal("0.01")
DUPLICATE_NUMBER_MESSAGE = "Invoice number already exists"
DUPLICATE_CLIENT_MESSAGE = "A client with this name already exists"

# Unique violations are reported by constraint name (PostgreSQL) or by column list (SQLite)
INVOICE_CONFLICTS = {
    "uq_invoices_user_number": DUPLICATE_NUMBER_MESSAGE,
    "invoices.user_id, invoices.invoice_number": DUPLICATE_NUMBER_MESSAGE,
    "uq_clients_user_name": DUPLICATE_CLIENT_MESSAGE,
    "clients.user_id, clients.name": DUPLICATE_CLIENT_MESSAGE,
}
INVOICE_CONFLICT_MESSAGE = "Invoice conflicts with an existing record"


def to_cents(value: Decimal | float) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_invoice_total(line_items: Iterable, hourly_rate: Decimal | float) -> Decimal:
    """Sum of hours x hourly_rate over the items, rounded to cents."""
    rate = Decimal(str(hourly_rate))
    total = sum((Decimal(str(item.hours)) * rate for item in line_items), Decimal("0.00"))
    return to_cents(total)


def build_line_items(items: Sequence[LineItemIn]) -> List[LineItem]:
    """Turn submitted rows into LineItem objects, skipping blank rows.

    Hours are rounded to cents here, so the stored values are the ones the
    total is computed from.

    ``order_index`` is the row's position in the submitted list, so a dropped
    row leaves a gap rather than shifting the rows after it.
    """
    return [
        LineItem(description=item.description.strip(), hours=to_cents(item.hours), order_index=index)
        for index, item in enumerate(items)
        if not item.is_blank
    ]


def _resolve_hourly_rate(db: Session, payload: InvoiceWrite) -> Decimal:
    if payload.hourly_rate is not None:
        return to_cents(payload.hourly_rate)
    return to_cents(settings_crud.get(db).default_hourly_rate)


def _invoice_fields(payload: InvoiceWrite, hourly_rate: Decimal, line_items: List[LineItem]) -> dict:
    return {
        "invoice_number": payload.invoice_number,
        "client_name": payload.client_name,
        "client_address": payload.client_address,
        "invoice_date": payload.invoice_date,
        "due_date": payload.due_date,
        "payment_terms": payload.payment_terms,
        "hourly_rate": hourly_rate,
        "status": payload.status.value,
        "total": calculate_invoice_total(line_items, hourly_rate),
    }


def to_invoice_detail(invoice: Invoice, settings: BusinessSettings) -> InvoiceDetailRead:
    # Settings are the current ones, not a snapshot from when the invoice was saved
    detail = InvoiceDetailRead.model_validate(invoice)
    detail.settings = BusinessSettingsRead.model_validate(settings)
    return detail


def list_invoices(db: Session, user_id: int) -> List[Invoice]:
    return invoice_crud.get_multi(db, owner_id=user_id)


def get_invoice_detail(db: Session, invoice_id: int, user_id: int) -> Optional[InvoiceDetailRead]:
    invoice = invoice_crud.get_with_line_items(db, invoice_id=invoice_id, owner_id=user_id)
    if invoice is None:
        return None
    return to_invoice_detail(invoice, settings_crud.get(db))


def create_invoice(db: Session, user_id: int, payload: InvoiceWrite) -> InvoiceDetailRead:
    hourly_rate = _resolve_hourly_rate(db, payload)
    with atomic(db, conflict_message=INVOICE_CONFLICT_MESSAGE, conflict_messages=INVOICE_CONFLICTS):
        client_crud.upsert_by_name(
            db, name=payload.client_name, address=payload.client_address, owner_id=user_id
        )
        line_items = build_line_items(payload.line_items)
        invoice = invoice_crud.create(
            db,
            owner_id=user_id,
            fields=_invoice_fields(payload, hourly_rate, line_items),
            line_items=line_items,
        )
        invoice_id = invoice.id
    logger.info("Created invoice %s for user %s with %d line items", invoice_id, user_id, len(line_items))
    return get_invoice_detail(db, invoice_id, user_id)


def update_invoice(db: Session, invoice_id: int, user_id: int, payload: InvoiceWrite) -> InvoiceDetailRead:
    """Overwrite an invoice and replace all of its line items.

    Raises ``NotFoundError`` for missing or foreign invoices. On any failure
    the invoice is left exactly as it was before the call.
    """
    hourly_rate = _resolve_hourly_rate(db, payload)
    with atomic(db, conflict_message=INVOICE_CONFLICT_MESSAGE, conflict_messages=INVOICE_CONFLICTS):
        if invoice_crud.get(db, invoice_id=invoice_id, owner_id=user_id) is None:
            raise NotFoundError("Invoice not found")
        client_crud.upsert_by_name(
            db, name=payload.client_name, address=payload.client_address, owner_id=user_id
        )
        line_items = build_line_items(payload.line_items)
        invoice_crud.replace(
            db,
            invoice_id=invoice_id,
            owner_id=user_id,
            fields=_invoice_fields(payload, hourly_rate, line_items),
            line_items=line_items,
        )
    logger.info("Updated invoice %s for user %s with %d line items", invoice_id, user_id, len(line_items))
    return get_invoice_detail(db, invoice_id, user_id)


def change_invoice_status(
    db: Session, invoice_id: int, user_id: int, status: InvoiceStatus | str
) -> InvoiceDetailRead:
    """Resubmit the stored invoice with only its status changed."""
    try:
        new_status = InvoiceStatus(status)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid status: {status}") from exc

    invoice = invoice_crud.get_with_line_items(db, invoice_id=invoice_id, owner_id=user_id)
    if invoice is None:
        raise NotFoundError("Invoice not found")
    payload = InvoiceWrite(
        invoice_number=invoice.invoice_number,
        client_name=invoice.client_name,
        client_address=invoice.client_address,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        payment_terms=invoice.payment_terms,
        hourly_rate=invoice.hourly_rate,
        status=new_status,
        line_items=[LineItemIn(description=item.description, hours=item.hours) for item in invoice.line_items],
    )
    return update_invoice(db, invoice_id, user_id, payload)


def delete_invoice(db: Session, invoice_id: int, user_id: int) -> bool:
    deleted = invoice_crud.delete(db, invoice_id=invoice_id, owner_id=user_id)
    if deleted:
        logger.info("Deleted invoice %s for user %s", invoice_id, user_id)
    return deleted
