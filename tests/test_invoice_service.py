from datetime import date
from decimal import Decimal

import pytest

from invoicer.app.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from invoicer.app.models.client import Client
from invoicer.app.models.invoice import Invoice
from invoicer.app.models.line_item import LineItem
from invoicer.app.schemas.invoice import InvoiceWrite, LineItemIn
from invoicer.app.services import invoices as invoice_service


def make_payload(**overrides) -> InvoiceWrite:
    data = {
        "invoice_number": "INV-001",
        "client_name": "Acme",
        "invoice_date": date(2024, 1, 15),
        "hourly_rate": Decimal("100"),
        "line_items": [
            LineItemIn(description="Design", hours=Decimal("5")),
            LineItemIn(description="Build", hours=Decimal("10")),
        ],
    }
    data.update(overrides)
    return InvoiceWrite(**data)


def test_calculate_invoice_total_rounds_to_cents():
    items = [LineItemIn(description="a", hours=Decimal("1.333")), LineItemIn(description="b", hours=Decimal("2"))]
    assert invoice_service.calculate_invoice_total(items, Decimal("10")) == Decimal("33.33")
    assert invoice_service.calculate_invoice_total([], Decimal("10")) == Decimal("0.00")


def test_build_line_items_skips_blank_rows_and_keeps_positions():
    items = invoice_service.build_line_items(
        [
            LineItemIn(description="  Design ", hours=Decimal("1")),
            LineItemIn(description="", hours=Decimal("2")),
            LineItemIn(description="Zero hours", hours=Decimal("0")),
        ]
    )
    assert [(item.description, item.order_index) for item in items] == [("Design", 0), ("Zero hours", 2)]


def test_create_invoice_returns_aggregate_with_settings(db, make_user):
    user = make_user()
    detail = invoice_service.create_invoice(db, user.id, make_payload(total=Decimal("1")))
    assert detail.total == 1500
    assert detail.status == "draft"
    assert [item.order_index for item in detail.line_items] == [0, 1]
    assert detail.settings is not None and detail.settings.id == 1


def test_create_duplicate_number_raises_conflict_and_rolls_back(db, make_user):
    user = make_user()
    invoice_service.create_invoice(db, user.id, make_payload())
    with pytest.raises(ConflictError):
        invoice_service.create_invoice(db, user.id, make_payload(client_name="Globex"))
    assert db.query(Invoice).count() == 1
    assert db.query(Client).filter(Client.name == "Globex").count() == 0


def test_update_failure_after_line_item_delete_leaves_invoice_intact(db, make_user, monkeypatch):
    user = make_user()
    created = invoice_service.create_invoice(db, user.id, make_payload())

    original_replace = invoice_service.invoice_crud.replace

    def replace_then_fail(*args, **kwargs):
        original_replace(*args, **kwargs)
        raise RuntimeError("store went away")

    monkeypatch.setattr(invoice_service.invoice_crud, "replace", replace_then_fail)
    with pytest.raises(RuntimeError):
        invoice_service.update_invoice(
            db,
            created.id,
            user.id,
            make_payload(
                invoice_number="INV-999",
                client_name="Globex",
                status="paid",
                line_items=[LineItemIn(description="Other", hours=Decimal("1"))],
            ),
        )
    monkeypatch.undo()

    db.expire_all()
    invoice = db.get(Invoice, created.id)
    assert invoice.invoice_number == "INV-001"
    assert invoice.status == "draft"
    assert [item.description for item in invoice.line_items] == ["Design", "Build"]
    assert db.query(Client).filter(Client.name == "Globex").count() == 0


def test_update_unknown_invoice_raises_not_found(db, make_user):
    user = make_user()
    with pytest.raises(NotFoundError):
        invoice_service.update_invoice(db, 12345, user.id, make_payload())
    assert db.query(Client).count() == 0


def test_update_foreign_invoice_raises_not_found(db, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    created = invoice_service.create_invoice(db, alice.id, make_payload())
    with pytest.raises(NotFoundError):
        invoice_service.update_invoice(db, created.id, bob.id, make_payload(status="paid"))


def test_change_status_keeps_everything_else(db, make_user):
    user = make_user()
    created = invoice_service.create_invoice(db, user.id, make_payload(payment_terms="Net 30"))
    detail = invoice_service.change_invoice_status(db, created.id, user.id, "sent")
    assert detail.status == "sent"
    assert detail.payment_terms == "Net 30"
    assert detail.total == 1500
    assert [item.description for item in detail.line_items] == ["Design", "Build"]


def test_change_status_rejects_unknown_value(db, make_user):
    user = make_user()
    created = invoice_service.create_invoice(db, user.id, make_payload())
    with pytest.raises(InvalidArgumentError):
        invoice_service.change_invoice_status(db, created.id, user.id, "overdue")


def test_delete_invoice_cascades_to_line_items(db, make_user):
    user = make_user()
    created = invoice_service.create_invoice(db, user.id, make_payload())
    assert db.query(LineItem).filter(LineItem.invoice_id == created.id).count() == 2

    assert invoice_service.delete_invoice(db, created.id, user.id) is True
    db.expire_all()
    assert db.query(LineItem).filter(LineItem.invoice_id == created.id).count() == 0
    assert invoice_service.delete_invoice(db, created.id, user.id) is False


def test_get_invoice_detail_orders_line_items_by_index(db, make_user):
    user = make_user()
    items = [LineItemIn(description=f"Task {n}", hours=Decimal(n)) for n in range(5)]
    created = invoice_service.create_invoice(db, user.id, make_payload(line_items=items))
    detail = invoice_service.get_invoice_detail(db, created.id, user.id)
    assert [item.description for item in detail.line_items] == [f"Task {n}" for n in range(5)]
    assert [item.order_index for item in detail.line_items] == list(range(5))


def test_fractional_hours_are_stored_and_totalled_in_cents(db, make_user):
    user = make_user()
    created = invoice_service.create_invoice(
        db, user.id, make_payload(line_items=[LineItemIn(description="Call", hours=Decimal("0.333"))])
    )
    assert [item.hours for item in created.line_items] == [0.33]
    assert created.total == 33.0

    detail = invoice_service.change_invoice_status(db, created.id, user.id, "sent")
    assert detail.status == "sent"
    assert detail.total == created.total

    db.expire_all()
    invoice = db.get(Invoice, created.id)
    stored = sum(item.hours * invoice.hourly_rate for item in invoice.line_items)
    assert invoice.total == stored


def test_fractional_rate_is_stored_and_totalled_in_cents(db, make_user):
    user = make_user()
    created = invoice_service.create_invoice(
        db,
        user.id,
        make_payload(
            hourly_rate=Decimal("33.333"),
            line_items=[LineItemIn(description="Support", hours=Decimal("3"))],
        ),
    )
    assert created.hourly_rate == 33.33
    assert created.total == 99.99

    detail = invoice_service.change_invoice_status(db, created.id, user.id, "paid")
    assert detail.total == 99.99


def test_duplicate_client_insert_reports_client_conflict(db, make_user, monkeypatch):
    user = make_user()
    invoice_service.create_invoice(db, user.id, make_payload())

    def insert_without_lookup(db, *, name, address, owner_id):
        # Another request created the same client between lookup and insert
        db.add(Client(user_id=owner_id, name=name, address=address))
        db.flush()

    monkeypatch.setattr(invoice_service.client_crud, "upsert_by_name", insert_without_lookup)
    with pytest.raises(ConflictError) as excinfo:
        invoice_service.create_invoice(db, user.id, make_payload(invoice_number="INV-002"))
    assert excinfo.value.message == "A client with this name already exists"
    assert db.query(Invoice).count() == 1


def test_duplicate_number_reports_number_conflict(db, make_user):
    user = make_user()
    invoice_service.create_invoice(db, user.id, make_payload())
    with pytest.raises(ConflictError) as excinfo:
        invoice_service.create_invoice(db, user.id, make_payload())
    assert excinfo.value.message == "Invoice number already exists"
