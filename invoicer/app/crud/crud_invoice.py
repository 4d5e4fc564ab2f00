"""CRUD operations for invoices and their line items.

Every query filters on ``user_id``; an invoice owned by someone else is
indistinguishable from one that does not exist. ``create`` and ``replace``
only flush: the invoice service wraps them in a single transaction.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from invoicer.app.core.time import utc_now
from invoicer.app.db.session import atomic
from invoicer.app.models.invoice import Invoice
from invoicer.app.models.line_item import LineItem


class CRUDInvoice:
    def get(self, db: Session, *, invoice_id: int, owner_id: int) -> Optional[Invoice]:
        return db.query(Invoice).filter(Invoice.id == invoice_id, Invoice.user_id == owner_id).first()

    def get_with_line_items(self, db: Session, *, invoice_id: int, owner_id: int) -> Optional[Invoice]:
        return (
            db.query(Invoice)
            .options(selectinload(Invoice.line_items))
            .filter(Invoice.id == invoice_id, Invoice.user_id == owner_id)
            .first()
        )

    def get_multi(self, db: Session, *, owner_id: int) -> List[Invoice]:
        return (
            db.query(Invoice)
            .filter(Invoice.user_id == owner_id)
            .order_by(Invoice.created_at.desc(), Invoice.id.desc())
            .all()
        )

    def create(
        self, db: Session, *, owner_id: int, fields: Dict[str, Any], line_items: List[LineItem]
    ) -> Invoice:
        invoice = Invoice(user_id=owner_id, **fields)
        invoice.line_items = line_items
        db.add(invoice)
        db.flush()
        return invoice

    def replace(
        self,
        db: Session,
        *,
        invoice_id: int,
        owner_id: int,
        fields: Dict[str, Any],
        line_items: List[LineItem],
    ) -> Optional[Invoice]:
        """Overwrite the invoice row and swap its whole line item set."""
        invoice = self.get(db, invoice_id=invoice_id, owner_id=owner_id)
        if not invoice:
            return None
        for field, value in fields.items():
            setattr(invoice, field, value)
        invoice.updated_at = utc_now()

        invoice.line_items.clear()
        db.flush()  # old rows are deleted before the new set is inserted
        invoice.line_items.extend(line_items)
        db.flush()
        return invoice

    def delete(self, db: Session, *, invoice_id: int, owner_id: int) -> bool:
        # Bulk delete: line_items go through the ON DELETE CASCADE foreign key
        with atomic(db):
            removed = (
                db.query(Invoice)
                .filter(Invoice.id == invoice_id, Invoice.user_id == owner_id)
                .delete(synchronize_session=False)
            )
        return removed > 0


invoice_crud = CRUDInvoice()
