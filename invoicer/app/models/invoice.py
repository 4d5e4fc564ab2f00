"""Invoice model for hourly billing.

``client_name``/``client_address`` are a snapshot taken at save time and are
not linked to the clients table.
"""

from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from invoicer.app.core.time import utc_now
from invoicer.app.db.base_class import Base
from invoicer.app.models.line_item import LineItem

INVOICE_STATUSES = ("draft", "sent", "paid")


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("user_id", "invoice_number", name="uq_invoices_user_number"),
        CheckConstraint("status IN ('draft', 'sent', 'paid')", name="ck_invoices_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    invoice_number = Column(String(64), nullable=False)
    client_name = Column(String(255), nullable=False)
    client_address = Column(String(1024), nullable=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    payment_terms = Column(Text, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    status = Column(String(16), nullable=False, default="draft")
    total = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="invoices")
    line_items = relationship(
        "LineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=LineItem.order_index,
    )
