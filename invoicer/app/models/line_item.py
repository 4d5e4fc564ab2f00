from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from invoicer.app.db.base_class import Base


class LineItem(Base):
    __tablename__ = "line_items"
    __table_args__ = (CheckConstraint("hours >= 0", name="ck_line_items_hours"),)

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(1024), nullable=False)
    hours = Column(Numeric(10, 2), nullable=False)
    # 0-based position in the list the caller submitted
    order_index = Column(Integer, nullable=False)

    invoice = relationship("Invoice", back_populates="line_items")
