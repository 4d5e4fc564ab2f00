from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from invoicer.app.core.time import utc_now
from invoicer.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Unique constraint, not a pre-check, decides signup races; comparison is case-sensitive
    username = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    clients = relationship("Client", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    invoices = relationship("Invoice", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
