"""Business settings printed on every invoice.

Exactly one row exists per deployment; it is seeded by migration and only
ever updated.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String

from invoicer.app.core.time import utc_now
from invoicer.app.db.base_class import Base

SETTINGS_SINGLETON_ID = 1
DEFAULT_HOURLY_RATE = Decimal("150.00")


def default_settings_values() -> dict:
    return {
        "your_name": "",
        "business_name": "",
        "business_address": "",
        "default_hourly_rate": DEFAULT_HOURLY_RATE,
        "ach_account": "",
        "ach_routing": "",
        "zelle_contact": "",
    }


class BusinessSettings(Base):
    __tablename__ = "settings"
    __table_args__ = (CheckConstraint(f"id = {SETTINGS_SINGLETON_ID}", name="ck_settings_singleton"),)

    id = Column(Integer, primary_key=True, default=SETTINGS_SINGLETON_ID)
    your_name = Column(String(255), nullable=False, default="")
    business_name = Column(String(255), nullable=False, default="")
    business_address = Column(String(1024), nullable=False, default="")
    default_hourly_rate = Column(Numeric(10, 2), nullable=False, default=DEFAULT_HOURLY_RATE)
    ach_account = Column(String(64), nullable=False, default="")
    ach_routing = Column(String(64), nullable=False, default="")
    zelle_contact = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
