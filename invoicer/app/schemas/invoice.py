"""Invoice and line item schemas."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from invoicer.app.schemas.business_settings import BusinessSettingsRead


class InvoiceStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    paid = "paid"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LineItemIn(BaseModel):
    description: Optional[str] = None
    hours: Optional[Decimal] = None

    @field_validator("hours", mode="before")
    @classmethod
    def blank_hours_missing(cls, value):
        return _blank_to_none(value)

    @field_validator("hours")
    @classmethod
    def hours_not_negative(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value < 0:
            raise ValueError("Line item hours cannot be negative")
        return value

    @property
    def is_blank(self) -> bool:
        """Rows without a description or hours are dropped on save."""
        return self.hours is None or not (self.description or "").strip()


class InvoiceWrite(BaseModel):
    """Body of POST /api/invoices and PUT /api/invoices/{id}."""

    invoice_number: str
    client_name: str
    client_address: Optional[str] = None
    invoice_date: date
    due_date: Optional[date] = None
    payment_terms: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0)
    status: InvoiceStatus = InvoiceStatus.draft
    # Accepted for compatibility with older clients; the stored total is recomputed
    total: Optional[Decimal] = None
    line_items: List[LineItemIn] = Field(default_factory=list)

    @field_validator("client_address", "due_date", "payment_terms", "hourly_rate", "total", mode="before")
    @classmethod
    def blank_optionals_missing(cls, value):
        return _blank_to_none(value)

    @field_validator("invoice_number", "client_name")
    @classmethod
    def required_text(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        if value is None or value == "":
            return InvoiceStatus.draft
        return value


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class LineItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    description: str
    hours: float
    order_index: int


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    invoice_number: str
    client_name: str
    client_address: Optional[str] = None
    invoice_date: date
    due_date: Optional[date] = None
    payment_terms: Optional[str] = None
    hourly_rate: float
    status: str
    total: float
    created_at: datetime
    updated_at: datetime


class InvoiceDetailRead(InvoiceRead):
    """An invoice with its ordered line items and the current business settings."""

    line_items: List[LineItemRead] = Field(default_factory=list)
    settings: Optional[BusinessSettingsRead] = None
