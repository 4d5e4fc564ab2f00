from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BusinessSettingsBase(BaseModel):
    your_name: str
    business_name: str
    business_address: str
    default_hourly_rate: float
    ach_account: str
    ach_routing: str
    zelle_contact: str


class BusinessSettingsRead(BusinessSettingsBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BusinessSettingsUpdate(BaseModel):
    your_name: str | None = None
    business_name: str | None = None
    business_address: str | None = None
    default_hourly_rate: Decimal | None = Field(default=None, ge=0)
    ach_account: str | None = None
    ach_routing: str | None = None
    zelle_contact: str | None = None
