"""CRUD operations for the business settings singleton."""

from sqlalchemy.orm import Session

from invoicer.app.db.session import atomic
from invoicer.app.models.business_settings import (
    SETTINGS_SINGLETON_ID,
    BusinessSettings,
    default_settings_values,
)
from invoicer.app.schemas.business_settings import BusinessSettingsUpdate


class CRUDBusinessSettings:
    def get(self, db: Session) -> BusinessSettings:
        """Return the singleton row, recreating it if the seeded row is missing."""
        settings = db.get(BusinessSettings, SETTINGS_SINGLETON_ID)
        if settings:
            return settings
        settings = BusinessSettings(id=SETTINGS_SINGLETON_ID, **default_settings_values())
        with atomic(db):
            db.add(settings)
        db.refresh(settings)
        return settings

    def update(self, db: Session, *, obj_in: BusinessSettingsUpdate) -> BusinessSettings:
        settings = self.get(db)
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)
        with atomic(db):
            for field, value in update_data.items():
                setattr(settings, field, value)
        db.refresh(settings)
        return settings


settings_crud = CRUDBusinessSettings()
