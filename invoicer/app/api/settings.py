from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invoicer.app.crud.crud_settings import settings_crud
from invoicer.app.db.session import get_db
from invoicer.app.dependencies.auth import get_current_user
from invoicer.app.models.user import User
from invoicer.app.schemas.business_settings import BusinessSettingsRead, BusinessSettingsUpdate

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=BusinessSettingsRead)
def get_business_settings(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return settings_crud.get(db)


@router.put("", response_model=BusinessSettingsRead)
def update_business_settings(
    payload: BusinessSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return settings_crud.update(db, obj_in=payload)
