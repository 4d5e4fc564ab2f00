"""Authentication dependencies for retrieving the current user."""

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from invoicer.app.core.errors import AuthError, InvalidTokenError
from invoicer.app.core.logging import get_logger
from invoicer.app.core.security import decode_access_token
from invoicer.app.core.settings import Settings
from invoicer.app.crud.crud_user import user_crud
from invoicer.app.db.session import get_db
from invoicer.app.models.user import User

logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    authorization: str | None = Header(default=None),
) -> User:
    # Expect Authorization: Bearer <token>
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("No token provided")
    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = decode_access_token(token, settings=settings)
    except InvalidTokenError as exc:
        logger.warning("Rejected bearer token: %s", exc.message)
        raise

    user = user_crud.get(db, user_id=payload.user_id)
    if not user:
        # Token outlived its user
        raise AuthError("User not found")
    return user
