"""Signup, login and current-user endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invoicer.app.core.errors import AuthError
from invoicer.app.core.logging import get_logger
from invoicer.app.core.security import create_access_token, get_password_hash, verify_password
from invoicer.app.core.settings import Settings
from invoicer.app.crud.crud_user import user_crud
from invoicer.app.db.session import get_db
from invoicer.app.dependencies.auth import get_app_settings, get_current_user
from invoicer.app.models.user import User
from invoicer.app.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserRead

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_logger(__name__)


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    token = create_access_token(user.id, user.username, settings=settings)
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    hashed_password = get_password_hash(payload.password)  # Hash password before storing
    user = user_crud.create(db, username=payload.username, hashed_password=hashed_password)
    logger.info("User %s signed up", user.id)
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = user_crud.get_by_username(db, username=credentials.username)
    if not user or not verify_password(credentials.password, user.hashed_password):
        raise AuthError("Invalid username or password")
    return _auth_response(user, settings)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
