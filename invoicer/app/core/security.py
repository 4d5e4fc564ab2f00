"""Credential store: password hashing and JWT token operations.

Tokens carry the user id (``sub``) and username plus issued-at and expiration
claims. Validation fails closed: a missing signing key, a bad signature, an
expired token, or malformed claims all raise ``InvalidTokenError``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from invoicer.app.core.errors import InvalidTokenError
from invoicer.app.core.settings import Settings, get_settings

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 12

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    username: str


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # passlib raises on hashes it cannot identify
        return False


def create_access_token(
    user_id: int,
    username: str,
    settings: Optional[Settings] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    settings = settings or get_settings()
    if not settings.secret_key:
        raise InvalidTokenError("Token signing key is not configured")
    now = datetime.now(timezone.utc)
    expire_delta = timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    payload = {"sub": str(user_id), "username": username, "iat": now, "exp": now + expire_delta}
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenPayload:
    settings = settings or get_settings()
    if not settings.secret_key:
        raise InvalidTokenError("Token signing key is not configured")
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Expired token") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Invalid token") from exc

    username = claims.get("username")
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid token") from exc
    if not isinstance(username, str) or not username:
        raise InvalidTokenError("Invalid token")
    return TokenPayload(user_id=user_id, username=username)
